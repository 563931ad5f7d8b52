import logging
from typing import NamedTuple

from sqlalchemy.orm import Session, aliased, joinedload

from app.core.errors import CurriculumNotFoundError
from app.models.category import Category
from app.models.curriculum import Curriculum
from app.models.equivalence import Equivalence
from app.models.program import Program
from app.models.subject import Subject
from app.schemas.program import CurriculumOverview, CurriculumResponse, SubjectResponse

logger = logging.getLogger("app.curricula")


class EquivalenceRow(NamedTuple):
    source_code: str
    target_code: str
    kind: str
    notes: str
    program_id: int


def get_curriculum(db: Session, curriculum_id: int) -> Curriculum:
    curriculum = (
        db.query(Curriculum)
        .options(joinedload(Curriculum.program))
        .filter(Curriculum.id == curriculum_id)
        .first()
    )
    if curriculum is None:
        logger.warning("curriculum %s not found", curriculum_id)
        raise CurriculumNotFoundError(curriculum_id)
    return curriculum


def get_curriculum_by_program_code(db: Session, program_code: str) -> Curriculum:
    """Return the active curriculum of a program (lowest id if several are active)."""
    curriculum = (
        db.query(Curriculum)
        .options(joinedload(Curriculum.program))
        .join(Program, Program.id == Curriculum.program_id)
        .filter(Program.code == program_code, Curriculum.is_active.is_(True))
        .order_by(Curriculum.id)
        .first()
    )
    if curriculum is None:
        logger.warning("no active curriculum for program %r", program_code)
        raise CurriculumNotFoundError(program_code)
    return curriculum


def get_curriculum_subjects(db: Session, curriculum_id: int) -> list[Subject]:
    return (
        db.query(Subject)
        .filter(Subject.curriculum_id == curriculum_id)
        .order_by(Subject.id)
        .all()
    )


def get_equivalences(db: Session, program_id: int) -> list[EquivalenceRow]:
    source = aliased(Subject)
    target = aliased(Subject)
    rows = (
        db.query(Equivalence, source.code, target.code)
        .join(source, source.id == Equivalence.source_subject_id)
        .join(target, target.id == Equivalence.target_subject_id)
        .filter(Equivalence.program_id == program_id)
        .order_by(Equivalence.id)
        .all()
    )
    return [
        EquivalenceRow(
            source_code=source_code,
            target_code=target_code,
            kind=equivalence.kind or "total",
            notes=equivalence.notes or "",
            program_id=equivalence.program_id,
        )
        for equivalence, source_code, target_code in rows
    ]


def list_programs(db: Session) -> list[Program]:
    return db.query(Program).order_by(Program.code.asc()).all()


def list_curricula(db: Session, program_code: str) -> list[Curriculum]:
    curricula = (
        db.query(Curriculum)
        .join(Program, Program.id == Curriculum.program_id)
        .filter(Program.code == program_code)
        .order_by(Curriculum.id)
        .all()
    )
    if not curricula:
        raise CurriculumNotFoundError(program_code)
    return curricula


def get_curriculum_overview(db: Session, curriculum_id: int) -> CurriculumOverview:
    curriculum = get_curriculum(db, curriculum_id)
    subjects = get_curriculum_subjects(db, curriculum_id)

    subjects_by_category: dict[str, list[SubjectResponse]] = {}
    credits_by_category: dict[str, int] = {}
    for subject in subjects:
        label = Category.parse(subject.category).value
        subjects_by_category.setdefault(label, []).append(SubjectResponse.model_validate(subject))
        credits_by_category[label] = credits_by_category.get(label, 0) + subject.credits

    return CurriculumOverview(
        curriculum=CurriculumResponse.model_validate(curriculum),
        program_code=curriculum.program.code,
        program_name=curriculum.program.name,
        subjects_by_category=subjects_by_category,
        credits_by_category=credits_by_category,
        total_subjects=len(subjects),
    )
