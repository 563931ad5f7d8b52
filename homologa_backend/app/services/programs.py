import logging

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.curriculum import Curriculum
from app.models.equivalence import Equivalence
from app.models.program import Program
from app.models.subject import Subject
from app.schemas.program import (
    CurriculumCreateRequest,
    EquivalenceCreateRequest,
    ProgramCreateRequest,
    SubjectCreate,
)

logger = logging.getLogger("app.programs")

_INITIAL_PROGRAMS = [
    ProgramCreateRequest(
        code="ISIS",
        name="Ingeniería de Sistemas",
        description="Carrera de Ingeniería de Sistemas",
    ),
    ProgramCreateRequest(
        code="IADM",
        name="Ingeniería Administrativa",
        description="Carrera de Ingeniería Administrativa",
    ),
]


def create_program(db: Session, payload: ProgramCreateRequest) -> Program:
    if db.query(Program).filter(Program.code == payload.code).first() is not None:
        raise ValidationError(f"Program with code '{payload.code}' already exists.")
    program = Program(**payload.model_dump())
    db.add(program)
    db.commit()
    db.refresh(program)
    return program


def create_curriculum(db: Session, payload: CurriculumCreateRequest) -> Curriculum:
    """Create an active curriculum with its subjects in one transaction."""
    program = db.query(Program).filter(Program.code == payload.program_code).first()
    if program is None:
        raise ValidationError(f"Program '{payload.program_code}' not found.")
    duplicate = (
        db.query(Curriculum)
        .filter(Curriculum.program_id == program.id, Curriculum.version == payload.version)
        .first()
    )
    if duplicate is not None:
        raise ValidationError(
            f"Curriculum version '{payload.version}' already exists for {program.code}."
        )

    targets = payload.model_dump(exclude={"program_code", "version", "total_credits", "subjects"})
    total = payload.total_credits
    if total is None:
        total = sum(targets.values())
    curriculum = Curriculum(
        program_id=program.id,
        version=payload.version,
        is_active=True,
        total_credits=total,
        **targets,
    )
    db.add(curriculum)
    try:
        for item in payload.subjects:
            curriculum.subjects.append(_new_subject(db, item))
        db.commit()
    except ValidationError:
        db.rollback()
        raise
    db.refresh(curriculum)
    logger.info(
        "created curriculum %s v%s with %d subject(s)",
        program.code,
        curriculum.version,
        len(payload.subjects),
    )
    return curriculum


def create_equivalence(db: Session, payload: EquivalenceCreateRequest) -> Equivalence:
    program = db.query(Program).filter(Program.code == payload.program_code).first()
    if program is None:
        raise ValidationError(f"Program '{payload.program_code}' not found.")
    target = db.query(Subject).filter(Subject.code == payload.target_subject_code).first()
    if target is None:
        raise ValidationError(f"Target subject '{payload.target_subject_code}' not found.")

    # An existing source subject is reused as is
    source = db.query(Subject).filter(Subject.code == payload.source.code).first()
    if source is None:
        source = _new_subject(db, payload.source)

    equivalence = Equivalence(
        source_subject_id=source.id,
        target_subject_id=target.id,
        kind=payload.kind,
        notes=payload.notes,
        program_id=program.id,
    )
    db.add(equivalence)
    db.commit()
    db.refresh(equivalence)
    return equivalence


def seed_initial_data(db: Session) -> list[Program]:
    if db.query(Program).count() > 0:
        logger.info("programs already present, skipping seed")
        return []
    created = [create_program(db, payload) for payload in _INITIAL_PROGRAMS]
    logger.info("seeded %d program(s)", len(created))
    return created


def _new_subject(db: Session, item: SubjectCreate) -> Subject:
    if db.query(Subject).filter(Subject.code == item.code).first() is not None:
        raise ValidationError(f"Subject with code '{item.code}' already exists.")
    subject = Subject(
        code=item.code,
        name=item.name,
        credits=item.credits,
        category=item.category.value,
        description=item.description,
    )
    db.add(subject)
    db.flush()
    return subject
