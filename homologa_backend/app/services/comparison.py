import logging
from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.core.errors import ValidationError
from app.models.category import Category, CourseStatus
from app.models.curriculum import Curriculum
from app.models.subject import Subject
from app.schemas.comparison import (
    ComparisonResult,
    ComparisonSummary,
    CompareTextResponse,
    CreditsSummary,
    CreditTypeInfo,
    CurriculumInfo,
    EquivalenceInfo,
    SubjectResult,
)
from app.schemas.history import CourseRecord
from app.services.curricula import (
    get_curriculum,
    get_curriculum_by_program_code,
    get_curriculum_subjects,
)
from app.services.equivalences import EquivalenceLookup, resolve_equivalences
from app.services.transcript_parser import parse_transcript_text

logger = logging.getLogger("app.comparison")

SATISFIED = "APROBADA"
MISSING = "PENDIENTE"


def approved_codes(records: Iterable[CourseRecord], approved_only: bool = True) -> set[str]:
    codes = set()
    for record in records:
        code = record.code.strip()
        if not code:
            continue
        if approved_only and record.status is not CourseStatus.APPROVED:
            continue
        codes.add(code)
    return codes


def compare_history(
    curriculum: Curriculum,
    subjects: Sequence[Subject],
    lookup: EquivalenceLookup,
    records: Iterable[CourseRecord],
    approved_only: bool = True,
) -> ComparisonResult:
    """Classify every curriculum subject as satisfied or missing.

    A subject is satisfied when its code was approved, or when any of its
    equivalents was; equivalents are tried in lookup order and the first
    approved one is reported as provenance. Credits of satisfied subjects are
    totalled per category and missing credits never go below zero.
    """
    approved = approved_codes(records, approved_only)
    completed = dict.fromkeys(Category.choices(), 0)
    satisfied_subjects: list[SubjectResult] = []
    missing_subjects: list[SubjectResult] = []

    for subject in subjects:
        equivalence = None
        satisfied = subject.code in approved
        if not satisfied:
            for equivalent in lookup.get(subject.code, ()):
                if equivalent.code in approved:
                    satisfied = True
                    equivalence = EquivalenceInfo(
                        kind=equivalent.kind,
                        notes=_equivalence_note(equivalent.code, equivalent.notes),
                    )
                    break

        category = Category.parse(subject.category)
        result = SubjectResult(
            code=subject.code,
            name=subject.name,
            credits=subject.credits,
            category=category,
            status=SATISFIED if satisfied else MISSING,
            equivalence=equivalence,
        )
        if satisfied:
            satisfied_subjects.append(result)
            if category.is_valid():
                completed[category] += subject.credits
        else:
            missing_subjects.append(result)

    credits_summary = CreditsSummary()
    for category, required in curriculum.required_credits().items():
        setattr(credits_summary, category.name.lower(), _credit_row(required, completed[category]))
    total_completed = sum(completed.values())
    total_required = curriculum.total_credits or 0
    credits_summary.total = _credit_row(total_required, total_completed)

    percentage = 0.0
    if total_required:
        percentage = total_completed / total_required * 100

    return ComparisonResult(
        curriculum=_curriculum_info(curriculum),
        equivalent_subjects=satisfied_subjects,
        missing_subjects=missing_subjects,
        total_credits=total_completed,
        missing_credits=credits_summary.total.missing,
        credits_summary=credits_summary,
        summary=ComparisonSummary(
            total_subjects_in_plan=len(satisfied_subjects) + len(missing_subjects),
            approved_subjects=len(satisfied_subjects),
            missing_subjects=len(missing_subjects),
            completion_percentage=percentage,
        ),
    )


def compare_history_to_curriculum(
    db: Session,
    records: Iterable[CourseRecord],
    curriculum_id: int | None = None,
    program_code: str | None = None,
    approved_only: bool = True,
) -> ComparisonResult:
    if curriculum_id is not None:
        curriculum = get_curriculum(db, curriculum_id)
    elif program_code:
        curriculum = get_curriculum_by_program_code(db, program_code)
    else:
        raise ValidationError("curriculum_id or program_code is required")

    subjects = get_curriculum_subjects(db, curriculum.id)
    lookup = resolve_equivalences(db, curriculum, subjects)
    result = compare_history(curriculum, subjects, lookup, records, approved_only)
    logger.info(
        "compared history against curriculum %s: %d/%d subjects satisfied",
        curriculum.id,
        result.summary.approved_subjects,
        result.summary.total_subjects_in_plan,
    )
    return result


def compare_transcript_text(db: Session, text: str, program_code: str) -> CompareTextResponse:
    records = parse_transcript_text(text)
    comparison = compare_history_to_curriculum(db, records, program_code=program_code)
    return CompareTextResponse(parsed_courses=records, comparison=comparison)


def _credit_row(required: int, completed: int) -> CreditTypeInfo:
    return CreditTypeInfo(
        required=required,
        completed=completed,
        missing=max(0, required - completed),
    )


def _equivalence_note(code: str, stored_notes: str) -> str:
    note = f"Approved via equivalence with {code}"
    if stored_notes:
        note = f"{note} ({stored_notes})"
    return note


def _curriculum_info(curriculum: Curriculum) -> CurriculumInfo:
    program = curriculum.program
    return CurriculumInfo(
        id=curriculum.id,
        version=curriculum.version,
        program_code=program.code if program is not None else None,
        program_name=program.name if program is not None else None,
    )
