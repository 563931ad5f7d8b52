"""Dual-degree homologation.

A student already enrolled in a second program (the "dual" history) wants to
know which subjects of the target curriculum can be credited from the first
program (the "origin" history) without crediting anything twice.
"""
import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.models.category import Category, CourseStatus
from app.models.curriculum import Curriculum
from app.models.subject import Subject
from app.schemas.comparison import EquivalenceInfo
from app.schemas.dual_degree import DualDegreeResult, DualDegreeSummary, HomologableSubject
from app.schemas.history import CourseRecord
from app.services.curricula import (
    EquivalenceRow,
    get_curriculum_by_program_code,
    get_curriculum_subjects,
    get_equivalences,
)
from app.services.transcript_parser import parse_transcript_text

logger = logging.getLogger("app.dual_degree")


def homologate(
    curriculum: Curriculum,
    subjects: Sequence[Subject],
    equivalences: Sequence[EquivalenceRow],
    origin: Sequence[CourseRecord],
    dual: Sequence[CourseRecord],
) -> DualDegreeResult:
    # Last occurrence of a repeated code wins
    origin_by_code = {
        record.code.strip(): record
        for record in origin
        if record.code.strip() and record.status is CourseStatus.APPROVED
    }
    dual_codes = {record.code.strip() for record in dual if record.code.strip()}

    homologable: list[HomologableSubject] = []
    total_credits = 0
    for subject in subjects:
        if subject.code in dual_codes:
            continue

        source = origin_by_code.get(subject.code)
        equivalence = None
        if source is None:
            for row in equivalences:
                if row.target_code == subject.code and row.source_code in origin_by_code:
                    source = origin_by_code[row.source_code]
                    equivalence = EquivalenceInfo(
                        kind=row.kind,
                        notes=f"Equivalence: {row.source_code} → {subject.code}",
                    )
                    break
        if source is None:
            continue

        homologable.append(
            HomologableSubject(
                target_code=subject.code,
                target_name=subject.name,
                credits=subject.credits,
                target_category=Category.parse(subject.category),
                origin_code=source.code,
                origin_name=source.name,
                origin_category=source.category_label or source.category.value,
                term=source.term,
                grade=source.grade,
                equivalence=equivalence,
            )
        )
        total_credits += subject.credits

    percentage = 0.0
    if curriculum.total_credits:
        percentage = total_credits / curriculum.total_credits * 100

    return DualDegreeResult(
        homologable_subjects=homologable,
        total_subjects=len(homologable),
        total_credits=total_credits,
        summary=DualDegreeSummary(
            origin_courses=len(origin),
            dual_courses=len(dual),
            homologable_subjects=len(homologable),
            homologable_credits=total_credits,
            homologation_percentage=percentage,
        ),
    )


def compare_dual_degree_records(
    db: Session,
    origin: Sequence[CourseRecord],
    dual: Sequence[CourseRecord],
    program_code: str,
) -> DualDegreeResult:
    curriculum = get_curriculum_by_program_code(db, program_code)
    subjects = get_curriculum_subjects(db, curriculum.id)
    equivalences = get_equivalences(db, curriculum.program_id)
    result = homologate(curriculum, subjects, equivalences, origin, dual)
    logger.info(
        "dual degree into %s: %d subject(s), %d credit(s) homologable",
        program_code,
        result.total_subjects,
        result.total_credits,
    )
    return result


def compare_dual_degree(
    db: Session,
    origin_text: str,
    dual_text: str,
    program_code: str,
) -> DualDegreeResult:
    origin = parse_transcript_text(origin_text)
    dual = parse_transcript_text(dual_text)
    return compare_dual_degree_records(db, origin, dual, program_code)
