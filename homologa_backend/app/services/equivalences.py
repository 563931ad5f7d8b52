"""Equivalence lookup scoped to one curriculum.

Equivalences are stored directionally (source -> target) but, for comparing a
history against a curriculum, either side may stand in for the other. Only one
hop is followed: if A ~ B and B ~ C, A is not treated as equivalent to C.
"""
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from sqlalchemy.orm import Session

from app.models.curriculum import Curriculum
from app.models.subject import Subject
from app.services.curricula import EquivalenceRow, get_equivalences

logger = logging.getLogger("app.equivalences")


class Equivalent(NamedTuple):
    code: str
    kind: str
    notes: str


EquivalenceLookup = Mapping[str, tuple[Equivalent, ...]]


def build_equivalence_lookup(
    plan_codes: Iterable[str],
    rows: Iterable[EquivalenceRow],
    program_id: int | None = None,
) -> EquivalenceLookup:
    """Map each in-plan code to the codes recorded as equivalent to it.

    Rows from another program are ignored when ``program_id`` is given.
    Equivalents keep the order in which their rows were stored; repeated
    pairs appear once.
    """
    in_plan = set(plan_codes)
    lookup: dict[str, list[Equivalent]] = {}

    def add(code: str, other: str, row: EquivalenceRow):
        items = lookup.setdefault(code, [])
        if all(item.code != other for item in items):
            items.append(Equivalent(code=other, kind=row.kind, notes=row.notes))

    for row in rows:
        if program_id is not None and row.program_id != program_id:
            continue
        if row.source_code in in_plan:
            add(row.source_code, row.target_code, row)
        if row.target_code in in_plan:
            add(row.target_code, row.source_code, row)

    return MappingProxyType({code: tuple(items) for code, items in lookup.items()})


def resolve_equivalences(
    db: Session, curriculum: Curriculum, subjects: Iterable[Subject]
) -> EquivalenceLookup:
    rows = get_equivalences(db, curriculum.program_id)
    lookup = build_equivalence_lookup(
        (subject.code for subject in subjects),
        rows,
        program_id=curriculum.program_id,
    )
    logger.debug(
        "curriculum %s: %d equivalence row(s), %d subject(s) with equivalents",
        curriculum.id,
        len(rows),
        len(lookup),
    )
    return lookup
