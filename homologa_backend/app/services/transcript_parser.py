import logging
import re

from app.models.category import Category, CourseStatus
from app.schemas.history import CourseRecord
from app.services.pdf_parser import extract_text_from_pdf
from app.services.text_normalizer import normalize_transcript_text

logger = logging.getLogger("app.transcripts")

_MIN_TAB_FIELDS = 5


def parse_transcript_text(content: str) -> list[CourseRecord]:
    """Detect the history layout and parse accordingly.

    Supports:
    - one course per line, five tab-separated fields
    - portal copy/paste where fields run together (normalized first)
    """
    if _looks_tabbed(content):
        records = parse_tabbed_history(content)
        layout = "tabbed"
    else:
        records = parse_grouped_history(normalize_transcript_text(content))
        layout = "grouped"
    logger.debug("parsed %d course(s) from %s history text", len(records), layout)
    return records


def parse_transcript_pdf(data: bytes) -> list[CourseRecord]:
    text = extract_text_from_pdf(data)
    if not text:
        return []
    return parse_transcript_text(text)


# ── One course per line, tab separated ───────────────────────────────────────

# "Cálculo Diferencial (1000004)" / "Programación (2016375-B)"
_TABBED_NAME_RE = re.compile(r"(.+)\s\(([0-9]{6,}-?[A-Za-z]?)\)")


def parse_tabbed_history(content: str) -> list[CourseRecord]:
    rows: list[CourseRecord] = []
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        parts = line.split("\t")
        if len(parts) < _MIN_TAB_FIELDS:
            continue

        full_name = parts[0]
        code = ""
        name = full_name
        match = _TABBED_NAME_RE.search(full_name)
        if match:
            name = match.group(1).strip()
            code = match.group(2).strip()

        label = parts[2].strip()
        rows.append(
            CourseRecord(
                code=code,
                name=name,
                credits=_parse_credits(parts[1]),
                category=Category.from_label(label),
                category_label=label,
                term=parts[3].strip(),
                grade=_parse_grade(parts[4]),
            )
        )
    return rows


# ── Header line followed by positional field lines ───────────────────────────

_HEADER_RE = re.compile(r"^([^(]+)\s*\(([^)]+)\)")
_CREDITS_RE = re.compile(r"^\s*(\d+)\s*$")
_GRADE_RE = re.compile(r"^\s*(\d+\.?\d*)\s*$")

# Field order after a header line
_CREDITS, _CATEGORY, _TERM, _GRADE = 1, 2, 3, 4


def parse_grouped_history(content: str) -> list[CourseRecord]:
    """Group normalized lines into courses.

    A "name (code)" line opens a course and the next four lines are read as
    credits, category, term and grade. A status line ("APROBADA", "REPROBADA")
    closes the course it belongs to, so truncated courses do not swallow the
    lines of the next one.
    """
    rows: list[CourseRecord] = []
    current: CourseRecord | None = None
    position = 0
    awaiting_status = False

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        header = _HEADER_RE.match(line)
        if header:
            if current is not None:
                rows.append(current)
            current = CourseRecord(
                code=header.group(2).strip(),
                name=header.group(1).strip(),
            )
            position = 0
            awaiting_status = False
            continue

        status = CourseStatus.parse(line)
        if status is not None:
            if current is not None:
                current.status = status
                rows.append(current)
                current = None
            elif awaiting_status and rows:
                rows[-1].status = status
            awaiting_status = False
            continue

        if current is None:
            continue

        position += 1
        if position == _CREDITS:
            current.credits = _parse_credits(line)
        elif position == _CATEGORY:
            current.category = Category.parse(line)
            current.category_label = line
        elif position == _TERM:
            current.term = line
        elif position == _GRADE:
            current.grade = _parse_grade(line)
            rows.append(current)
            current = None
            awaiting_status = True

    if current is not None:
        rows.append(current)
    return rows


def _looks_tabbed(content: str) -> bool:
    return any(len(line.split("\t")) >= _MIN_TAB_FIELDS for line in content.splitlines())


def _parse_credits(value: str) -> int:
    match = _CREDITS_RE.match(value)
    if match:
        return int(match.group(1))
    return 0


def _parse_grade(value: str) -> float:
    match = _GRADE_RE.match(value)
    if match:
        return float(match.group(1))
    return 0.0
