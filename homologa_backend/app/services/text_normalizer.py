"""Line-oriented cleanup for academic history text.

Transcripts copied out of the student portal arrive with the fields of each
course glued together ("Cálculo (1000004)4FUND. OBLIGATORIA2019-1S Ordinaria4.2APROBADA").
Each rule below inserts a line break at one kind of field boundary, so after
normalization every field sits on its own line. Text that matches none of the
rules passes through unchanged.
"""
import re

_LETTERS = "A-Za-zÁÉÍÓÚÑáéíóúüÜ"

# Printed category labels, plus the leveling marker that behaves like one
_CATEGORY_LABELS = (
    r"FUND\. OBLIGATORIA|FUND\. OPTATIVA|DISCIPLINAR OBLIGATORIA|"
    r"DISCIPLINAR OPTATIVA|LIBRE ELECCIÓN|NIVELACIÓN|TRABAJO DE GRADO"
)
_TERM = r"[0-9]{4}-[0-9]{1,2}S?"
_GRADE = r"[0-9]\.[0-9]"

# "Cálculo Diferencial (1000004-B)" starts a course. A status word glued in
# front belongs to the previous course.
_HEADER_RE = re.compile(
    rf"((?:APROBAD[AO]?|REPROBAD[AO]?)\s*)?([{_LETTERS}][{_LETTERS}0-9\- ]*\([0-9A-Z\-]+\))"
)
# "...(1000004)4FUND." credits glued to a code and a category
_CREDITS_BEFORE_CATEGORY_RE = re.compile(
    rf"([{_LETTERS})]+)([0-9]{{1,2}})(?=F|{_CATEGORY_LABELS})"
)
# "...Ordinaria4.2" or any short number glued to a word
_CREDITS_RE = re.compile(rf"([{_LETTERS})]+)([0-9]{{1,2}})\b")
_CATEGORY_RE = re.compile(rf"([0-9]{{1,2}})({_CATEGORY_LABELS})")
_TERM_RE = re.compile(rf"(OBLIGATORIA|OPTATIVA|ELECCIÓN|NIVELACIÓN|GRADO)({_TERM})")
_GRADE_RE = re.compile(rf"({_TERM})( Ordinaria)?({_GRADE})")
_STATUS_RE = re.compile(rf"({_GRADE})(APROBAD[AO]?|REPROBAD[AO]?)")
_BREAKS_RE = re.compile(r"\n+")


def normalize_transcript_text(raw: str) -> str:
    """Split glued fields onto their own lines.

    A split can expose another boundary (a name that swallowed a glued
    "Grupo1" before it loses the "1" only on the following pass), so passes
    repeat until the text is stable. Passes only add breaks or drop
    whitespace, which bounds the loop.
    """
    text = raw.replace("\r\n", "\n").replace("\r", "\n")
    while True:
        split = _split_pass(text)
        if split == text:
            return split
        text = split


def _split_pass(text: str) -> str:
    text = _HEADER_RE.sub(r"\1\n\2", text)
    text = _CREDITS_BEFORE_CATEGORY_RE.sub(r"\1\n\2", text)
    text = _CREDITS_RE.sub(r"\1\n\2", text)
    text = _CATEGORY_RE.sub(r"\1\n\2", text)
    text = _TERM_RE.sub(r"\1\n\2", text)
    text = _GRADE_RE.sub(r"\1\2\n\3", text)
    text = _STATUS_RE.sub(r"\1\n\2", text)

    text = _BREAKS_RE.sub("\n", text)
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line).strip()
