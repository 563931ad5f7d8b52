import random

import pytest

from app.services.text_normalizer import normalize_transcript_text
from app.services.transcript_parser import parse_transcript_text

GLUED = (
    "Cálculo Diferencial (1000001)4FUND. OBLIGATORIA2019-1S Ordinaria4.2APROBADA "
    "Álgebra Lineal (1000002)4FUND. OBLIGATORIA2019-2S Ordinaria3.8APROBADA"
)

GROUP_PREFIXED = (
    "Grupo1 Cálculo Diferencial (1000004)4FUND. OBLIGATORIA2019-1S Ordinaria4.2APROBADA"
)

EXPECTED_LINES = [
    "Cálculo Diferencial (1000001)",
    "4",
    "FUND. OBLIGATORIA",
    "2019-1S Ordinaria",
    "4.2",
    "APROBADA",
    "Álgebra Lineal (1000002)",
    "4",
    "FUND. OBLIGATORIA",
    "2019-2S Ordinaria",
    "3.8",
    "APROBADA",
]


def test_glued_fields_are_split_one_per_line():
    assert normalize_transcript_text(GLUED).split("\n") == EXPECTED_LINES


def test_one_course_per_line_gives_the_same_result():
    text = GLUED.replace("APROBADA Álgebra", "APROBADA\nÁlgebra")
    assert normalize_transcript_text(text).split("\n") == EXPECTED_LINES


def test_term_without_session_label_is_split_from_grade():
    text = "Inglés I (1000044)3LIBRE ELECCIÓN2020-1S4.0REPROBADA"
    assert normalize_transcript_text(text).split("\n") == [
        "Inglés I (1000044)",
        "3",
        "LIBRE ELECCIÓN",
        "2020-1S",
        "4.0",
        "REPROBADA",
    ]


def test_carriage_returns_and_blank_lines_are_dropped():
    text = "Cálculo Diferencial (1000001)\r\n\r\n   \r\n4\rFUND. OBLIGATORIA\n\n"
    assert normalize_transcript_text(text) == "Cálculo Diferencial (1000001)\n4\nFUND. OBLIGATORIA"


def test_unmatched_text_passes_through():
    assert normalize_transcript_text("  Historia académica  ") == "Historia académica"


def test_empty_input():
    assert normalize_transcript_text("") == ""


@pytest.mark.parametrize(
    "text",
    [
        GLUED,
        "Inglés I (1000044)3LIBRE ELECCIÓN2020-1S4.0REPROBADA",
        "Programación (2016375-B)\t3\tDISCIPLINAR OBLIGATORIA\t2021-2S\t4.7",
        "sin cursos\n\n\nsolo texto",
        GROUP_PREFIXED,
    ],
)
def test_normalization_is_idempotent(text):
    once = normalize_transcript_text(text)
    assert normalize_transcript_text(once) == once


def test_glued_prefix_is_split_from_course_name():
    assert normalize_transcript_text(GROUP_PREFIXED).split("\n") == [
        "Grupo",
        "1",
        "Cálculo Diferencial (1000004)",
        "4",
        "FUND. OBLIGATORIA",
        "2019-1S Ordinaria",
        "4.2",
        "APROBADA",
    ]
    [record] = parse_transcript_text(GROUP_PREFIXED)
    assert record.name == "Cálculo Diferencial"
    assert record.credits == 4


_TOKENS = [
    "Cálculo Diferencial (1000004)",
    "Álgebra Lineal (1000002-B)",
    "Grupo1",
    "Inglés I (1000044)",
    "4",
    "12",
    "FUND. OBLIGATORIA",
    "DISCIPLINAR OPTATIVA",
    "LIBRE ELECCIÓN",
    "NIVELACIÓN",
    "TRABAJO DE GRADO",
    "2019-1S",
    " Ordinaria",
    "4.2",
    "3.0",
    "APROBADA",
    "REPROBADO",
    "EN CURSO",
    "(",
    ")",
    "-",
    " ",
    "\n",
    "\r\n",
    "\t",
]


def test_normalization_is_idempotent_on_random_transcripts():
    rng = random.Random(20240517)
    for _ in range(2000):
        text = "".join(rng.choice(_TOKENS) for _ in range(rng.randint(0, 25)))
        once = normalize_transcript_text(text)
        assert normalize_transcript_text(once) == once, repr(text)
