import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.models.base import Base
from app.models.category import Category
from app.schemas.program import (
    CurriculumCreateRequest,
    EquivalenceCreateRequest,
    ProgramCreateRequest,
    SubjectCreate,
)
from app.services.programs import create_curriculum, create_equivalence, create_program


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def _subject(code, name, credits, category):
    return SubjectCreate(code=code, name=name, credits=credits, category=category)


@pytest.fixture
def isis(db):
    """ISIS with one active curriculum, plus IADM with its own equivalence."""
    create_program(db, ProgramCreateRequest(code="ISIS", name="Ingeniería de Sistemas"))
    create_program(db, ProgramCreateRequest(code="IADM", name="Ingeniería Administrativa"))

    curriculum = create_curriculum(
        db,
        CurriculumCreateRequest(
            program_code="ISIS",
            version="2023-1",
            foundational_required_credits=8,
            foundational_elective_credits=4,
            disciplinary_required_credits=3,
            disciplinary_elective_credits=3,
            free_elective_credits=3,
            thesis_credits=6,
            subjects=[
                _subject("1000001", "Cálculo Diferencial", 4, Category.FOUNDATIONAL_REQUIRED),
                _subject("1000002", "Álgebra Lineal", 4, Category.FOUNDATIONAL_REQUIRED),
                _subject("1000017", "Probabilidad", 4, Category.FOUNDATIONAL_ELECTIVE),
                _subject("2016375", "Programación de Computadores", 3, Category.DISCIPLINARY_REQUIRED),
                _subject("2016700", "Bases de Datos", 3, Category.DISCIPLINARY_ELECTIVE),
                _subject("1000044", "Inglés I", 3, Category.FREE_ELECTIVE),
                _subject("2025900", "Trabajo de Grado", 6, Category.THESIS),
            ],
        ),
    )
    create_curriculum(
        db,
        CurriculumCreateRequest(
            program_code="IADM",
            version="2022-2",
            foundational_required_credits=4,
            subjects=[
                _subject("3000001", "Contabilidad", 4, Category.FOUNDATIONAL_REQUIRED),
            ],
        ),
    )
    create_equivalence(
        db,
        EquivalenceCreateRequest(
            source=_subject("1000099", "Cálculo I", 4, Category.FOUNDATIONAL_REQUIRED),
            target_subject_code="1000001",
            program_code="ISIS",
        ),
    )
    # Scoped to IADM, must not count for ISIS
    create_equivalence(
        db,
        EquivalenceCreateRequest(
            source=_subject("1000088", "Matrices", 4, Category.FOUNDATIONAL_REQUIRED),
            target_subject_code="1000002",
            program_code="IADM",
        ),
    )
    return curriculum
