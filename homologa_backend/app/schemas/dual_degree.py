from pydantic import BaseModel

from app.models.category import Category
from app.schemas.comparison import EquivalenceInfo


class HomologableSubject(BaseModel):
    target_code: str
    target_name: str
    credits: int
    target_category: Category
    origin_code: str
    origin_name: str
    origin_category: str
    term: str
    grade: float
    equivalence: EquivalenceInfo | None = None


class DualDegreeSummary(BaseModel):
    origin_courses: int
    dual_courses: int
    homologable_subjects: int
    homologable_credits: int
    homologation_percentage: float


class DualDegreeResult(BaseModel):
    homologable_subjects: list[HomologableSubject] = []
    total_subjects: int = 0
    total_credits: int = 0
    summary: DualDegreeSummary


class DualDegreeRequest(BaseModel):
    origin_history: str
    dual_history: str
    target_program_code: str
