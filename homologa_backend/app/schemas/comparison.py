from pydantic import BaseModel, Field

from app.models.category import Category
from app.schemas.history import CourseRecord


class EquivalenceInfo(BaseModel):
    kind: str
    notes: str


class SubjectResult(BaseModel):
    code: str
    name: str
    credits: int
    category: Category
    status: str  # APROBADA | PENDIENTE
    equivalence: EquivalenceInfo | None = None


class CreditTypeInfo(BaseModel):
    required: int = 0
    completed: int = 0
    missing: int = 0


class CreditsSummary(BaseModel):
    foundational_required: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    foundational_elective: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    disciplinary_required: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    disciplinary_elective: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    free_elective: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    thesis: CreditTypeInfo = Field(default_factory=CreditTypeInfo)
    total: CreditTypeInfo = Field(default_factory=CreditTypeInfo)

    def for_category(self, category: Category) -> CreditTypeInfo:
        return getattr(self, category.name.lower())


class CurriculumInfo(BaseModel):
    id: int | None = None
    version: str | None = None
    program_code: str | None = None
    program_name: str | None = None


class ComparisonSummary(BaseModel):
    total_subjects_in_plan: int
    approved_subjects: int
    missing_subjects: int
    completion_percentage: float


class ComparisonResult(BaseModel):
    curriculum: CurriculumInfo
    equivalent_subjects: list[SubjectResult] = []
    missing_subjects: list[SubjectResult] = []
    total_credits: int = 0
    missing_credits: int = 0
    credits_summary: CreditsSummary = Field(default_factory=CreditsSummary)
    summary: ComparisonSummary


class CompareRequest(BaseModel):
    curriculum_id: int
    courses: list[CourseRecord]


class CompareByProgramRequest(BaseModel):
    program_code: str
    courses: list[CourseRecord]


class CompareTextRequest(BaseModel):
    academic_history_text: str
    program_code: str


class CompareTextResponse(BaseModel):
    parsed_courses: list[CourseRecord]
    comparison: ComparisonResult
