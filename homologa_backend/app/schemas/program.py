from pydantic import BaseModel, Field, field_validator

from app.models.category import Category


class ProgramCreateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class ProgramResponse(ProgramCreateRequest):
    id: int

    model_config = {
        "from_attributes": True,
    }


class SubjectCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=20)
    name: str = Field(..., min_length=1, max_length=100)
    credits: int = Field(..., gt=0)
    category: Category
    description: str | None = None

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: Category) -> Category:
        if not value.is_valid():
            labels = ", ".join(c.value for c in Category.choices())
            raise ValueError(f"category must be one of: {labels}")
        return value


class SubjectResponse(BaseModel):
    id: int
    code: str
    name: str
    credits: int
    category: str
    description: str | None = None

    model_config = {
        "from_attributes": True,
    }


class CurriculumCreateRequest(BaseModel):
    program_code: str
    version: str = Field(..., min_length=1, max_length=20)
    foundational_required_credits: int = Field(0, ge=0)
    foundational_elective_credits: int = Field(0, ge=0)
    disciplinary_required_credits: int = Field(0, ge=0)
    disciplinary_elective_credits: int = Field(0, ge=0)
    free_elective_credits: int = Field(0, ge=0)
    thesis_credits: int = Field(0, ge=0)
    total_credits: int | None = Field(None, ge=0)
    subjects: list[SubjectCreate] = []


class CurriculumResponse(BaseModel):
    id: int
    program_id: int
    version: str
    is_active: bool
    total_credits: int
    foundational_required_credits: int
    foundational_elective_credits: int
    disciplinary_required_credits: int
    disciplinary_elective_credits: int
    free_elective_credits: int
    thesis_credits: int

    model_config = {
        "from_attributes": True,
    }


class CurriculumOverview(BaseModel):
    curriculum: CurriculumResponse
    program_code: str
    program_name: str
    subjects_by_category: dict[str, list[SubjectResponse]]
    credits_by_category: dict[str, int]
    total_subjects: int


class EquivalenceCreateRequest(BaseModel):
    source: SubjectCreate
    target_subject_code: str
    program_code: str
    kind: str = Field("total", min_length=1, max_length=20)
    notes: str | None = None
