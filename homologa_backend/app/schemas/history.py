from pydantic import BaseModel, Field

from app.models.category import Category, CourseStatus


class CourseRecord(BaseModel):
    """One course recovered from an academic history."""

    code: str = ""
    name: str = ""
    credits: int = Field(0, ge=0)
    category: Category = Category.UNRECOGNIZED
    category_label: str = ""
    grade: float = 0.0
    term: str = ""
    status: CourseStatus = CourseStatus.APPROVED


class TranscriptParseRequest(BaseModel):
    text: str


class TranscriptParseResponse(BaseModel):
    courses: list[CourseRecord]
    total_courses: int
