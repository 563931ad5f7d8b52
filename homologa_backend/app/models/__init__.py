from app.models.base import Base
from app.models.category import Category, CourseStatus
from app.models.curriculum import Curriculum
from app.models.equivalence import Equivalence
from app.models.program import Program
from app.models.subject import Subject

__all__ = [
    "Base",
    "Category",
    "CourseStatus",
    "Curriculum",
    "Equivalence",
    "Program",
    "Subject",
]
