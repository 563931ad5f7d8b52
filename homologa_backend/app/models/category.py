from enum import Enum


class Category(str, Enum):
    """Course classification used for credit-requirement bookkeeping.

    ``UNRECOGNIZED`` is what transcript extraction yields when the category
    text matches none of the six labels; it is never valid for stored subjects.
    """

    FOUNDATIONAL_REQUIRED = "FUND. OBLIGATORIA"
    FOUNDATIONAL_ELECTIVE = "FUND. OPTATIVA"
    DISCIPLINARY_REQUIRED = "DISCIPLINAR OBLIGATORIA"
    DISCIPLINARY_ELECTIVE = "DISCIPLINAR OPTATIVA"
    FREE_ELECTIVE = "LIBRE ELECCIÓN"
    THESIS = "TRABAJO DE GRADO"
    UNRECOGNIZED = ""

    @classmethod
    def choices(cls) -> tuple["Category", ...]:
        return tuple(c for c in cls if c is not cls.UNRECOGNIZED)

    @classmethod
    def parse(cls, text: str | None) -> "Category":
        value = (text or "").strip()
        for category in cls.choices():
            if category.value == value:
                return category
        return cls.UNRECOGNIZED

    @classmethod
    def from_label(cls, text: str | None) -> "Category":
        """Map free transcript text onto a category by keyword.

        Falls back to free elective when nothing matches.
        """
        upper = (text or "").upper()
        for category, keywords in _KEYWORDS:
            if any(keyword in upper for keyword in keywords):
                return category
        return cls.FREE_ELECTIVE

    def is_valid(self) -> bool:
        return self is not Category.UNRECOGNIZED


_KEYWORDS = (
    (Category.FOUNDATIONAL_REQUIRED, ("FUNDAMENTACIÓN OBLIGATORIA", "FUND. OBLIGATORIA")),
    (Category.FOUNDATIONAL_ELECTIVE, ("FUNDAMENTACIÓN OPTATIVA", "FUND. OPTATIVA")),
    (Category.DISCIPLINARY_REQUIRED, ("DISCIPLINAR OBLIGATORIA",)),
    (Category.DISCIPLINARY_ELECTIVE, ("DISCIPLINAR OPTATIVA",)),
    (Category.FREE_ELECTIVE, ("LIBRE ELECCIÓN",)),
    (Category.THESIS, ("TRABAJO DE GRADO",)),
)


class CourseStatus(str, Enum):
    APPROVED = "APROBADA"
    FAILED = "REPROBADA"
    IN_PROGRESS = "EN CURSO"
    CANCELLED = "CANCELADA"

    @classmethod
    def parse(cls, text: str | None) -> "CourseStatus | None":
        value = (text or "").strip().upper()
        # Extracted text sometimes loses the trailing letter
        if value in ("APROBADA", "APROBADO", "APROBAD"):
            return cls.APPROVED
        if value in ("REPROBADA", "REPROBADO", "REPROBAD", "NO APROBADA"):
            return cls.FAILED
        for status in cls:
            if status.value == value:
                return status
        return None
