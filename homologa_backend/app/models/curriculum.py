from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.models.base import Base
from app.models.category import Category


class Curriculum(Base):
    __tablename__ = "curricula"

    id = Column(Integer, primary_key=True, index=True)
    program_id = Column(Integer, ForeignKey("programs.id"), nullable=False, index=True)
    version = Column(String(20), nullable=False)  # e.g. "2023-1"
    is_active = Column(Boolean, default=True)
    total_credits = Column(Integer, nullable=False, default=0)
    foundational_required_credits = Column(Integer, nullable=False, default=0)
    foundational_elective_credits = Column(Integer, nullable=False, default=0)
    disciplinary_required_credits = Column(Integer, nullable=False, default=0)
    disciplinary_elective_credits = Column(Integer, nullable=False, default=0)
    free_elective_credits = Column(Integer, nullable=False, default=0)
    thesis_credits = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)

    program = relationship("Program", back_populates="curricula")
    subjects = relationship("Subject", back_populates="curriculum", order_by="Subject.id")

    def required_credits(self) -> dict[Category, int]:
        return {
            Category.FOUNDATIONAL_REQUIRED: self.foundational_required_credits or 0,
            Category.FOUNDATIONAL_ELECTIVE: self.foundational_elective_credits or 0,
            Category.DISCIPLINARY_REQUIRED: self.disciplinary_required_credits or 0,
            Category.DISCIPLINARY_ELECTIVE: self.disciplinary_elective_credits or 0,
            Category.FREE_ELECTIVE: self.free_elective_credits or 0,
            Category.THESIS: self.thesis_credits or 0,
        }
