from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    credits = Column(Integer, nullable=False)
    category = Column(String(50), nullable=False)  # one of Category's labels
    description = Column(Text, nullable=True)
    # Null for subjects known only as the source of an equivalence
    curriculum_id = Column(Integer, ForeignKey("curricula.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    curriculum = relationship("Curriculum", back_populates="subjects")
