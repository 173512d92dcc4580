import enum
from datetime import date

from sqlalchemy import Boolean, Column, Date, Enum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from rekvalifikace.database import Base


class EvaluationType(str, enum.Enum):
    EXAM = "Exam"
    PROJECT = "Project"


class Evaluation(Base):
    __tablename__ = "evaluations"

    id = Column(Integer, primary_key=True, index=True)

    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    subject = relationship("Subject", back_populates="evaluations")

    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    student = relationship("Student", back_populates="evaluations")

    type = Column(Enum(EvaluationType, native_enum=False), nullable=False)
    is_completed = Column(Boolean, default=False, nullable=False)
    completion_date = Column(Date, default=date.today, nullable=False)

    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
