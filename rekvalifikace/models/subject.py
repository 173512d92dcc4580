from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from rekvalifikace.database import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    # уникальность названия — соглашение, на уровне БД не проверяется
    name = Column(String(50), nullable=False)

    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False)
    teacher = relationship("Teacher", back_populates="subjects")

    has_exam = Column(Boolean, default=False, nullable=False)
    has_project = Column(Boolean, default=False, nullable=False)

    version = Column(Integer, nullable=False)

    evaluations = relationship("Evaluation", back_populates="subject", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version}
