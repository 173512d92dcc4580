from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship
from rekvalifikace.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)

    version = Column(Integer, nullable=False)

    evaluations = relationship("Evaluation", back_populates="student", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version}
