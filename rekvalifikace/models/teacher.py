from sqlalchemy import Column, Date, Integer, String
from sqlalchemy.orm import relationship
from rekvalifikace.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)

    version = Column(Integer, nullable=False)

    # удаление учителя с предметами решает внешний ключ, а не ORM
    subjects = relationship("Subject", back_populates="teacher", passive_deletes="all")

    __mapper_args__ = {"version_id_col": version}
