from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from rekvalifikace.models.evaluation import EvaluationType
from rekvalifikace.schemas.student import StudentSelectItem
from rekvalifikace.schemas.subject import SubjectSelectItem


class EvaluationDto(BaseModel):
    id: Optional[int] = None
    subject_id: int
    student_id: int
    type: EvaluationType
    is_completed: bool = False
    # None или date.min — при записи подставляется сегодняшняя дата
    completion_date: Optional[date] = None
    version: Optional[int] = None

    class Config:
        from_attributes = True


class EvaluationView(BaseModel):
    id: int
    subject_name: str
    student_name: str
    type: EvaluationType
    type_label: str
    is_completed: bool
    is_completed_text: str
    completion_date: date


class EvaluationOptions(BaseModel):
    students: List[StudentSelectItem] = []
    subjects: List[SubjectSelectItem] = []
