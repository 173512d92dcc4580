from typing import List, Optional

from pydantic import BaseModel, Field

from rekvalifikace.schemas.teacher import TeacherSelectItem


class SubjectDto(BaseModel):
    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=50)
    teacher_id: int
    has_exam: bool = False
    has_project: bool = False
    version: Optional[int] = None

    class Config:
        from_attributes = True


class SubjectView(BaseModel):
    id: int
    name: str
    teacher_name: str
    has_exam: bool
    has_project: bool
    has_exam_text: str
    has_project_text: str


class SubjectSelectItem(BaseModel):
    id: int
    name: str


class SubjectOptions(BaseModel):
    teachers: List[TeacherSelectItem] = []
