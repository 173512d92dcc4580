from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class TeacherDto(BaseModel):
    id: Optional[int] = None
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    date_of_birth: date
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    # версия строки на момент загрузки; None — без проверки
    version: Optional[int] = None

    class Config:
        from_attributes = True


class TeacherSelectItem(BaseModel):
    id: int
    full_name: str
