from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class StudentDto(BaseModel):
    id: Optional[int] = None
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    date_of_birth: date
    version: Optional[int] = None

    class Config:
        from_attributes = True


class StudentSelectItem(BaseModel):
    id: int
    full_name: str
