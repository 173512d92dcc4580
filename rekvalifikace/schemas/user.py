from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)


class UserUpdate(BaseModel):
    id: Optional[int] = None
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    # пустое значение — пароль не меняется
    password: Optional[str] = Field(default=None, min_length=8, max_length=100)


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    roles: List[str] = []

    class Config:
        from_attributes = True
