from typing import List, Set

from pydantic import BaseModel

from rekvalifikace.schemas.user import UserOut


class RoleCreate(BaseModel):
    name: str


class RoleOut(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class RoleEditOut(BaseModel):
    role: RoleOut
    members: List[UserOut]
    non_members: List[UserOut]


class RoleModifications(BaseModel):
    role_name: str
    add_ids: Set[int] = set()
    delete_ids: Set[int] = set()


class MembershipFailureOut(BaseModel):
    user_id: int
    reason: str


class ReconcileOut(BaseModel):
    role_name: str
    added: List[int]
    removed: List[int]
    failures: List[MembershipFailureOut]
