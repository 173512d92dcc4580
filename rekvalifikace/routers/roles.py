from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.role import (
    ReconcileOut,
    RoleCreate,
    RoleEditOut,
    RoleModifications,
    RoleOut,
)
from rekvalifikace.services.roles import RoleService
from rekvalifikace.utils import mapping
from rekvalifikace.utils.auth import get_caller_roles, require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
    dependencies=[Depends(require_privilege(Privilege.ADMIN))],
)


@router.get("/", response_model=List[RoleOut])
def list_roles(db: Session = Depends(get_db), caller_roles: set = Depends(get_caller_roles)):
    return RoleService(db).list_roles(caller_roles)


@router.post("/", response_model=RoleOut, status_code=status.HTTP_201_CREATED)
def create_role(payload: RoleCreate, db: Session = Depends(get_db),
                caller_roles: set = Depends(get_caller_roles)):
    return RoleService(db).create_role(payload.name, caller_roles)


@router.get("/{role_id}", response_model=RoleEditOut)
def edit_role(role_id: int, db: Session = Depends(get_db),
              caller_roles: set = Depends(get_caller_roles)):
    edit = RoleService(db).load_role_edit(role_id, caller_roles)
    return RoleEditOut(
        role=RoleOut.model_validate(edit.role),
        members=[mapping.user_to_out(u) for u in edit.members],
        non_members=[mapping.user_to_out(u) for u in edit.non_members],
    )


@router.post("/members", response_model=ReconcileOut)
def reconcile_members(payload: RoleModifications, db: Session = Depends(get_db),
                      caller_roles: set = Depends(get_caller_roles)):
    result = RoleService(db).reconcile_membership(
        payload.role_name, payload.add_ids, payload.delete_ids, caller_roles
    )
    return ReconcileOut(
        role_name=result.role_name,
        added=result.added,
        removed=result.removed,
        failures=[{"user_id": f.user_id, "reason": f.reason} for f in result.failures],
    )


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_role(role_id: int, db: Session = Depends(get_db),
                caller_roles: set = Depends(get_caller_roles)):
    RoleService(db).delete_role(role_id, caller_roles)
