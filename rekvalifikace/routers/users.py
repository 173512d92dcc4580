from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.user import UserCreate, UserOut, UserUpdate
from rekvalifikace.services.users import UserService
from rekvalifikace.utils.auth import require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(require_privilege(Privilege.ADMIN))],
)


@router.get("/", response_model=List[UserOut])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).list()


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = UserService(db).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Пользователь не найден")
    return user


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    return {"id": UserService(db).create(payload)}


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != user_id:
        raise HTTPException(status_code=400, detail="ID в пути и в теле не совпадают")
    UserService(db).update(user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    UserService(db).delete(user_id)
