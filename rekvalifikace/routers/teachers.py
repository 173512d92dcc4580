from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.teacher import TeacherDto
from rekvalifikace.services.teacher import TeacherService
from rekvalifikace.utils.auth import get_current_user, require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(prefix="/teachers", tags=["Teachers"])


@router.get("/", response_model=List[TeacherDto], dependencies=[Depends(get_current_user)])
def list_teachers(db: Session = Depends(get_db)):
    return TeacherService(db).list()


@router.get("/{teacher_id}", response_model=TeacherDto,
            dependencies=[Depends(require_privilege(Privilege.TEACHER))])
def get_teacher(teacher_id: int, db: Session = Depends(get_db)):
    teacher = TeacherService(db).get_by_id(teacher_id)
    if teacher is None:
        raise HTTPException(status_code=404, detail="Учитель не найден")
    return teacher


@router.post("/", status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def create_teacher(payload: TeacherDto, db: Session = Depends(get_db)):
    return {"id": TeacherService(db).create(payload)}


@router.put("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT,
            dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def update_teacher(teacher_id: int, payload: TeacherDto, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != teacher_id:
        raise HTTPException(status_code=400, detail="ID в пути и в теле не совпадают")
    TeacherService(db).update(teacher_id, payload)


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def delete_teacher(teacher_id: int, db: Session = Depends(get_db)):
    TeacherService(db).delete(teacher_id)
