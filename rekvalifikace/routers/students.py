from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.student import StudentDto
from rekvalifikace.services.student import StudentService
from rekvalifikace.utils.auth import get_current_user, require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/", response_model=List[StudentDto], dependencies=[Depends(get_current_user)])
def list_students(db: Session = Depends(get_db)):
    return StudentService(db).list()


@router.get("/{student_id}", response_model=StudentDto,
            dependencies=[Depends(require_privilege(Privilege.TEACHER))])
def get_student(student_id: int, db: Session = Depends(get_db)):
    student = StudentService(db).get_by_id(student_id)
    if student is None:
        raise HTTPException(status_code=404, detail="Студент не найден")
    return student


@router.post("/", status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def create_student(payload: StudentDto, db: Session = Depends(get_db)):
    return {"id": StudentService(db).create(payload)}


@router.put("/{student_id}", status_code=status.HTTP_204_NO_CONTENT,
            dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def update_student(student_id: int, payload: StudentDto, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != student_id:
        raise HTTPException(status_code=400, detail="ID в пути и в теле не совпадают")
    StudentService(db).update(student_id, payload)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT,
               dependencies=[Depends(require_privilege(Privilege.ADMIN))])
def delete_student(student_id: int, db: Session = Depends(get_db)):
    StudentService(db).delete(student_id)
