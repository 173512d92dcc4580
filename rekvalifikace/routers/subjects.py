from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.subject import SubjectDto, SubjectOptions, SubjectView
from rekvalifikace.services.subject import SubjectService
from rekvalifikace.utils.auth import get_current_user, require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(prefix="/subjects", tags=["Subjects"])

teacher_access = [Depends(require_privilege(Privilege.TEACHER))]


@router.get("/", response_model=List[SubjectView], dependencies=[Depends(get_current_user)])
def list_subjects(db: Session = Depends(get_db)):
    return SubjectService(db).list_views()


@router.get("/options", response_model=SubjectOptions, dependencies=teacher_access)
def subject_options(db: Session = Depends(get_db)):
    return SubjectService(db).options()


@router.get("/{subject_id}", response_model=SubjectView, dependencies=teacher_access)
def get_subject(subject_id: int, db: Session = Depends(get_db)):
    subject = SubjectService(db).get_view_by_id(subject_id)
    if subject is None:
        raise HTTPException(status_code=404, detail="Предмет не найден")
    return subject


@router.get("/{subject_id}/edit", response_model=SubjectDto, dependencies=teacher_access)
def get_subject_for_edit(subject_id: int, db: Session = Depends(get_db)):
    subject = SubjectService(db).get_by_id(subject_id)
    if subject is None:
        raise HTTPException(status_code=404, detail="Предмет не найден")
    return subject


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=teacher_access)
def create_subject(payload: SubjectDto, db: Session = Depends(get_db)):
    return {"id": SubjectService(db).create(payload)}


@router.put("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=teacher_access)
def update_subject(subject_id: int, payload: SubjectDto, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != subject_id:
        raise HTTPException(status_code=400, detail="ID в пути и в теле не совпадают")
    SubjectService(db).update(subject_id, payload)


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=teacher_access)
def delete_subject(subject_id: int, db: Session = Depends(get_db)):
    SubjectService(db).delete(subject_id)
