from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from rekvalifikace.database import get_db
from rekvalifikace.schemas.evaluation import EvaluationDto, EvaluationOptions, EvaluationView
from rekvalifikace.services.evaluation import EvaluationService
from rekvalifikace.utils.auth import get_current_user, require_privilege
from rekvalifikace.utils.policy import Privilege

router = APIRouter(prefix="/evaluations", tags=["Evaluations"])

teacher_access = [Depends(require_privilege(Privilege.TEACHER))]


@router.get("/", response_model=List[EvaluationView], dependencies=[Depends(get_current_user)])
def list_evaluations(db: Session = Depends(get_db)):
    return EvaluationService(db).list_views()


@router.get("/options", response_model=EvaluationOptions, dependencies=teacher_access)
def evaluation_options(db: Session = Depends(get_db)):
    return EvaluationService(db).options()


@router.get("/{evaluation_id}", response_model=EvaluationDto, dependencies=teacher_access)
def get_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    evaluation = EvaluationService(db).get_by_id(evaluation_id)
    if evaluation is None:
        raise HTTPException(status_code=404, detail="Оценивание не найдено")
    return evaluation


@router.post("/", status_code=status.HTTP_201_CREATED, dependencies=teacher_access)
def create_evaluation(payload: EvaluationDto, db: Session = Depends(get_db)):
    return {"id": EvaluationService(db).create(payload)}


@router.put("/{evaluation_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=teacher_access)
def update_evaluation(evaluation_id: int, payload: EvaluationDto, db: Session = Depends(get_db)):
    if payload.id is not None and payload.id != evaluation_id:
        raise HTTPException(status_code=400, detail="ID в пути и в теле не совпадают")
    EvaluationService(db).update(evaluation_id, payload)


@router.delete("/{evaluation_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=teacher_access)
def delete_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    EvaluationService(db).delete(evaluation_id)
