import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import joinedload

from rekvalifikace.models.evaluation import Evaluation
from rekvalifikace.models.student import Student
from rekvalifikace.models.subject import Subject
from rekvalifikace.schemas.evaluation import EvaluationDto, EvaluationOptions, EvaluationView
from rekvalifikace.services.base import EntityService
from rekvalifikace.utils import mapping

logger = logging.getLogger(__name__)


class EvaluationService(EntityService):
    model = Evaluation
    entity_name = "Оценивание"

    def options(self) -> EvaluationOptions:
        """Студенты (по фамилии) и предметы (по названию) для выпадающих списков."""
        students = self.db.query(Student).order_by(Student.last_name).all()
        subjects = self.db.query(Subject).order_by(Subject.name).all()
        return EvaluationOptions(
            students=[mapping.student_select_item(s) for s in students],
            subjects=[mapping.subject_select_item(s) for s in subjects],
        )

    def create(self, dto: EvaluationDto) -> int:
        student = self._resolve(Student, "Студент", dto.student_id)
        subject = self._resolve(Subject, "Предмет", dto.subject_id)

        evaluation = Evaluation(**mapping.evaluation_fields(dto, date.today()))
        evaluation.student = student
        evaluation.subject = subject

        self.db.add(evaluation)
        self._commit()
        logger.info(
            "Оценивание %s создано (студент %s, предмет %s)",
            evaluation.id, student.id, subject.id,
        )
        return evaluation.id

    def list(self) -> List[EvaluationDto]:
        evaluations = self.db.query(Evaluation).order_by(Evaluation.id).all()
        return [mapping.evaluation_to_dto(e) for e in evaluations]

    def list_views(self) -> List[EvaluationView]:
        evaluations = (
            self.db.query(Evaluation)
            .options(joinedload(Evaluation.student), joinedload(Evaluation.subject))
            .order_by(Evaluation.id)
            .all()
        )
        return [mapping.evaluation_to_view(e) for e in evaluations]

    def get_by_id(self, evaluation_id: int) -> Optional[EvaluationDto]:
        evaluation = self.db.get(Evaluation, evaluation_id)
        return mapping.evaluation_to_dto(evaluation) if evaluation else None

    def update(self, evaluation_id: int, dto: EvaluationDto) -> None:
        evaluation = self._get_entity(
            evaluation_id,
            joinedload(Evaluation.student),
            joinedload(Evaluation.subject),
        )
        self._check_version(evaluation, dto.version)

        # сравниваем с текущими id, а не с «нулевым» значением по умолчанию
        if evaluation.student_id != dto.student_id:
            evaluation.student = self._resolve(Student, "Студент", dto.student_id)
        if evaluation.subject_id != dto.subject_id:
            evaluation.subject = self._resolve(Subject, "Предмет", dto.subject_id)

        self._apply(evaluation, mapping.evaluation_fields(dto, date.today()))
        self._commit(evaluation_id)
        logger.info("Оценивание %s обновлено", evaluation_id)
