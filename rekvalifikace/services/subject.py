import logging
from typing import List, Optional

from sqlalchemy.orm import joinedload

from rekvalifikace.models.subject import Subject
from rekvalifikace.models.teacher import Teacher
from rekvalifikace.schemas.subject import SubjectDto, SubjectOptions, SubjectView
from rekvalifikace.services.base import EntityService
from rekvalifikace.services.teacher import TeacherService
from rekvalifikace.utils import mapping

logger = logging.getLogger(__name__)


class SubjectService(EntityService):
    model = Subject
    entity_name = "Предмет"

    def options(self) -> SubjectOptions:
        """Список учителей для выпадающего списка."""
        return SubjectOptions(teachers=TeacherService(self.db).select_items())

    def create(self, dto: SubjectDto) -> int:
        self._require_text(dto.name, "Название")

        # без существующего учителя ничего не пишем
        teacher = self._resolve(Teacher, "Учитель", dto.teacher_id)
        subject = Subject(**mapping.subject_fields(dto))
        subject.teacher = teacher

        self.db.add(subject)
        self._commit()
        logger.info("Предмет %s создан (учитель %s)", subject.id, teacher.id)
        return subject.id

    def list(self) -> List[SubjectDto]:
        subjects = self.db.query(Subject).order_by(Subject.name).all()
        return [mapping.subject_to_dto(s) for s in subjects]

    def list_views(self) -> List[SubjectView]:
        subjects = (
            self.db.query(Subject)
            .options(joinedload(Subject.teacher))
            .order_by(Subject.name)
            .all()
        )
        return [mapping.subject_to_view(s) for s in subjects]

    def get_by_id(self, subject_id: int) -> Optional[SubjectDto]:
        subject = self.db.get(Subject, subject_id)
        return mapping.subject_to_dto(subject) if subject else None

    def get_view_by_id(self, subject_id: int) -> Optional[SubjectView]:
        subject = self._find(subject_id, joinedload(Subject.teacher))
        return mapping.subject_to_view(subject) if subject else None

    def update(self, subject_id: int, dto: SubjectDto) -> None:
        self._require_text(dto.name, "Название")

        subject = self._get_entity(subject_id, joinedload(Subject.teacher))
        self._check_version(subject, dto.version)

        # ссылку переназначаем до копирования скалярных полей
        if subject.teacher_id != dto.teacher_id:
            subject.teacher = self._resolve(Teacher, "Учитель", dto.teacher_id)

        self._apply(subject, mapping.subject_fields(dto))
        self._commit(subject_id)
        logger.info("Предмет %s обновлён", subject_id)
