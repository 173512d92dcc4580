import logging
from typing import List, Optional

from rekvalifikace.models.teacher import Teacher
from rekvalifikace.schemas.teacher import TeacherDto, TeacherSelectItem
from rekvalifikace.services.base import EntityService
from rekvalifikace.utils import mapping

logger = logging.getLogger(__name__)


class TeacherService(EntityService):
    model = Teacher
    entity_name = "Учитель"

    def create(self, dto: TeacherDto) -> int:
        self._require_text(dto.first_name, "Имя")
        self._require_text(dto.last_name, "Фамилия")

        teacher = Teacher(**mapping.teacher_fields(dto))
        self.db.add(teacher)
        self._commit()
        logger.info("Учитель %s создан", teacher.id)
        return teacher.id

    def list(self) -> List[TeacherDto]:
        teachers = self.db.query(Teacher).order_by(Teacher.last_name, Teacher.first_name).all()
        return [mapping.teacher_to_dto(t) for t in teachers]

    def select_items(self) -> List[TeacherSelectItem]:
        teachers = self.db.query(Teacher).order_by(Teacher.last_name, Teacher.first_name).all()
        return [mapping.teacher_select_item(t) for t in teachers]

    def get_by_id(self, teacher_id: int) -> Optional[TeacherDto]:
        teacher = self.db.get(Teacher, teacher_id)
        if teacher is None:
            return None
        return mapping.teacher_to_dto(teacher)

    def update(self, teacher_id: int, dto: TeacherDto) -> None:
        self._require_text(dto.first_name, "Имя")
        self._require_text(dto.last_name, "Фамилия")

        teacher = self._get_entity(teacher_id)
        self._check_version(teacher, dto.version)
        self._apply(teacher, mapping.teacher_fields(dto))
        self._commit(teacher_id)
        logger.info("Учитель %s обновлён", teacher_id)
