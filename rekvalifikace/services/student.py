import logging
from typing import List, Optional

from rekvalifikace.models.student import Student
from rekvalifikace.schemas.student import StudentDto
from rekvalifikace.services.base import EntityService
from rekvalifikace.utils import mapping

logger = logging.getLogger(__name__)


class StudentService(EntityService):
    model = Student
    entity_name = "Студент"

    def create(self, dto: StudentDto) -> int:
        self._require_text(dto.first_name, "Имя")
        self._require_text(dto.last_name, "Фамилия")

        student = Student(**mapping.student_fields(dto))
        self.db.add(student)
        self._commit()
        logger.info("Студент %s создан", student.id)
        return student.id

    def list(self) -> List[StudentDto]:
        students = self.db.query(Student).order_by(Student.last_name, Student.first_name).all()
        return [mapping.student_to_dto(s) for s in students]

    def get_by_id(self, student_id: int) -> Optional[StudentDto]:
        student = self.db.get(Student, student_id)
        return mapping.student_to_dto(student) if student else None

    def update(self, student_id: int, dto: StudentDto) -> None:
        self._require_text(dto.first_name, "Имя")
        self._require_text(dto.last_name, "Фамилия")

        student = self._get_entity(student_id)
        self._check_version(student, dto.version)
        self._apply(student, mapping.student_fields(dto))
        self._commit(student_id)
        logger.info("Студент %s обновлён", student_id)
