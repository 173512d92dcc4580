"""Проекции сущность <-> DTO <-> view model.

Чистые функции без доступа к БД. Поля-ссылки (teacher, student, subject)
сюда не копируются: их разрешают сервисы по идентификатору.
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from rekvalifikace.models.evaluation import Evaluation, EvaluationType
from rekvalifikace.models.student import Student
from rekvalifikace.models.subject import Subject
from rekvalifikace.models.teacher import Teacher
from rekvalifikace.models.user import User
from rekvalifikace.schemas.evaluation import EvaluationDto, EvaluationView
from rekvalifikace.schemas.student import StudentDto, StudentSelectItem
from rekvalifikace.schemas.subject import SubjectDto, SubjectSelectItem, SubjectView
from rekvalifikace.schemas.teacher import TeacherDto, TeacherSelectItem
from rekvalifikace.schemas.user import UserOut

EVALUATION_TYPE_LABELS = {
    EvaluationType.EXAM: "Zkouška",
    EvaluationType.PROJECT: "Projekt",
}


def yes_no(flag: bool) -> str:
    return "Ano" if flag else "Ne"


def completion_date_or_today(value: Optional[date], today: date) -> date:
    """date.min и None считаются «не задано»."""
    if value is None or value == date.min:
        return today
    return value


# --- Teacher ---------------------------------------------------------------

def teacher_to_dto(teacher: Teacher) -> TeacherDto:
    return TeacherDto(
        id=teacher.id,
        first_name=teacher.first_name,
        last_name=teacher.last_name,
        date_of_birth=teacher.date_of_birth,
        email=teacher.email,
        phone=teacher.phone,
        version=teacher.version,
    )


def teacher_fields(dto: TeacherDto) -> dict:
    return {
        "first_name": dto.first_name.strip(),
        "last_name": dto.last_name.strip(),
        "date_of_birth": dto.date_of_birth,
        "email": str(dto.email) if dto.email else None,
        "phone": dto.phone or None,
    }


def teacher_select_item(teacher: Teacher) -> TeacherSelectItem:
    return TeacherSelectItem(id=teacher.id, full_name=f"{teacher.first_name} {teacher.last_name}")


# --- Student ---------------------------------------------------------------

def student_to_dto(student: Student) -> StudentDto:
    return StudentDto(
        id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        date_of_birth=student.date_of_birth,
        version=student.version,
    )


def student_fields(dto: StudentDto) -> dict:
    return {
        "first_name": dto.first_name.strip(),
        "last_name": dto.last_name.strip(),
        "date_of_birth": dto.date_of_birth,
    }


def student_select_item(student: Student) -> StudentSelectItem:
    return StudentSelectItem(id=student.id, full_name=f"{student.first_name} {student.last_name}")


# --- Subject ---------------------------------------------------------------

def subject_to_dto(subject: Subject) -> SubjectDto:
    return SubjectDto(
        id=subject.id,
        name=subject.name,
        teacher_id=subject.teacher_id,
        has_exam=subject.has_exam,
        has_project=subject.has_project,
        version=subject.version,
    )


def subject_fields(dto: SubjectDto) -> dict:
    # teacher_id намеренно отсутствует
    return {
        "name": dto.name.strip(),
        "has_exam": dto.has_exam,
        "has_project": dto.has_project,
    }


def subject_to_view(subject: Subject) -> SubjectView:
    teacher = subject.teacher
    return SubjectView(
        id=subject.id,
        name=subject.name,
        teacher_name=f"{teacher.last_name} {teacher.first_name}",
        has_exam=subject.has_exam,
        has_project=subject.has_project,
        has_exam_text=yes_no(subject.has_exam),
        has_project_text=yes_no(subject.has_project),
    )


def subject_select_item(subject: Subject) -> SubjectSelectItem:
    return SubjectSelectItem(id=subject.id, name=subject.name)


# --- Evaluation ------------------------------------------------------------

def evaluation_to_dto(evaluation: Evaluation) -> EvaluationDto:
    return EvaluationDto(
        id=evaluation.id,
        subject_id=evaluation.subject_id,
        student_id=evaluation.student_id,
        type=evaluation.type,
        is_completed=evaluation.is_completed,
        completion_date=evaluation.completion_date,
        version=evaluation.version,
    )


def evaluation_fields(dto: EvaluationDto, today: date) -> dict:
    # student_id и subject_id намеренно отсутствуют
    return {
        "type": dto.type,
        "is_completed": dto.is_completed,
        "completion_date": completion_date_or_today(dto.completion_date, today),
    }


def evaluation_to_view(evaluation: Evaluation) -> EvaluationView:
    student = evaluation.student
    return EvaluationView(
        id=evaluation.id,
        subject_name=evaluation.subject.name,
        student_name=f"{student.first_name} {student.last_name}",
        type=evaluation.type,
        type_label=EVALUATION_TYPE_LABELS[evaluation.type],
        is_completed=evaluation.is_completed,
        is_completed_text=yes_no(evaluation.is_completed),
        completion_date=evaluation.completion_date,
    )


# --- User ------------------------------------------------------------------

def user_to_out(user: User) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=sorted(user.role_names),
    )
