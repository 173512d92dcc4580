"""Оптимистичная блокировка: конфликт против «запись уже удалена»."""
from __future__ import annotations

import pytest
from sqlalchemy import event

from conftest import teacher_dto
from rekvalifikace.errors import ConflictError, NotFoundError
from rekvalifikace.models.subject import Subject
from rekvalifikace.models.teacher import Teacher
from rekvalifikace.schemas.subject import SubjectDto
from rekvalifikace.services.subject import SubjectService
from rekvalifikace.services.teacher import TeacherService


@pytest.fixture()
def stored_teacher_id(session_factory) -> int:
    with session_factory() as setup:
        return TeacherService(setup).create(teacher_dto())


def test_stale_version_token_is_conflict(db, teacher_id) -> None:
    service = TeacherService(db)
    loaded = service.get_by_id(teacher_id)

    service.update(teacher_id, loaded.model_copy(update={"first_name": "Eva"}))

    with pytest.raises(ConflictError):
        service.update(teacher_id, loaded.model_copy(update={"first_name": "Marie"}))
    assert service.get_by_id(teacher_id).first_name == "Eva"


def test_current_version_token_is_accepted(db, teacher_id) -> None:
    service = TeacherService(db)

    first = service.get_by_id(teacher_id)
    service.update(teacher_id, first.model_copy(update={"first_name": "Eva"}))
    second = service.get_by_id(teacher_id)
    service.update(teacher_id, second.model_copy(update={"first_name": "Marie"}))

    assert service.get_by_id(teacher_id).version == 3


def test_write_racing_between_load_and_save_is_conflict(session_factory, stored_teacher_id) -> None:
    first = session_factory()
    second = session_factory()
    try:
        # первый писатель уже держит строку версии 1
        loaded = first.get(Teacher, stored_teacher_id)

        TeacherService(second).update(stored_teacher_id, teacher_dto("Eva", "Novák"))
        assert loaded.version == 1

        with pytest.raises(ConflictError):
            TeacherService(first).update(stored_teacher_id, teacher_dto("Marie", "Novák"))

        assert TeacherService(first).get_by_id(stored_teacher_id).first_name == "Eva"
    finally:
        first.close()
        second.close()


def test_row_deleted_by_other_writer_is_not_found(session_factory, stored_teacher_id) -> None:
    first = session_factory()
    second = session_factory()
    try:
        loaded = first.get(Teacher, stored_teacher_id)

        TeacherService(second).delete(stored_teacher_id)

        with pytest.raises(NotFoundError):
            TeacherService(first).update(stored_teacher_id, teacher_dto("Marie", "Novák"))
    finally:
        first.close()
        second.close()


def test_subject_racing_update_is_conflict(session_factory, stored_teacher_id) -> None:
    with session_factory() as setup:
        subject_id = SubjectService(setup).create(
            SubjectDto(name="Matematika", teacher_id=stored_teacher_id)
        )

    first = session_factory()
    second = session_factory()
    try:
        loaded = first.get(Subject, subject_id)
        SubjectService(second).update(
            subject_id, SubjectDto(name="Algebra", teacher_id=stored_teacher_id)
        )

        assert loaded.version == 1
        with pytest.raises(ConflictError):
            SubjectService(first).update(
                subject_id, SubjectDto(name="Geometrie", teacher_id=stored_teacher_id)
            )
    finally:
        first.close()
        second.close()


def test_row_deleted_between_load_and_flush_is_not_found(session_factory, stored_teacher_id) -> None:
    first = session_factory()
    second = session_factory()
    seen = []

    @event.listens_for(first, "before_flush")
    def delete_meanwhile(session, flush_context, instances):
        # строка уже загружена первым писателем, UPDATE ещё не отправлен
        if not seen:
            seen.append(True)
            TeacherService(second).delete(stored_teacher_id)

    try:
        with pytest.raises(NotFoundError):
            TeacherService(first).update(stored_teacher_id, teacher_dto("Marie", "Novák"))

        assert seen == [True]
        assert not TeacherService(first).exists(stored_teacher_id)
    finally:
        first.close()
        second.close()


def test_write_between_load_and_flush_is_conflict(session_factory, stored_teacher_id) -> None:
    first = session_factory()
    second = session_factory()
    seen = []

    @event.listens_for(first, "before_flush")
    def update_meanwhile(session, flush_context, instances):
        if not seen:
            seen.append(True)
            TeacherService(second).update(stored_teacher_id, teacher_dto("Eva", "Novák"))

    try:
        with pytest.raises(ConflictError):
            TeacherService(first).update(stored_teacher_id, teacher_dto("Marie", "Novák"))

        assert TeacherService(first).get_by_id(stored_teacher_id).first_name == "Eva"
    finally:
        first.close()
        second.close()
