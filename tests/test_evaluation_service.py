from __future__ import annotations

from datetime import date

import pytest

from conftest import student_dto
from rekvalifikace.errors import IntegrityConflictError, NotFoundError, ReferenceNotFoundError
from rekvalifikace.models.evaluation import Evaluation, EvaluationType
from rekvalifikace.schemas.evaluation import EvaluationDto
from rekvalifikace.schemas.subject import SubjectDto
from rekvalifikace.services.evaluation import EvaluationService
from rekvalifikace.services.student import StudentService
from rekvalifikace.services.subject import SubjectService


def test_evaluation_scenario(db, student_id, subject_id) -> None:
    service = EvaluationService(db)

    evaluation_id = service.create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )
    assert service.exists(evaluation_id)

    with pytest.raises(ReferenceNotFoundError) as excinfo:
        service.create(
            EvaluationDto(student_id=9999, subject_id=subject_id, type=EvaluationType.EXAM)
        )

    assert excinfo.value.entity_id == 9999
    assert db.query(Evaluation).count() == 1


def test_unset_completion_date_becomes_today(db, student_id, subject_id) -> None:
    service = EvaluationService(db)

    unset_id = service.create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )
    minimum_id = service.create(
        EvaluationDto(
            student_id=student_id,
            subject_id=subject_id,
            type=EvaluationType.PROJECT,
            completion_date=date.min,
        )
    )

    assert service.get_by_id(unset_id).completion_date == date.today()
    assert service.get_by_id(minimum_id).completion_date == date.today()


def test_explicit_completion_date_is_kept(db, student_id, subject_id) -> None:
    service = EvaluationService(db)

    evaluation_id = service.create(
        EvaluationDto(
            student_id=student_id,
            subject_id=subject_id,
            type=EvaluationType.PROJECT,
            is_completed=True,
            completion_date=date(2024, 6, 30),
        )
    )

    stored = service.get_by_id(evaluation_id)
    assert stored.completion_date == date(2024, 6, 30)
    assert stored.is_completed


def test_update_reassigns_both_references(db, teacher_id, student_id, subject_id) -> None:
    service = EvaluationService(db)
    evaluation_id = service.create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )
    other_student = StudentService(db).create(student_dto("Lucie", "Malá"))
    other_subject = SubjectService(db).create(SubjectDto(name="Fyzika", teacher_id=teacher_id))

    service.update(
        evaluation_id,
        EvaluationDto(
            student_id=other_student,
            subject_id=other_subject,
            type=EvaluationType.PROJECT,
            is_completed=True,
        ),
    )

    views = service.list_views()
    assert [(v.student_name, v.subject_name, v.type_label) for v in views] == [
        ("Lucie Malá", "Fyzika", "Projekt")
    ]


def test_failed_second_reference_keeps_first_reassignment_out(db, student_id, subject_id) -> None:
    service = EvaluationService(db)
    evaluation_id = service.create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )
    other_student = StudentService(db).create(student_dto("Lucie", "Malá"))

    with pytest.raises(ReferenceNotFoundError):
        service.update(
            evaluation_id,
            EvaluationDto(student_id=other_student, subject_id=9999, type=EvaluationType.EXAM),
        )
    db.commit()

    stored = service.get_by_id(evaluation_id)
    assert stored.student_id == student_id
    assert stored.subject_id == subject_id


def test_delete(db, student_id, subject_id) -> None:
    service = EvaluationService(db)
    evaluation_id = service.create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )

    service.delete(evaluation_id)

    assert service.get_by_id(evaluation_id) is None
    with pytest.raises(NotFoundError):
        service.delete(evaluation_id)


def test_student_with_evaluations_cannot_be_deleted(db, student_id, subject_id) -> None:
    EvaluationService(db).create(
        EvaluationDto(student_id=student_id, subject_id=subject_id, type=EvaluationType.EXAM)
    )

    with pytest.raises(IntegrityConflictError):
        StudentService(db).delete(student_id)


def test_options_are_sorted_for_selects(db, teacher_id, student_id, subject_id) -> None:
    StudentService(db).create(student_dto("Lucie", "Adamová"))
    SubjectService(db).create(SubjectDto(name="Angličtina", teacher_id=teacher_id))

    options = EvaluationService(db).options()

    assert [s.full_name for s in options.students] == ["Lucie Adamová", "Petr Svoboda"]
    assert [s.name for s in options.subjects] == ["Angličtina", "Matematika"]
