from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from rekvalifikace.database import build_engine, init_db
from rekvalifikace.models.user import Role, User
from rekvalifikace.schemas.student import StudentDto
from rekvalifikace.schemas.subject import SubjectDto
from rekvalifikace.schemas.teacher import TeacherDto
from rekvalifikace.services.student import StudentService
from rekvalifikace.services.subject import SubjectService
from rekvalifikace.services.teacher import TeacherService


@pytest.fixture()
def engine(tmp_path: Path):
    engine = build_engine(f"sqlite:///{tmp_path / 'rekvalifikace.sqlite3'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


def teacher_dto(first_name: str = "Jana", last_name: str = "Novák", **extra) -> TeacherDto:
    return TeacherDto(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=extra.pop("date_of_birth", date(1980, 5, 1)),
        **extra,
    )


def student_dto(first_name: str = "Petr", last_name: str = "Svoboda", **extra) -> StudentDto:
    return StudentDto(
        first_name=first_name,
        last_name=last_name,
        date_of_birth=extra.pop("date_of_birth", date(2001, 9, 12)),
        **extra,
    )


@pytest.fixture()
def teacher_id(db: Session) -> int:
    return TeacherService(db).create(teacher_dto())


@pytest.fixture()
def student_id(db: Session) -> int:
    return StudentService(db).create(student_dto())


@pytest.fixture()
def subject_id(db: Session, teacher_id: int) -> int:
    return SubjectService(db).create(
        SubjectDto(name="Matematika", teacher_id=teacher_id, has_exam=True, has_project=False)
    )


def make_user(db: Session, username: str, *role_names: str) -> User:
    """Пользователь без настоящего пароля — для тестов ролей хватает."""
    user = User(username=username, email=f"{username}@skola.cz", password_hash="!")
    for name in role_names:
        user.roles.append(db.query(Role).filter(Role.name == name).one())
    db.add(user)
    db.commit()
    return user


def member_ids(db: Session, role_name: str) -> set[int]:
    db.expire_all()
    role = db.query(Role).filter(Role.name == role_name).one()
    return {user.id for user in role.users}
