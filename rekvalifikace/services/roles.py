"""Роли и сверка членства пользователей в роли.

Сессия редактирования роли: Loaded (роль и текущие участники) ->
Reconciling (добавления/удаления) -> Persisted, либо Rejected, если политика
доступа запрещает трогать эту роль. Rejected ничего не меняет.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from rekvalifikace.errors import (
    ConflictError,
    IntegrityConflictError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from rekvalifikace.models.user import Role, User
from rekvalifikace.utils import policy

logger = logging.getLogger(__name__)


@dataclass
class RoleEdit:
    role: Role
    members: List[User]
    non_members: List[User]


@dataclass(frozen=True)
class MembershipFailure:
    user_id: int
    reason: str


@dataclass
class ReconcileResult:
    role_name: str
    added: List[int] = field(default_factory=list)
    removed: List[int] = field(default_factory=list)
    failures: List[MembershipFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class RoleService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list_roles(self, caller_roles: Iterable[str]) -> List[Role]:
        roles = self.db.query(Role).order_by(Role.name).all()
        return policy.visible_roles(caller_roles, roles)

    def get_by_name(self, name: str) -> Role | None:
        return self.db.query(Role).filter(Role.name == name).first()

    def create_role(self, name: str, caller_roles: Iterable[str]) -> Role:
        name = (name or "").strip()
        self._guard(caller_roles, name)
        if not name:
            raise ValidationError("Название роли обязательно")
        if self.get_by_name(name) is not None:
            raise ValidationError(f"Роль {name} уже существует")

        role = Role(name=name)
        self.db.add(role)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError(f"Роль {name} уже существует") from exc
        logger.info("Роль %s создана", name)
        return role

    def load_role_edit(self, role_id: int, caller_roles: Iterable[str]) -> RoleEdit:
        role = self.db.get(Role, role_id)
        if role is None:
            raise NotFoundError("Роль", role_id)
        self._guard(caller_roles, role.name)

        members, non_members = [], []
        for user in self.db.query(User).order_by(User.username).all():
            (members if role in user.roles else non_members).append(user)
        return RoleEdit(role=role, members=members, non_members=non_members)

    def reconcile_membership(
        self,
        role_name: str,
        to_add: Iterable[int],
        to_remove: Iterable[int],
        caller_roles: Iterable[str],
    ) -> ReconcileResult:
        """Добавляет to_add и убирает to_remove; ошибки по отдельным id копятся.

        Уже состоящий участник и удаление не-участника — no-op. Id, попавший
        в оба набора, сначала добавляется, потом удаляется.
        """
        self._guard(caller_roles, role_name)

        role = self.get_by_name(role_name)
        if role is None:
            raise NotFoundError("Роль", role_name)

        result = ReconcileResult(role_name=role_name)
        for user_id in sorted(set(to_add)):
            user = self.db.get(User, user_id)
            if user is None:
                result.failures.append(MembershipFailure(user_id, "пользователь не найден"))
            elif role not in user.roles:
                user.roles.append(role)
                if self._commit_membership(result, user_id):
                    result.added.append(user_id)

        for user_id in sorted(set(to_remove)):
            user = self.db.get(User, user_id)
            if user is None:
                result.failures.append(MembershipFailure(user_id, "пользователь не найден"))
            elif role in user.roles:
                user.roles.remove(role)
                if self._commit_membership(result, user_id):
                    result.removed.append(user_id)

        for failure in result.failures:
            logger.warning("Роль %s: id %s пропущен (%s)", role_name, failure.user_id, failure.reason)
        logger.info(
            "Роль %s: добавлено %s, удалено %s", role_name, result.added, result.removed
        )
        return result

    def delete_role(self, role_id: int, caller_roles: Iterable[str]) -> None:
        role = self.db.get(Role, role_id)
        if role is None:
            raise NotFoundError("Роль", role_id)
        role_name = role.name
        self._guard(caller_roles, role_name)

        self.db.delete(role)
        try:
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            if self.db.get(Role, role_id) is None:
                raise NotFoundError("Роль", role_id)
            raise ConflictError("Роль", role_id)
        except IntegrityError as exc:
            self.db.rollback()
            raise IntegrityConflictError(f"Роль {role_name} нельзя удалить") from exc
        logger.info("Роль %s удалена", role_name)

    def _commit_membership(self, result: ReconcileResult, user_id: int) -> bool:
        """Каждое изменение членства — отдельная единица работы."""
        try:
            self.db.commit()
        except (IntegrityError, StaleDataError) as exc:
            # пользователя удалили параллельно; остальные id не страдают
            self.db.rollback()
            logger.debug("Роль %s: id %s отклонён хранилищем: %s", result.role_name, user_id, exc)
            result.failures.append(MembershipFailure(user_id, "изменено параллельно"))
            return False
        return True

    @staticmethod
    def _guard(caller_roles: Iterable[str], role_name: str) -> None:
        caller_roles = set(caller_roles)
        if not policy.can_manage_role(caller_roles, role_name):
            logger.warning("Отказано: роли %s не могут менять роль %s", sorted(caller_roles), role_name)
            raise UnauthorizedError(f"Недостаточно прав для изменения роли {role_name}")
