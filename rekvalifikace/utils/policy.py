"""Иерархия привилегий и правила доступа.

SuperAdmin > Admin > Teacher > любой аутентифицированный пользователь.
Роль SuperAdmin может менять или удалять только SuperAdmin.
"""
from __future__ import annotations

import enum
from typing import Iterable

from rekvalifikace.errors import UnauthorizedError


class Privilege(enum.IntEnum):
    AUTHENTICATED = 0
    TEACHER = 1
    ADMIN = 2
    SUPER_ADMIN = 3


SUPER_ADMIN_ROLE = "SuperAdmin"
ADMIN_ROLE = "Admin"
TEACHER_ROLE = "Teacher"

_ROLE_PRIVILEGES = {
    SUPER_ADMIN_ROLE: Privilege.SUPER_ADMIN,
    ADMIN_ROLE: Privilege.ADMIN,
    TEACHER_ROLE: Privilege.TEACHER,
}

BUILTIN_ROLES = tuple(_ROLE_PRIVILEGES)


def privilege_of(role_names: Iterable[str]) -> Privilege:
    """Наивысшая привилегия из набора ролей; неизвестные роли ничего не дают."""
    levels = [_ROLE_PRIVILEGES[name] for name in role_names if name in _ROLE_PRIVILEGES]
    return max(levels, default=Privilege.AUTHENTICATED)


def is_protected_role(role_name: str | None) -> bool:
    return role_name == SUPER_ADMIN_ROLE


def require(role_names: Iterable[str], minimum: Privilege) -> Privilege:
    level = privilege_of(role_names)
    if level < minimum:
        raise UnauthorizedError(f"Требуется уровень доступа {minimum.name}")
    return level


def can_manage_role(role_names: Iterable[str], role_name: str | None) -> bool:
    level = privilege_of(role_names)
    if is_protected_role(role_name):
        return level >= Privilege.SUPER_ADMIN
    return level >= Privilege.ADMIN


def visible_roles(role_names: Iterable[str], roles: Iterable):
    """Admin не видит роль SuperAdmin; SuperAdmin видит всё."""
    if privilege_of(role_names) >= Privilege.SUPER_ADMIN:
        return list(roles)
    return [role for role in roles if not is_protected_role(role.name)]
