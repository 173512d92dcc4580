from __future__ import annotations

from types import SimpleNamespace

import pytest

from rekvalifikace.errors import UnauthorizedError
from rekvalifikace.utils import policy
from rekvalifikace.utils.policy import Privilege


def test_privilege_is_highest_known_role() -> None:
    assert policy.privilege_of([]) is Privilege.AUTHENTICATED
    assert policy.privilege_of(["Lektor"]) is Privilege.AUTHENTICATED
    assert policy.privilege_of(["Teacher"]) is Privilege.TEACHER
    assert policy.privilege_of(["Teacher", "Admin"]) is Privilege.ADMIN
    assert policy.privilege_of({"SuperAdmin", "Teacher"}) is Privilege.SUPER_ADMIN


def test_require_refuses_lower_levels() -> None:
    assert policy.require(["Admin"], Privilege.TEACHER) is Privilege.ADMIN
    with pytest.raises(UnauthorizedError):
        policy.require(["Teacher"], Privilege.ADMIN)


def test_only_superadmin_manages_superadmin_role() -> None:
    assert policy.can_manage_role(["SuperAdmin"], "SuperAdmin")
    assert not policy.can_manage_role(["Admin"], "SuperAdmin")
    assert policy.can_manage_role(["Admin"], "Teacher")
    assert not policy.can_manage_role(["Teacher"], "Teacher")


def test_admin_does_not_see_superadmin_role() -> None:
    roles = [SimpleNamespace(name=name) for name in ("Admin", "SuperAdmin", "Teacher")]

    visible_to_admin = [r.name for r in policy.visible_roles(["Admin"], roles)]
    visible_to_super = [r.name for r in policy.visible_roles(["SuperAdmin"], roles)]

    assert visible_to_admin == ["Admin", "Teacher"]
    assert visible_to_super == ["Admin", "SuperAdmin", "Teacher"]
