from __future__ import annotations

import pytest

from barbershop_pos.core.enums import Role, UserStatus
from barbershop_pos.core.exceptions import AuthorizationError, NotFoundError
from tests.fakes import make_container


@pytest.fixture
def c():
    return make_container()


def test_admin_suspends_then_recalls(c):
    admin = c.users_repo.add("Admin", role=Role.ADMIN)
    jay = c.users_repo.add("Jay")

    suspended = c.attendance_policy.suspend(jay.user_id, by_admin_id=admin.user_id)
    assert suspended.status == UserStatus.SUSPENDED
    assert suspended.is_inactive is True

    recalled = c.attendance_policy.recall(jay.user_id, by_admin_id=admin.user_id)
    assert recalled.status == UserStatus.ACTIVE
    assert recalled.is_inactive is False


def test_staff_cannot_suspend_or_recall(c):
    jay = c.users_repo.add("Jay")
    cate = c.users_repo.add("Cate", status=UserStatus.SUSPENDED, is_inactive=True)

    with pytest.raises(AuthorizationError):
        c.attendance_policy.suspend(jay.user_id, by_admin_id=cate.user_id)
    with pytest.raises(AuthorizationError):
        c.attendance_policy.recall(cate.user_id, by_admin_id=jay.user_id)

    assert c.users_repo.get_by_id(jay.user_id).status == UserStatus.ACTIVE
    assert c.users_repo.get_by_id(cate.user_id).status == UserStatus.SUSPENDED


def test_unknown_actor_is_forbidden_and_unknown_target_not_found(c):
    admin = c.users_repo.add("Admin", role=Role.ADMIN)

    with pytest.raises(AuthorizationError):
        c.attendance_policy.suspend(admin.user_id, by_admin_id=404)
    with pytest.raises(NotFoundError):
        c.attendance_policy.suspend(404, by_admin_id=admin.user_id)


def test_reset_inactive_users_clears_both_block_states(c):
    c.users_repo.add("Jay", status=UserStatus.SUSPENDED, is_inactive=True)
    c.users_repo.add("Cate", status=UserStatus.AWAY, is_inactive=True)
    c.users_repo.add("Samir")

    assert c.attendance_policy.reset_inactive_users() == 2
    assert all(u.status == UserStatus.ACTIVE and not u.is_inactive for u in c.users_repo.list_all())
