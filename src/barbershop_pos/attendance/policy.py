from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import UserStatus
from ..core.exceptions import AuthorizationError, NotFoundError, PolicyBlockError
from ..users.model import User
from ..users.repository import UserRepository
from .factory import LoginRuleFactory
from .rules.hours_rule import OutsideHoursRule

logger = logging.getLogger(__name__)


class AttendancePolicy:
    """Use case: attendance decisions (login gating, suspend, recall, reset)."""

    def __init__(self, users: UserRepository, *, rule_factory: LoginRuleFactory):
        self._users = users
        self._factory = rule_factory

    def ensure_can_login(self, user: User, *, now: Optional[datetime] = None) -> None:
        now = now or now_local()
        for rule in self._factory.for_user(user):
            rule.enforce(user, now=now)

    def ensure_within_login_hours(self, user: User, *, now: Optional[datetime] = None) -> None:
        """Opening-hours gate applied before the PIN is looked at; admins are exempt."""
        if user.is_admin:
            return
        OutsideHoursRule().enforce(user, now=now or now_local())

    def can_login(self, user: User, *, now: Optional[datetime] = None) -> bool:
        try:
            self.ensure_can_login(user, now=now)
        except PolicyBlockError:
            return False
        return True

    def suspend(self, target_id: int, *, by_admin_id: int) -> User:
        self._require_admin(by_admin_id, "Only admin can suspend users.")
        user = self._set_status(target_id, UserStatus.SUSPENDED, is_inactive=True)
        logger.info("user %s suspended by admin %s", target_id, by_admin_id)
        return user

    def recall(self, target_id: int, *, by_admin_id: int) -> User:
        self._require_admin(by_admin_id, "Only admin can recall users.")
        user = self._set_status(target_id, UserStatus.ACTIVE, is_inactive=False)
        logger.info("user %s recalled by admin %s", target_id, by_admin_id)
        return user

    def reset_inactive_users(self) -> int:
        count = self._users.reset_inactive()
        logger.info("reset %d inactive/suspended user(s)", count)
        return count

    def _require_admin(self, actor_id: int, message: str) -> User:
        actor = self._users.get_by_id(int(actor_id)) if actor_id is not None else None
        if not actor or not actor.is_admin:
            raise AuthorizationError(message)
        return actor

    def _set_status(self, target_id: int, status: UserStatus, *, is_inactive: bool) -> User:
        if not self._users.set_status(int(target_id), status=status, is_inactive=is_inactive):
            raise NotFoundError("User not found")
        user = self._users.get_by_id(int(target_id))
        if user is None:
            raise NotFoundError("User not found")
        return user
