from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..shifts.model import Shift
from .model import User
from .repository import UserRepository

if TYPE_CHECKING:
    from ..attendance.policy import AttendancePolicy
    from ..shifts.service import ShiftLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the caller keeps as its session after a successful login."""

    user: User
    shift: Optional[Shift] = None
    shift_created: bool = False

    def to_dict(self) -> dict:
        body = self.user.to_dict()
        body["shift"] = self.shift.to_dict() if self.shift else None
        return body


class AuthService:
    """Use case: log a user in, gated by the attendance rules.

    A staff login implicitly clocks the user in.
    """

    def __init__(self, users: UserRepository, policy: "AttendancePolicy", shifts: "ShiftLedger"):
        self._users = users
        self._policy = policy
        self._shifts = shifts

    def find_user(self, username: str) -> User:
        user = self._users.get_by_username((username or "").strip())
        if not user:
            raise AuthenticationError("User not found")
        return user

    def check_pin(self, user: User, pin: Optional[str]) -> User:
        if user.pin_hash:
            try:
                ok = check_password_hash(user.pin_hash, pin or "")
            except ValueError:
                # e.g. placeholder or corrupted hash values
                ok = False
            if not ok:
                raise AuthenticationError("Invalid PIN")
        return user

    def login(self, username: str, pin: Optional[str] = None, *, now: Optional[datetime] = None) -> LoginResult:
        now = now or now_local()
        user = self.find_user(username)
        # Early staff logins fail on the clock whatever PIN was sent.
        self._policy.ensure_within_login_hours(user, now=now)
        self.check_pin(user, pin)
        self._policy.ensure_can_login(user, now=now)

        if user.is_admin:
            logger.info("admin %s logged in", user.username)
            return LoginResult(user=user)

        result = self._shifts.clock_in(user.user_id, now=now)
        logger.info("staff %s logged in (shift %s)", user.username, result.shift.shift_id)
        return LoginResult(user=user, shift=result.shift, shift_created=result.created)


class UserService:
    """Use case: read and seed users."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def create_user(
        self,
        *,
        username: str,
        full_name: str,
        role: Role = Role.STAFF,
        pin: Optional[str] = None,
    ) -> User:
        username = require_non_empty(username, "username")
        full_name = require_non_empty(full_name, "name")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists", field="username")

        pin_hash = generate_password_hash(pin) if pin else None
        user_id = self._users.create_user(username=username, full_name=full_name, role=Role(role), pin_hash=pin_hash)
        created = self._users.get_by_id(user_id)
        if created is None:
            raise ValidationError("Failed to create user")
        return created
