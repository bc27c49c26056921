from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, UserStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User (staff member or admin).

    Note: plain data object, no DB access. ``role`` never changes after creation;
    ``status``/``is_inactive`` are owned by the attendance policy.
    """

    user_id: int
    username: str
    full_name: str
    role: Role
    pin_hash: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE
    is_inactive: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "name": self.full_name,
            "role": self.role.value,
            "status": self.status.value,
            "isInactive": self.is_inactive,
        }
