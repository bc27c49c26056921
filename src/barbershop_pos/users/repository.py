from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role, UserStatus
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        full_name: str,
        role: Role,
        pin_hash: Optional[str],
    ) -> int:
        raise NotImplementedError

    def set_status(self, user_id: int, *, status: UserStatus, is_inactive: bool) -> bool:
        raise NotImplementedError

    def reset_inactive(self) -> int:
        """Put every flagged or suspended user back to active; returns rows changed."""

        raise NotImplementedError
