from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import ClientServed, NewTransaction, Transaction, TransactionWithUser

# Column-level field names accepted by ``update_fields``.
UPDATABLE_FIELDS = (
    "user_id",
    "type",
    "amount",
    "client_name",
    "groomed_by",
    "served_by",
    "recipient",
    "mpesa_ref",
    "description",
)


class TransactionRepository(Protocol):
    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        raise NotImplementedError

    def create(self, new: NewTransaction, *, created_at: datetime) -> int:
        raise NotImplementedError

    def update_fields(self, transaction_id: int, fields: Mapping[str, Any]) -> bool:
        """Write the given subset of ``UPDATABLE_FIELDS``."""

        raise NotImplementedError

    def delete_by_id(self, transaction_id: int) -> bool:
        raise NotImplementedError

    def list_with_users(self) -> Sequence[TransactionWithUser]:
        """Newest-first, left-joined with the logging user."""

        raise NotImplementedError

    def list_since(self, start: datetime) -> Sequence[Transaction]:
        raise NotImplementedError

    def list_clients_served(self) -> Sequence[ClientServed]:
        raise NotImplementedError
