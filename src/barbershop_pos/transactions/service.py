from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import (
    optional_text,
    require_amount,
    require_int,
    require_non_empty,
    to_amount,
)
from ..core.enums import TransactionType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications.broadcaster import TRANSACTIONS_CHANGED, ChangeBroadcaster
from ..users.repository import UserRepository
from .model import ClientServed, NewTransaction, Transaction, TransactionWithUser
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

# API field name -> column-level field name
_API_TO_FIELD = {
    "userId": "user_id",
    "type": "type",
    "amount": "amount",
    "clientName": "client_name",
    "groomedBy": "groomed_by",
    "servedBy": "served_by",
    "recipient": "recipient",
    "mpesaRef": "mpesa_ref",
    "description": "description",
}


def _parse_type(value: Any) -> TransactionType:
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("type must be one of cash, mpesa, withdrawal", field="type")


class TransactionService:
    """Use case: the append-only log of cash, M-Pesa and withdrawal events.

    Every mutation publishes ``transactions_changed`` to the broadcaster.
    """

    def __init__(
        self,
        transactions: TransactionRepository,
        users: UserRepository,
        *,
        broadcaster: Optional[ChangeBroadcaster] = None,
    ):
        self._transactions = transactions
        self._users = users
        self._broadcaster = broadcaster

    def validate(self, fields: Mapping[str, Any]) -> NewTransaction:
        """Check input in a fixed order; the first bad field is reported."""
        user_id = require_int(fields.get("userId"), "userId")
        tx_type = _parse_type(fields.get("type"))
        amount = require_amount(fields.get("amount"), "amount")
        groomed_by = require_non_empty(fields.get("groomedBy"), "groomedBy")
        served_by = require_non_empty(fields.get("servedBy"), "servedBy")

        recipient = optional_text(fields.get("recipient"))
        if tx_type.needs_recipient and not recipient:
            raise ValidationError(f"recipient is required for {tx_type.value}", field="recipient")

        return NewTransaction(
            user_id=user_id,
            type=tx_type,
            amount=amount,
            groomed_by=groomed_by,
            served_by=served_by,
            client_name=optional_text(fields.get("clientName")),
            recipient=recipient,
            mpesa_ref=optional_text(fields.get("mpesaRef")) if tx_type == TransactionType.MPESA else None,
            description=optional_text(fields.get("description")),
        )

    def create(self, fields: Mapping[str, Any], *, now: Optional[datetime] = None) -> Transaction:
        new = self.validate(fields)
        transaction_id = self._transactions.create(new, created_at=now or now_local())
        created = self._require(transaction_id)
        self._notify()
        return created

    def update(self, transaction_id: int, fields: Mapping[str, Any]) -> Transaction:
        """Merge ``fields`` into the record. Only types are coerced; nothing is re-validated."""
        if not self._transactions.get_by_id(int(transaction_id)):
            raise NotFoundError("Transaction not found")

        changes: dict[str, Any] = {}
        for api_name, field in _API_TO_FIELD.items():
            if api_name not in fields:
                continue
            value = fields[api_name]
            if field == "amount":
                value = to_amount(value)
            elif field == "type":
                value = _parse_type(value)
            elif field == "user_id":
                value = require_int(value, "userId")
            changes[field] = value

        if changes:
            self._transactions.update_fields(int(transaction_id), changes)
        updated = self._require(int(transaction_id))
        self._notify()
        return updated

    def delete(self, transaction_id: int, *, actor_id: Optional[int]) -> dict:
        actor = self._users.get_by_id(int(actor_id)) if actor_id is not None else None
        if not actor or not actor.is_admin:
            raise AuthorizationError("Only admin can delete transactions")

        if not self._transactions.delete_by_id(int(transaction_id)):
            raise NotFoundError("Transaction not found")

        logger.info("transaction %s deleted by admin %s", transaction_id, actor.user_id)
        self._notify()
        return {"id": int(transaction_id), "deleted": True}

    def list(self) -> Sequence[TransactionWithUser]:
        return self._transactions.list_with_users()

    def clients_served(self) -> Sequence[ClientServed]:
        return self._transactions.list_clients_served()

    def _notify(self) -> None:
        if self._broadcaster:
            self._broadcaster.publish(TRANSACTIONS_CHANGED)

    def _require(self, transaction_id: int) -> Transaction:
        tx = self._transactions.get_by_id(transaction_id)
        if tx is None:
            raise NotFoundError("Transaction not found")
        return tx
