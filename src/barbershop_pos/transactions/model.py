from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import TransactionType
from ..users.model import User


@dataclass(frozen=True)
class NewTransaction:
    """Validated input for a transaction about to be logged."""

    user_id: int
    type: TransactionType
    amount: Decimal
    groomed_by: str
    served_by: str
    client_name: Optional[str] = None
    recipient: Optional[str] = None
    mpesa_ref: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Domain entity: one monetary event. ``created_at`` decides which day it belongs to."""

    transaction_id: int
    user_id: int
    type: TransactionType
    amount: Decimal
    groomed_by: str
    served_by: str
    created_at: datetime
    client_name: Optional[str] = None
    recipient: Optional[str] = None
    mpesa_ref: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.transaction_id,
            "userId": self.user_id,
            "type": self.type.value,
            "amount": float(self.amount),
            "clientName": self.client_name,
            "groomedBy": self.groomed_by,
            "servedBy": self.served_by,
            "recipient": self.recipient,
            "mpesaRef": self.mpesa_ref,
            "description": self.description,
            "createdAt": to_iso(self.created_at),
        }


@dataclass(frozen=True)
class TransactionWithUser:
    """Read-model for the activity list; ``user`` is None if the logger is gone."""

    transaction: Transaction
    user: Optional[User] = None

    def to_dict(self) -> dict:
        body = self.transaction.to_dict()
        body["user"] = self.user.to_dict() if self.user else None
        return body


@dataclass(frozen=True)
class ClientServed:
    created_at: datetime
    client_name: Optional[str]
    served_by: str
    groomed_by: str

    def to_dict(self) -> dict:
        return {
            "createdAt": to_iso(self.created_at),
            "clientName": self.client_name,
            "servedBy": self.served_by,
            "groomedBy": self.groomed_by,
        }
