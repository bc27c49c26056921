from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class DailyStats:
    """Today's totals. ``liquid_cash`` is cash + withdrawal (shop's own definition)."""

    total_cash: Decimal
    total_mpesa: Decimal
    total_withdrawal: Decimal
    liquid_cash: Decimal

    def to_dict(self) -> dict:
        return {
            "totalCash": float(self.total_cash),
            "totalMpesa": float(self.total_mpesa),
            "totalWithdrawal": float(self.total_withdrawal),
            "liquidCash": float(self.liquid_cash),
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    user_id: int
    name: str
    total_mpesa: Decimal

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "name": self.name, "totalMpesa": float(self.total_mpesa)}
