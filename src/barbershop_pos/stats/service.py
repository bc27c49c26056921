from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import now_local, start_of_day
from ..core.constants import UNKNOWN_RECIPIENT, UNMATCHED_USER_ID
from ..core.enums import TransactionType
from ..transactions.repository import TransactionRepository
from ..users.repository import UserRepository
from .model import DailyStats, LeaderboardEntry


class StatsService:
    """Read-side aggregation over today's transactions (local midnight onwards)."""

    def __init__(self, transactions: TransactionRepository, users: UserRepository):
        self._transactions = transactions
        self._users = users

    def _today(self, now: Optional[datetime]):
        return self._transactions.list_since(start_of_day((now or now_local()).date()))

    def daily_stats(self, *, now: Optional[datetime] = None) -> DailyStats:
        totals = {t: Decimal("0") for t in TransactionType}
        for tx in self._today(now):
            totals[tx.type] += tx.amount

        cash = totals[TransactionType.CASH]
        withdrawal = totals[TransactionType.WITHDRAWAL]
        return DailyStats(
            total_cash=cash,
            total_mpesa=totals[TransactionType.MPESA],
            total_withdrawal=withdrawal,
            # Withdrawals add to cash on hand in this shop (business rule, not a bug).
            liquid_cash=cash + withdrawal,
        )

    def mpesa_leaderboard(self, *, now: Optional[datetime] = None) -> list[LeaderboardEntry]:
        totals: dict[str, Decimal] = {}
        for tx in self._today(now):
            if tx.type != TransactionType.MPESA:
                continue
            name = tx.recipient or UNKNOWN_RECIPIENT
            totals[name] = totals.get(name, Decimal("0")) + tx.amount

        # Best-effort name match against display names; later duplicates win.
        ids_by_name = {u.full_name: u.user_id for u in self._users.list_all()}
        board = [
            LeaderboardEntry(user_id=ids_by_name.get(name, UNMATCHED_USER_ID), name=name, total_mpesa=total)
            for name, total in totals.items()
        ]
        board.sort(key=lambda e: e.total_mpesa, reverse=True)
        return board
