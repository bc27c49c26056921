from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import LoginRuleFactory
from .attendance.policy import AttendancePolicy
from .attendance.suspension import ShortShiftSuspension
from .database.connection import DatabaseConnection, DBConfig
from .maintenance.service import MaintenanceService
from .notifications.broadcaster import ChangeBroadcaster
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftLedger
from .stats.service import StatsService
from .transactions.mysql_transaction_repository import MySQLTransactionRepository
from .transactions.repository import TransactionRepository
from .transactions.service import TransactionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    shifts_repo: ShiftRepository
    transactions_repo: TransactionRepository

    broadcaster: ChangeBroadcaster
    auth_service: AuthService
    user_service: UserService
    shift_ledger: ShiftLedger
    attendance_policy: AttendancePolicy
    transaction_service: TransactionService
    stats_service: StatsService
    maintenance_service: MaintenanceService


def wire(
    *,
    users_repo: UserRepository,
    shifts_repo: ShiftRepository,
    transactions_repo: TransactionRepository,
    broadcaster: Optional[ChangeBroadcaster] = None,
) -> Container:
    """Build services over any repository backend."""
    broadcaster = broadcaster or ChangeBroadcaster()

    suspension = ShortShiftSuspension(users_repo, shifts_repo)
    shift_ledger = ShiftLedger(shifts_repo, users_repo, suspension=suspension)
    attendance_policy = AttendancePolicy(users_repo, rule_factory=LoginRuleFactory(shift_ledger))

    return Container(
        users_repo=users_repo,
        shifts_repo=shifts_repo,
        transactions_repo=transactions_repo,
        broadcaster=broadcaster,
        auth_service=AuthService(users_repo, attendance_policy, shift_ledger),
        user_service=UserService(users_repo),
        shift_ledger=shift_ledger,
        attendance_policy=attendance_policy,
        transaction_service=TransactionService(transactions_repo, users_repo, broadcaster=broadcaster),
        stats_service=StatsService(transactions_repo, users_repo),
        maintenance_service=MaintenanceService(shift_ledger, attendance_policy),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        users_repo=MySQLUserRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        transactions_repo=MySQLTransactionRepository(conn),
    )
