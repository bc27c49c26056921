from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# (full_name, username, role, pin)
DEMO_USERS = (
    ("Ng'ash", "ngash", "staff", "1111"),
    ("Jay", "jay", "staff", "2222"),
    ("Samir", "samir", "staff", "3333"),
    ("Esther", "esther", "staff", "4444"),
    ("Cate", "cate", "staff", "5555"),
    ("Admin", "admin", "admin", "0000"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_script(conn_factory: DatabaseConnection, sql: str) -> None:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    _exec_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(seed_path).read_text(encoding="utf-8"))
    _exec_script(DatabaseConnection(DBConfig.from_dict(db_config)), sql)
    logger.info("seed applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> int:
    """Insert the demo staff and admin if missing; existing users are left untouched."""
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    created = 0
    try:
        cur = conn.cursor(dictionary=True)
        for full_name, username, role, pin in DEMO_USERS:
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO users (username, full_name, role, pin_hash, status, is_inactive)
                VALUES (%s, %s, %s, %s, 'active', 0)
                """,
                (username, full_name, role, generate_password_hash(pin)),
            )
            created += 1
        conn.commit()
    finally:
        conn.close()
    logger.info("demo users ensured (%d created)", created)
    return created


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
