"""Schema/seed helpers used by ``scripts/`` and by ``create_app`` when AUTO_INIT_DB / AUTO_SEED_DB are set."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig
from .mysql_base import new_id

logger = logging.getLogger(__name__)

SQL_DIR = Path(__file__).resolve().parent
SCHEMA_PATH = SQL_DIR / "schema.sql"
SEED_PATH = SQL_DIR / "seed.sql"

# (name, email, password, role)
DEMO_ACCOUNTS = (
    ("Admin Demo", "admin@pu.edu", "admin123", Role.ADMIN),
    ("Staff Demo", "staff@pu.edu", "staff123", Role.STAFF),
    ("Student Demo", "student@pu.edu", "student123", Role.STUDENT),
)

_SQL_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|--[^\n]*|;|[^'\";-]+|-", re.S)
_DB_LEVEL_STMT = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.I)


@contextmanager
def _raw_connection(db_config: dict, *, with_database: bool = True) -> Iterator:
    config = DBConfig.from_settings(db_config)
    params = dict(host=config.host, port=config.port, user=config.user, password=config.password, use_pure=True)
    if with_database:
        params["database"] = config.database
    conn = mysql.connector.connect(**params)
    try:
        yield conn
    finally:
        conn.close()


def split_sql(sql: str) -> list[str]:
    """Split a script on ``;`` outside quotes, dropping ``--`` comments and CREATE DATABASE / USE lines.

    The target database always comes from DB_CONFIG, never from the file.
    """
    statements: list[str] = []
    current = ""
    for token in _SQL_TOKEN.findall(sql):
        if token.startswith("--"):
            continue
        if token == ";":
            statements.append(current.strip())
            current = ""
        else:
            current += token
    statements.append(current.strip())
    return [s for s in statements if s and not _DB_LEVEL_STMT.match(s)]


def _run_sql_file(db_config: dict, path: Union[str, Path]) -> int:
    statements = split_sql(Path(path).read_text(encoding="utf-8"))
    with _raw_connection(db_config) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_settings(db_config).database
    with _raw_connection(db_config, with_database=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: Union[str, Path] = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    count = _run_sql_file(db_config, schema_path)
    logger.info("Applied %d schema statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: Union[str, Path] = SEED_PATH) -> None:
    count = _run_sql_file(db_config, seed_path)
    logger.info("Applied %d seed statements from %s", count, seed_path)


def ensure_demo_accounts(db_config: dict) -> None:
    """Create, or reset the password of, one whitelisted and registered account per role."""
    with _raw_connection(db_config) as conn:
        cur = conn.cursor(dictionary=True)
        admin_id = None
        for name, email, password, role in DEMO_ACCOUNTS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT id FROM profiles WHERE email=%s", (email,))
            row = cur.fetchone()
            profile_id = row["id"] if row else new_id()
            cur.execute(
                """
                INSERT INTO profiles (id, name, email, role, password_hash)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), role=VALUES(role), password_hash=VALUES(password_hash)
                """,
                (profile_id, name, email, role.value, password_hash),
            )
            if role == Role.ADMIN:
                admin_id = profile_id

            cur.execute(
                """
                INSERT INTO whitelisted_users (id, email, name, role, added_by, is_active, is_registered, registered_at)
                VALUES (%s, %s, %s, %s, %s, 1, 1, NOW())
                ON DUPLICATE KEY UPDATE name=VALUES(name), role=VALUES(role),
                    is_active=1, is_registered=1, registered_at=COALESCE(registered_at, NOW())
                """,
                (new_id(), email, name, role.value, admin_id),
            )
        conn.commit()
    logger.info("Demo accounts ready: %s", ", ".join(a[1] for a in DEMO_ACCOUNTS))


def list_tables(db_config: dict) -> list[str]:
    with _raw_connection(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
