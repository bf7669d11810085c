"""Schema bootstrap for the persisted attendance store (idempotent)."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)


def as_db_config(db_config: dict) -> DBConfig:
    return DBConfig(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "timeclock_db")),
    )


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema file on ';' outside of quoted strings. Comment lines are dropped."""
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    sql = re.sub(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$", "", sql)

    buf: list[str] = []
    quote = ""
    for ch in sql:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    target = as_db_config(db_config)

    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()

    sql = Path(schema_path).read_text(encoding="utf-8")
    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
        cur.execute("SHOW TABLES")
        logger.info("Schema ready in %s (%d tables)", target.database, len(cur.fetchall()))
    finally:
        conn.close()
