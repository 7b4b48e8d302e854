from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

from .connection import DatabaseConnection
from .mysql_base import db_cursor

logger = logging.getLogger(__name__)


def schema_statements(sql: str) -> List[str]:
    """Split a schema file into statements. Schema DDL never quotes ';'."""
    sql = re.sub(r"(?m)^\s*--.*$", "", sql)
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path) -> int:
    """Create the ledger database and tables if missing; returns the statement count."""
    conn_factory.create_database()
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in statements:
            cur.execute(stmt)
    logger.info("Ledger schema applied (%d statements)", len(statements))
    return len(statements)
