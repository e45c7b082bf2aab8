"""Database connection and schema setup."""

from __future__ import annotations

import os
import sqlite3
from urllib.parse import parse_qs, quote

from .errors import DatabaseError, MigrationError, ServerError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    status TEXT NOT NULL,
    priority TEXT NOT NULL,
    due_date TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS task_tags (
    task_id TEXT NOT NULL,
    tag TEXT
);
"""


def _connect_target(database_url: str) -> tuple[str, bool]:
    for prefix in ("sqlite://", "sqlite:"):
        if database_url.startswith(prefix):
            rest = database_url[len(prefix):]
            break
    else:
        raise DatabaseError(f"unsupported database url {database_url!r}")

    path, _, query = rest.partition("?")
    if path in ("", ":memory:"):
        return ":memory:", False
    mode = parse_qs(query).get("mode", ["rw"])[-1]
    return f"file:{quote(path, safe='/')}?mode={quote(mode)}", True


def get_connection(database_url: str | None = None) -> sqlite3.Connection:
    """Open the database named by the URL, or by DATABASE_URL when none is given."""
    if database_url is None:
        database_url = os.environ.get("DATABASE_URL")
        if database_url is None:
            raise ServerError("DATABASE_URL must be set")

    target, is_uri = _connect_target(database_url)
    try:
        connection = sqlite3.connect(target, uri=is_uri, check_same_thread=False)
    except sqlite3.Error as exc:
        raise DatabaseError(str(exc)) from exc
    connection.row_factory = sqlite3.Row
    return connection


def migrate(connection: sqlite3.Connection) -> None:
    """Create the tables the service needs, if they are missing."""
    try:
        connection.executescript(_SCHEMA)
    except sqlite3.Error as exc:
        raise MigrationError(str(exc)) from exc