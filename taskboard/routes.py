"""HTTP routes for creating, reading, listing, changing and tagging tasks."""

from __future__ import annotations

import sqlite3
import threading
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from flask import Flask, Response, jsonify, request

from .errors import AppError, DatabaseError, NotFoundError, ValidationError
from .models import (
    CreateTask,
    ListQuery,
    Priority,
    Status,
    TagBody,
    Task,
    UpdateTask,
)

_SORTABLE_FIELDS = frozenset(
    {"title", "priority", "status", "due_date", "created_at", "updated_at"}
)

_INSERT_TASK = (
    "INSERT INTO tasks (id, title, description, status, priority, due_date, created_at, updated_at) "
    "VALUES (?, ?, ?, ?, ?, ?, ?, ?)"
)
_INSERT_TAG = "INSERT INTO task_tags (task_id, tag) VALUES (?, ?)"
_UPDATE_TASK = (
    "UPDATE tasks SET title = ?, description = ?, status = ?, priority = ?, "
    "due_date = ?, updated_at = ? WHERE id = ?"
)


def _stored(moment: datetime | None) -> str | None:
    if moment is None:
        return None
    return moment.astimezone(timezone.utc).isoformat()


def _from_stored(text: str) -> datetime:
    try:
        moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DatabaseError(f"invalid stored timestamp {text!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _parse_uuid(text: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except ValueError as exc:
        raise ValidationError(f"invalid task id {text!r}") from exc


def _json_body() -> Any:
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("request body must be JSON")
    return data


def _load_tags(connection: sqlite3.Connection, task_id: str) -> list[str]:
    rows = connection.execute("SELECT tag FROM task_tags WHERE task_id = ?", (task_id,))
    return [row["tag"] for row in rows if row["tag"] is not None]


def _row_to_task(connection: sqlite3.Connection, row: sqlite3.Row) -> Task:
    try:
        task_id = uuid.UUID(row["id"])
    except ValueError as exc:
        raise DatabaseError(f"invalid stored id {row['id']!r}") from exc
    due = row["due_date"]
    return Task(
        id=task_id,
        title=row["title"],
        description=row["description"],
        status=Status.parse(row["status"]),
        priority=Priority.parse(row["priority"]),
        due_date=None if due is None else _from_stored(due),
        created_at=_from_stored(row["created_at"]),
        updated_at=_from_stored(row["updated_at"]),
        tags=_load_tags(connection, row["id"]),
    )


def _filters(query: ListQuery) -> Iterator[tuple[str, str]]:
    if query.status is not None:
        yield "status = ?", query.status
    if query.priority is not None:
        yield "priority = ?", query.priority
    if query.title is not None:
        yield "title LIKE ?", f"%{query.title}%"
    if query.tag is not None:
        yield "id IN (SELECT task_id FROM task_tags WHERE tag = ?)", query.tag
    if query.due_before is not None:
        yield "due_date <= ?", _stored(query.due_before)
    if query.due_after is not None:
        yield "due_date >= ?", _stored(query.due_after)
    if query.created_before is not None:
        yield "created_at <= ?", _stored(query.created_before)
    if query.created_after is not None:
        yield "created_at >= ?", _stored(query.created_after)


def _list_sql(query: ListQuery) -> tuple[str, list[str]]:
    conditions = list(_filters(query))
    sql = "SELECT * FROM tasks"
    if conditions:
        sql += " WHERE " + " AND ".join(clause for clause, _ in conditions)
    if query.sort_by in _SORTABLE_FIELDS:
        order = "DESC" if query.sort_order == "desc" else "ASC"
        sql += f" ORDER BY {query.sort_by} {order}"
    return sql, [value for _, value in conditions]


def _no_content() -> Response:
    return Response(status=204)


def create_app(connection: sqlite3.Connection) -> Flask:
    """Build the web application serving tasks stored in the given connection."""
    app = Flask(__name__)
    lock = threading.Lock()

    @contextmanager
    def database() -> Iterator[sqlite3.Connection]:
        with lock:
            try:
                with connection:
                    yield connection
            except sqlite3.Error as exc:
                raise DatabaseError(str(exc)) from exc

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> Response:
        body, status = error.to_response()
        return Response(body, status=status, mimetype="text/plain")

    @app.post("/tasks")
    def create_task() -> Any:
        body = CreateTask.from_json(_json_body())
        body.validate()
        task = body.into_task()
        task_id = str(task.id)
        with database() as db:
            db.execute(
                _INSERT_TASK,
                (
                    task_id,
                    task.title,
                    task.description,
                    str(task.status),
                    str(task.priority),
                    _stored(task.due_date),
                    _stored(task.created_at),
                    _stored(task.updated_at),
                ),
            )
            db.executemany(_INSERT_TAG, [(task_id, tag) for tag in task.tags])
        return jsonify(task.to_json()), 201

    @app.get("/tasks/<task_id>")
    def get_task(task_id: str) -> Any:
        key = str(_parse_uuid(task_id))
        with database() as db:
            row = db.execute("SELECT * FROM tasks WHERE id = ?", (key,)).fetchone()
            if row is None:
                raise NotFoundError()
            task = _row_to_task(db, row)
        return jsonify(task.to_json())

    @app.get("/tasks")
    def list_tasks() -> Any:
        query = ListQuery.from_args(request.args)
        sql, params = _list_sql(query)
        with database() as db:
            tasks = [_row_to_task(db, row) for row in db.execute(sql, params).fetchall()]
        return jsonify([task.to_json() for task in tasks])

    @app.put("/tasks/<task_id>")
    def update_task(task_id: str) -> Any:
        key = str(_parse_uuid(task_id))
        body = UpdateTask.from_json(_json_body())
        body.validate()
        now = datetime.now(timezone.utc)
        with database() as db:
            db.execute(
                _UPDATE_TASK,
                (
                    body.title,
                    body.description,
                    None if body.status is None else str(body.status),
                    None if body.priority is None else str(body.priority),
                    _stored(body.due_date),
                    _stored(now),
                    key,
                ),
            )
        return _no_content()

    @app.delete("/tasks/<task_id>")
    def delete_task(task_id: str) -> Any:
        key = str(_parse_uuid(task_id))
        with database() as db:
            db.execute("DELETE FROM tasks WHERE id = ?", (key,))
            db.execute("DELETE FROM task_tags WHERE task_id = ?", (key,))
        return _no_content()

    @app.post("/tasks/<task_id>/tags")
    def add_tag(task_id: str) -> Any:
        body = TagBody.from_json(_json_body())
        with database() as db:
            db.execute(_INSERT_TAG, (task_id, body.tag))
        return Response(status=201)

    @app.delete("/tasks/<task_id>/tags/<tag>")
    def remove_tag(task_id: str, tag: str) -> Any:
        with database() as db:
            db.execute(
                "DELETE FROM task_tags WHERE task_id = ? AND tag = ?", (task_id, tag)
            )
        return _no_content()

    return app