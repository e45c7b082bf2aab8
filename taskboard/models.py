"""Task data types and the request payloads that describe them."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from .errors import ParsePriorityError, ParseStatusError, ValidationError


def _json_name(member: Enum) -> str:
    value = member.value
    return value[:1].lower() + value[1:]


def _enum_from_json(cls: type[Enum], value: Any, key: str) -> Any:
    for member in cls:
        if _json_name(member) == value:
            return member
    expected = ", ".join(_json_name(m) for m in cls)
    raise ValidationError(f"{key}: unknown variant {value!r}, expected one of {expected}")


class Status(Enum):
    """Progress state of a task."""

    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Status:
        """Parse a status name, ignoring case."""
        wanted = text.lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ParseStatusError(f"unknown status {text!r}")


class Priority(Enum):
    """Importance of a task."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> Priority:
        """Parse a priority name, ignoring case."""
        wanted = text.lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        raise ParsePriorityError(f"unknown priority {text!r}")


def _format_json_datetime(moment: datetime | None) -> str | None:
    if moment is None:
        return None
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_datetime(value: Any, key: str) -> datetime:
    if not isinstance(value, str):
        raise ValidationError(f"{key}: expected a timestamp string")
    text = value.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"{key}: invalid timestamp {value!r}") from exc
    if moment.tzinfo is None:
        raise ValidationError(f"{key}: timestamp {value!r} has no UTC offset")
    return moment.astimezone(timezone.utc)


def _optional_datetime(data: Mapping[str, Any], key: str) -> datetime | None:
    value = data.get(key)
    return None if value is None else _parse_datetime(value, key)


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError("expected a JSON object")
    return data


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{key}: expected a string")
    return value


def _required(data: Mapping[str, Any], key: str) -> Any:
    if key not in data or data[key] is None:
        raise ValidationError(f"missing field `{key}`")
    return data[key]


def _tags(value: Any, key: str) -> list[str]:
    if not isinstance(value, list):
        raise ValidationError(f"{key}: expected a list of strings")
    return [_string(item, key) for item in value]


def _check_lengths(fields: Mapping[str, str | None]) -> None:
    problems = [
        f"{name}: length must be at least 1"
        for name, value in fields.items()
        if value is not None and len(value) < 1
    ]
    if problems:
        raise ValidationError("; ".join(problems))


@dataclass
class Task:
    """A stored task."""

    id: uuid.UUID
    title: str
    description: str
    status: Status
    priority: Priority
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime
    tags: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """Return the task as a JSON-ready dict with camelCase keys."""
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "status": _json_name(self.status),
            "priority": _json_name(self.priority),
            "dueDate": _format_json_datetime(self.due_date),
            "createdAt": _format_json_datetime(self.created_at),
            "updatedAt": _format_json_datetime(self.updated_at),
            "tags": list(self.tags),
        }


@dataclass
class CreateTask:
    """Payload a client sends to create a task."""

    title: str
    description: str
    status: Status
    priority: Priority
    due_date: datetime | None = None
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> CreateTask:
        """Build the payload from a decoded JSON object."""
        data = _require_mapping(data)
        return cls(
            title=_string(_required(data, "title"), "title"),
            description=_string(_required(data, "description"), "description"),
            status=_enum_from_json(Status, _required(data, "status"), "status"),
            priority=_enum_from_json(Priority, _required(data, "priority"), "priority"),
            due_date=_optional_datetime(data, "dueDate"),
            tags=_tags(_required(data, "tags"), "tags"),
        )

    def validate(self) -> None:
        """Raise ValidationError if the title or description is empty."""
        _check_lengths({"title": self.title, "description": self.description})

    def into_task(self) -> Task:
        """Turn the payload into a full task with a fresh id and timestamps."""
        now = datetime.now(timezone.utc)
        return Task(
            id=uuid.uuid4(),
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
            created_at=now,
            updated_at=now,
            tags=list(self.tags),
        )


@dataclass
class UpdateTask:
    """Payload a client sends to change a task; every field is optional."""

    title: str | None = None
    description: str | None = None
    status: Status | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    tags: list[str] | None = None

    @classmethod
    def from_json(cls, data: Any) -> UpdateTask:
        """Build the payload from a decoded JSON object."""
        data = _require_mapping(data)
        title = data.get("title")
        description = data.get("description")
        status = data.get("status")
        priority = data.get("priority")
        tags = data.get("tags")
        return cls(
            title=None if title is None else _string(title, "title"),
            description=None if description is None else _string(description, "description"),
            status=None if status is None else _enum_from_json(Status, status, "status"),
            priority=None if priority is None else _enum_from_json(Priority, priority, "priority"),
            due_date=_optional_datetime(data, "dueDate"),
            tags=None if tags is None else _tags(tags, "tags"),
        )

    def validate(self) -> None:
        """Raise ValidationError if a given title or description is empty."""
        _check_lengths({"title": self.title, "description": self.description})


@dataclass
class ListQuery:
    """Filtering and sorting options for listing tasks."""

    status: str | None = None
    priority: str | None = None
    title: str | None = None
    tag: str | None = None
    due_before: datetime | None = None
    due_after: datetime | None = None
    created_before: datetime | None = None
    created_after: datetime | None = None
    sort_by: str | None = None
    sort_order: str | None = None

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> ListQuery:
        """Build the query from URL query parameters with camelCase names."""
        return cls(
            status=args.get("status"),
            priority=args.get("priority"),
            title=args.get("title"),
            tag=args.get("tag"),
            due_before=_optional_datetime(args, "dueBefore"),
            due_after=_optional_datetime(args, "dueAfter"),
            created_before=_optional_datetime(args, "createdBefore"),
            created_after=_optional_datetime(args, "createdAfter"),
            sort_by=args.get("sortBy"),
            sort_order=args.get("sortOrder"),
        )


@dataclass
class TagBody:
    """Payload carrying a single tag."""

    tag: str

    @classmethod
    def from_json(cls, data: Any) -> TagBody:
        """Build the payload from a decoded JSON object."""
        data = _require_mapping(data)
        return cls(tag=_string(_required(data, "tag"), "tag"))

    def validate(self) -> None:
        """Raise ValidationError if the tag is empty."""
        _check_lengths({"tag": self.tag})