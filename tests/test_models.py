import uuid
from datetime import datetime, timedelta, timezone

import pytest

from taskboard.errors import ParsePriorityError, ParseStatusError, ValidationError
from taskboard.models import (
    CreateTask,
    ListQuery,
    Priority,
    Status,
    TagBody,
    Task,
    UpdateTask,
)


def test_create_task_conversion():
    payload = CreateTask(
        title="Test",
        description="Test desc",
        status=Status.TODO,
        priority=Priority.MEDIUM,
        due_date=datetime(2025, 8, 1, 12, 0, 0, tzinfo=timezone.utc),
        tags=["a", "b"],
    )

    task = payload.into_task()

    assert task.title == "Test"
    assert task.status is Status.TODO
    assert task.priority is Priority.MEDIUM
    assert len(task.tags) == 2
    assert task.due_date == datetime(2025, 8, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_create_task_validation_fails():
    invalid = CreateTask(
        title="",
        description="",
        status=Status.TODO,
        priority=Priority.LOW,
        due_date=None,
        tags=[],
    )
    with pytest.raises(ValidationError):
        invalid.validate()


def test_into_task_sets_fresh_id_and_equal_timestamps():
    payload = CreateTask("t", "d", Status.DONE, Priority.HIGH)
    first = payload.into_task()
    second = payload.into_task()
    assert first.id != second.id
    assert first.id.version == 4
    assert first.created_at == first.updated_at
    assert first.created_at.tzinfo is not None


@pytest.mark.parametrize(
    "text, expected",
    [
        ("todo", Status.TODO),
        ("Todo", Status.TODO),
        ("INPROGRESS", Status.IN_PROGRESS),
        ("done", Status.DONE),
    ],
)
def test_status_parse(text, expected):
    assert Status.parse(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [("low", Priority.LOW), ("Medium", Priority.MEDIUM), ("HIGH", Priority.HIGH)],
)
def test_priority_parse(text, expected):
    assert Priority.parse(text) is expected


def test_parse_errors():
    with pytest.raises(ParseStatusError):
        Status.parse("in progress")
    with pytest.raises(ParsePriorityError):
        Priority.parse("urgent")


def test_display_round_trips_through_parse():
    for member in Status:
        assert Status.parse(str(member)) is member
    for member in Priority:
        assert Priority.parse(str(member)) is member
    assert str(Status.IN_PROGRESS) == "InProgress"


def test_task_to_json_uses_camel_case():
    task_id = uuid.uuid4()
    moment = datetime(2025, 8, 1, 12, 0, 0, tzinfo=timezone.utc)
    task = Task(
        id=task_id,
        title="Write",
        description="Report",
        status=Status.IN_PROGRESS,
        priority=Priority.HIGH,
        due_date=None,
        created_at=moment,
        updated_at=moment,
        tags=["work"],
    )
    data = task.to_json()
    assert data["id"] == str(task_id)
    assert data["status"] == "inProgress"
    assert data["priority"] == "high"
    assert data["dueDate"] is None
    assert data["createdAt"] == "2025-08-01T12:00:00Z"
    assert data["tags"] == ["work"]


def test_create_task_from_json_round_trip():
    payload = {
        "title": "Write",
        "description": "Report",
        "status": "inProgress",
        "priority": "low",
        "dueDate": "2025-08-01T12:00:00Z",
        "tags": ["a", "b"],
    }
    data = CreateTask.from_json(payload).into_task().to_json()
    for key, value in payload.items():
        assert data[key] == value


def test_create_task_from_json_converts_offset_to_utc():
    payload = {
        "title": "t",
        "description": "d",
        "status": "todo",
        "priority": "medium",
        "dueDate": "2025-08-01T14:00:00+02:00",
        "tags": [],
    }
    task = CreateTask.from_json(payload)
    assert task.due_date == datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)
    assert task.due_date.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "payload",
    [
        {"description": "d", "status": "todo", "priority": "low", "tags": []},
        {"title": "t", "description": "d", "status": "Todo", "priority": "low", "tags": []},
        {"title": "t", "description": "d", "status": "todo", "priority": "low"},
        {"title": 3, "description": "d", "status": "todo", "priority": "low", "tags": []},
        {"title": "t", "description": "d", "status": "todo", "priority": "low",
         "dueDate": "2025-08-01T12:00:00", "tags": []},
        ["not", "an", "object"],
    ],
)
def test_create_task_from_json_rejects_bad_payloads(payload):
    with pytest.raises(ValidationError):
        CreateTask.from_json(payload)


def test_update_task_defaults_and_validation():
    empty = UpdateTask.from_json({})
    assert empty == UpdateTask()
    empty.validate()
    assert empty.title is None

    with pytest.raises(ValidationError):
        UpdateTask.from_json({"title": ""}).validate()


def test_update_task_from_json_fields():
    update = UpdateTask.from_json({"status": "done", "priority": "high", "tags": ["x"]})
    assert update.status is Status.DONE
    assert update.priority is Priority.HIGH
    assert update.tags == ["x"]


def test_list_query_from_args():
    query = ListQuery.from_args(
        {"status": "Todo", "tag": "home", "dueBefore": "2025-08-01T12:00:00Z",
         "sortBy": "title", "sortOrder": "desc"}
    )
    assert query.status == "Todo"
    assert query.tag == "home"
    assert query.due_before == datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc)
    assert query.due_after is None
    assert (query.sort_by, query.sort_order) == ("title", "desc")


def test_list_query_rejects_bad_timestamp():
    with pytest.raises(ValidationError):
        ListQuery.from_args({"createdAfter": "yesterday"})


def test_tag_body():
    body = TagBody.from_json({"tag": "urgent"})
    assert body.tag == "urgent"
    body.validate()
    with pytest.raises(ValidationError):
        TagBody.from_json({"tag": ""}).validate()
    with pytest.raises(ValidationError):
        TagBody.from_json({})