# taskboard

taskboard is a small REST service for keeping track of tasks. It is built on
Flask and stores tasks in SQLite. Each task has:

- a title and a description
- a status: `todo`, `inProgress` or `done`
- a priority: `low`, `medium` or `high`
- an optional due date
- any number of tags

## Installing

```
pip install .
```

To install with the test dependencies as well:

```
pip install ".[test]"
```

## Running

The service reads the database location from the `DATABASE_URL` environment
variable. It also loads a `.env` file, looking in the working directory and
then in its parents.

The URL starts with `sqlite:` or `sqlite://`, followed by a file path. An
empty path or `:memory:` gives an in-memory database. A file is opened in
`rw` mode unless the URL has a `mode` parameter, so a file that does not yet
exist is only created with `?mode=rwc`:

```
DATABASE_URL=sqlite:tasks.db?mode=rwc
```

Start the server with:

```
taskboard
```

The command takes no options apart from `--help`. It creates the tables if
they are missing, then serves on port 3000 on all interfaces using Flask's
built-in server. If `DATABASE_URL` is not set, or the database or server
cannot be set up, it prints `Application error: ...` to stderr and exits with
status 1.

## Endpoints

| Method | Path                     | Purpose                              | Success |
|--------|--------------------------|--------------------------------------|---------|
| POST   | `/tasks`                 | Create a task                        | 201     |
| GET    | `/tasks`                 | List tasks, with filters and sorting | 200     |
| GET    | `/tasks/<id>`            | Fetch one task                       | 200     |
| PUT    | `/tasks/<id>`            | Update a task                        | 204     |
| DELETE | `/tasks/<id>`            | Delete a task and its tags           | 204     |
| POST   | `/tasks/<id>/tags`       | Add a tag, body `{"tag": "..."}`     | 201     |
| DELETE | `/tasks/<id>/tags/<tag>` | Remove a tag                         | 204     |

JSON field names are camelCase: `dueDate`, `createdAt` and `updatedAt`.
Timestamps are RFC 3339 and must carry a UTC offset; responses give them in
UTC with a `Z` suffix.

Example of a request body for creating a task. All fields except `dueDate`
are required, and `title` and `description` must not be empty:

```json
{
  "title": "Write report",
  "description": "Quarterly summary",
  "status": "todo",
  "priority": "high",
  "dueDate": "2025-08-01T12:00:00Z",
  "tags": ["work"]
}
```

The response is the new task with its generated `id`, `createdAt` and
`updatedAt`.

### Updating

`PUT /tasks/<id>` writes `title`, `description`, `status`, `priority` and
`dueDate` together, and sets `updatedAt` to the current time. A field that is
left out is written as empty, so a request that omits `title`, `description`,
`status` or `priority` fails with a database error, and one that omits
`dueDate` clears the due date. `tags` is accepted but ignored; use the tag
endpoints instead. Updating or deleting an id that does not exist still
answers 204.

### Tags

`POST /tasks/<id>/tags` stores the tag for the given id as it is, without
checking that the task exists. `DELETE /tasks/<id>/tags/<tag>` removes every
copy of that tag from the task.

### Filtering and sorting

`GET /tasks` accepts these query parameters:

- `status` and `priority`: exact match against the stored names, which are
  capitalised: `Todo`, `InProgress`, `Done`, `Low`, `Medium`, `High`.
- `tag`: tasks that carry this tag.
- `title`: titles that contain the given text.
- `dueBefore`, `dueAfter`, `createdBefore` and `createdAfter`: RFC 3339
  timestamps. The bounds are inclusive.
- `sortBy`: one of `title`, `priority`, `status`, `due_date`, `created_at` or
  `updated_at`. Any other value is ignored.
- `sortOrder`: `desc` for descending order. Anything else sorts ascending.

### Errors

Error responses are plain text, with these status codes:

- 400 for invalid JSON bodies, invalid task ids, failed validation and
  unknown status or priority names
- 404 for an unknown task on `GET /tasks/<id>`
- 500 for database and server failures; the body is just `Database error`
  for database failures

## Using it as a library

- `taskboard.db.get_connection(database_url)` opens a SQLite connection from
  a URL as described above; with no argument it reads `DATABASE_URL`.
- `taskboard.db.migrate(connection)` creates the `tasks` and `task_tags`
  tables if they are missing.
- `taskboard.routes.create_app(connection)` builds the Flask application
  around the open connection.
- `taskboard.models` holds the `Task`, `CreateTask`, `UpdateTask`,
  `ListQuery` and `TagBody` types and the `Status` and `Priority` enums.
- `taskboard.errors` holds `AppError` and its subclasses; `to_response()`
  gives the body and status code sent to the client.

```python
from taskboard.db import get_connection, migrate
from taskboard.routes import create_app

connection = get_connection("sqlite::memory:")
migrate(connection)
app = create_app(connection)
```

## What it does not do

There is no authentication, paging or configuration of host and port; the
server always listens on port 3000 on all interfaces. It uses Flask's
development server rather than a production WSGI server.