"""Command that configures and starts the task service."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from dotenv import find_dotenv, load_dotenv

from .db import get_connection, migrate
from .errors import AppError, ServerError
from .routes import create_app

HOST = "0.0.0.0"
PORT = 3000

_log = logging.getLogger(__name__)


def run(argv: Sequence[str] | None = None) -> None:
    """Load settings, prepare the database and serve requests until stopped."""
    argparse.ArgumentParser(prog="taskboard", description="Serve the task API.").parse_args(argv)
    load_dotenv(find_dotenv(usecwd=True))
    logging.basicConfig(level=logging.INFO)

    connection = get_connection()
    migrate(connection)
    app = create_app(connection)

    _log.info("Running on http://localhost:%d", PORT)
    try:
        app.run(host=HOST, port=PORT)
    except OSError as exc:
        raise ServerError(str(exc)) from exc


def main(argv: Sequence[str] | None = None) -> int:
    """Run the service, reporting a failure on stderr with exit status 1."""
    try:
        run(argv)
    except AppError as exc:
        print(f"Application error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())