"""
Database configuration and session management for the clipview backend.

This module defines a SQLModel engine targeting a SQLite database stored
in the project's ``storage`` directory.  It exposes helper functions to
initialise the schema and to obtain session objects for interacting
with the database.

The storage directory can be relocated with the ``CLIPVIEW_STORAGE_DIR``
environment variable, which must be set before this module is imported.
"""

from __future__ import annotations

import os
from pathlib import Path
from sqlmodel import SQLModel, create_engine, Session

# Default to ``backend/storage``; two parents up from this file is the
# backend directory.
STORAGE_DIR = Path(
    os.getenv("CLIPVIEW_STORAGE_DIR") or Path(__file__).resolve().parents[2] / "storage"
)
STORAGE_DIR.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    f"sqlite:///{(STORAGE_DIR / 'clipview.db').as_posix()}", echo=False
)


def create_db_and_tables() -> None:
    """Create all tables in the database.

    This should be called once on application startup.  If the
    database file does not exist it will be created automatically.
    """
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    """Return a new SQLModel session bound to the engine.

    Sessions returned by this function should be managed with a
    context manager (``with get_session() as session: ...``) to
    ensure that connections are properly closed.
    """
    return Session(engine)
