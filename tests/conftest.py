"""Pytest configuration for eventstore tests."""

import pytest
from sqlalchemy import insert

from eventstore.db import Database, DatabaseConfig, divisions, feeds


@pytest.fixture
def db():
    """Fresh in-memory database with the schema created."""
    database = Database(DatabaseConfig(database_url="sqlite://"))
    database.init_db()
    yield database
    database.engine.dispose()


@pytest.fixture
def add_division(db):
    """Insert a division row and return its id."""
    def _add(name="Student Council", is_active=1, division_id=None):
        values = {"name": name, "is_active": is_active}
        if division_id is not None:
            values["id"] = division_id
        with db.connect() as conn:
            result = conn.execute(insert(divisions).values(**values))
            return result.inserted_primary_key[0]
    return _add


@pytest.fixture
def add_feed_item(db):
    """Insert a feed row for an event and return its id."""
    def _add(event_id, title="Update", content=None, is_active=1):
        with db.connect() as conn:
            result = conn.execute(
                insert(feeds).values(
                    event_id=event_id, title=title, content=content, is_active=is_active
                )
            )
            return result.inserted_primary_key[0]
    return _add


@pytest.fixture
def fair_data():
    """Input data for a typical event."""
    return {
        "title": "Fair",
        "description": "Annual fair",
        "division_id": 3,
        "image_url": None,
        "start_date": "2024-05-01",
        "end_date": "2024-05-03",
        "is_public": 1,
        "is_active": 1,
    }
