"""
Pytest fixtures and configuration for the test suite.

- Real SQLite databases (temp file or in-memory), never mocks of the store
- Graph calls are replaced by plain functions or patched requests calls
"""

import os
import sys
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# Add project root to path so tests can import the deskmap package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# === DATABASE FIXTURES ===


@pytest.fixture
def temp_db() -> Generator[str, None, None]:
    """Provide a temporary SQLite database path for testing.

    This uses a real SQLite file to test actual database behavior.
    For faster unit tests, use in_memory_db fixture.
    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=".db", delete=False) as f:
        db_path = f.name

    try:
        yield db_path
    finally:
        for suffix in ("", "-wal", "-shm"):
            try:
                if os.path.exists(db_path + suffix):
                    os.unlink(db_path + suffix)
            except PermissionError:
                pass  # File still locked, will be cleaned up eventually


@pytest.fixture
def test_db(temp_db):
    """Provide a Database instance with initialized schema (real DB file)."""
    from deskmap.persistence.db import Database

    db = Database(temp_db)
    yield db
    db.close()


@pytest.fixture
def in_memory_db():
    """Provide an in-memory Database instance for fast unit tests."""
    from deskmap.persistence.db import Database

    db = Database(":memory:")
    yield db
    db.close()


# === DOMAIN FIXTURES ===


@pytest.fixture
def broadcaster():
    """Fresh change broadcaster with no subscribers."""
    from deskmap.components.events.change_broadcaster_comp import ChangeBroadcaster

    return ChangeBroadcaster()


@pytest.fixture
def directory_config():
    """Complete directory config with a Desk- prefix rule."""
    from deskmap.helpers.dto.directory_dto import DirectoryConfig

    return DirectoryConfig(
        tenant_id="tenant-123",
        client_id="client-456",
        client_secret="s3cret",
        scopes="https://graph.microsoft.com/.default",
        mapping_prefix="Desk-",
    )


@pytest.fixture
def configured_db(in_memory_db, directory_config):
    """In-memory database with a saved, complete directory config."""
    in_memory_db.directory_config.save(directory_config)
    return in_memory_db


@pytest.fixture
def seeded_db(configured_db):
    """Configured database with the default map and demo desks."""
    from deskmap.workflows.layout.ensure_layout_seed_wf import ensure_layout_seed_workflow

    ensure_layout_seed_workflow(configured_db)
    return configured_db


def make_user(user_id: str, office_location: str | None, given_name: str = "Ada", surname: str = "Lovelace"):
    """Build a DirectoryUser for tests."""
    from deskmap.helpers.dto.directory_dto import DirectoryUser

    return DirectoryUser(
        id=user_id,
        given_name=given_name,
        surname=surname,
        display_name=f"{given_name} {surname}",
        office_location=office_location,
        user_principal_name=f"{user_id}@example.com",
    )


def make_desk(number: int, desk_id: str | None = None, **kwargs):
    """Build a Desk for tests."""
    from deskmap.helpers.dto.desk_dto import Desk

    values = {"x": 10.0 * number, "y": 20.0, "width": 10.0, "height": 10.0}
    values.update(kwargs)
    return Desk(id=desk_id or f"desk-{number}", number=number, **values)


@pytest.fixture
def user_factory():
    """Factory for DirectoryUser objects: user_factory(id, office_location, given_name=, surname=)."""
    return make_user


@pytest.fixture
def desk_factory():
    """Factory for Desk objects: desk_factory(number, desk_id=None, **geometry)."""
    return make_desk
