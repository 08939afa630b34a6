import itertools
import os
import tempfile
import threading
from datetime import datetime, timezone

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_rolehub.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from rolehub.domain.role import Role
from rolehub.domain.role_name import RoleNamePolicy
from rolehub.errors import DuplicateResourceError, NotFoundError
from rolehub.main import app
from rolehub.services.notification import NotificationDispatcher
from rolehub.services.role import RoleLifecycleService

FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    try:
        command.upgrade(alembic_cfg, "head")
    except Exception as e:
        print(f"Migration failed: {e}")
        raise

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        try:
            if os.path.exists(test_db_path):
                os.remove(test_db_path)
            # Also remove WAL files
            for suffix in ["-wal", "-shm"]:
                wal_path = f"{test_db_path}{suffix}"
                if os.path.exists(wal_path):
                    os.remove(wal_path)
            if os.path.exists(temp_db_dir):
                os.rmdir(temp_db_dir)
        except Exception as e:
            print(f"Cleanup failed: {e}")


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from rolehub.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    # Entering the client runs the lifespan, which owns the notification dispatcher
    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


# ============================================================================
# IN-MEMORY PORTS
# ============================================================================


class InMemoryRoleRepository:
    """RolePort backed by a dict, enforcing the unique name constraint like the database does."""

    def __init__(self):
        self.roles: dict[int, Role] = {}
        self._ids = itertools.count(1)

    def save(self, role: Role) -> Role:
        holder = self.find_by_name(role.name)
        if holder is not None and holder.id != role.id:
            raise DuplicateResourceError(f"Role with name '{role.name}' already exists")
        if role.id is None:
            role = role.with_id(next(self._ids))
        elif role.id not in self.roles:
            raise NotFoundError(f"Role with id {role.id} not found")
        self.roles[role.id] = role
        return role

    def find_by_id(self, role_id: int) -> Role | None:
        return self.roles.get(role_id)

    def find_by_name(self, name: str) -> Role | None:
        return next((r for r in self.roles.values() if r.name == name), None)

    def find_all(self) -> list[Role]:
        return list(self.roles.values())

    def find_by_name_containing(self, pattern: str) -> list[Role]:
        return [r for r in self.roles.values() if pattern.upper() in r.name.upper()]

    def exists_by_name(self, name: str) -> bool:
        return self.find_by_name(name) is not None

    def delete_by_id(self, role_id: int) -> bool:
        return self.roles.pop(role_id, None) is not None

    def count(self) -> int:
        return len(self.roles)


class RecordingNotifier:
    """NotificationPort that records events; set ``fail`` to make every call raise."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.events: list[tuple[str, object]] = []
        self._lock = threading.Lock()

    def _record(self, event: str, payload: object) -> None:
        if self.fail:
            raise ConnectionError("notification endpoint unreachable")
        with self._lock:
            self.events.append((event, payload))

    def notify_role_created(self, role: Role) -> None:
        self._record("created", role)

    def notify_role_updated(self, role: Role) -> None:
        self._record("updated", role)

    def notify_role_deleted(self, role_id: int) -> None:
        self._record("deleted", role_id)


@pytest.fixture(scope="function")
def repository() -> InMemoryRoleRepository:
    return InMemoryRoleRepository()


@pytest.fixture(scope="function")
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture(scope="function")
def reported_errors() -> list:
    return []


@pytest.fixture(scope="function")
def dispatcher(reported_errors: list):
    """Dispatcher whose swallowed errors are collected in ``reported_errors``."""
    dispatcher = NotificationDispatcher(
        max_workers=2,
        error_reporter=lambda event, error: reported_errors.append((event, error)),
    )
    yield dispatcher
    dispatcher.shutdown(wait=True)


@pytest.fixture(scope="function")
def service(repository, notifier, dispatcher) -> RoleLifecycleService:
    return RoleLifecycleService(
        repository=repository,
        notifier=notifier,
        dispatcher=dispatcher,
        policy=RoleNamePolicy(),
        clock=lambda: FIXED_NOW,
    )
