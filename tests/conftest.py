import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def app():
    # lazy import after sys.path configured; no pg_client means in-memory storage
    from src.main import create_app

    return create_app()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def user_repo(app):
    return app.state.user_repo


@pytest.fixture()
def profile_repo(app):
    return app.state.profile_repo


@pytest.fixture()
def failing_client(app) -> TestClient:
    """Client whose repositories raise StorageError on every call."""
    from src.infrastructure.database.postgres_client import StorageError

    broken = Mock(side_effect=StorageError("connection refused"))
    for repo in (app.state.user_repo, app.state.profile_repo):
        for name in ("create", "get", "update_name", "delete", "ping"):
            if hasattr(repo, name):
                setattr(repo, name, broken)
    return TestClient(app)
