import os
import tempfile

_db_dir = tempfile.mkdtemp(prefix="settleup-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["CREATE_TABLES"] = "true"
os.environ["DB_RETRIES"] = "1"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("JWKS_URL", None)

import pytest
from fastapi.testclient import TestClient

from settleup.core.dependencies import get_current_user
from settleup.main import app
from settleup.schemas.user import CurrentUser


@pytest.fixture(scope="session")
def client():
    # One client (and event loop) for the whole run, the engine pool is shared.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login():
    def _login(user_id: str):
        app.dependency_overrides[get_current_user] = lambda: CurrentUser(id=user_id)

    yield _login
    app.dependency_overrides.pop(get_current_user, None)
