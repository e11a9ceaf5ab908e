import os
import tempfile
from pathlib import Path

import pytest

_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="memories-api-tests-"))
DEFAULT_TEST_DB_URL = f"sqlite:///{_TEST_DB_DIR / 'test.db'}"
TEST_DB_URL = os.getenv("TEST_DB_URL", DEFAULT_TEST_DB_URL)
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("SECRET_KEY", "test-secret")

from memories_api.core.config import settings
from memories_api.core.security import reset_token_service
from memories_api.db.init_db import init_db

settings.DATABASE_URL = TEST_DB_URL


@pytest.fixture(autouse=True, scope="session")
def _configure_tokens():
    reset_token_service()
    try:
        yield
    finally:
        reset_token_service()


@pytest.fixture(autouse=True, scope="session")
def _configure_test_database():
    init_db(drop_all=True)
    yield
