"""TestClient wired to the transactional test session."""

import pytest
from fastapi.testclient import TestClient

from tutorlink.db.session import get_db
from tutorlink.main import app


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
