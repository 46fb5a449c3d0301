"""Fixtures for API tests: a fresh SQLite database per test and an authenticated client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from ai_search.api.server import app
from ai_search.db.database import create_db_engine, get_db, init_db


@pytest.fixture
def client(tmp_path, no_summarizer):
    engine = create_db_engine(f"sqlite:///{tmp_path}/test.db", echo=False)
    init_db(engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def register(client: TestClient):
    """Register a user and return the auth response body."""

    def _register(email: str = "ada@example.com", name: str = "Ada") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": "secret123"},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def auth_headers(register) -> dict[str, str]:
    token = register()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(register) -> dict[str, str]:
    token = register(email="grace@example.com", name="Grace")["token"]
    return {"Authorization": f"Bearer {token}"}
