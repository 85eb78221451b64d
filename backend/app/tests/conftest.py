"""
Shared fixtures: a fresh SQLite database per test and an authenticated client.
"""
import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.db.session import build_engine, get_db
from app.db.migrator import SchemaMigrator


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}", echo=False)
    yield engine
    engine.dispose()


@pytest.fixture
def migrator(engine):
    return SchemaMigrator(engine)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(migrator, session_factory):
    """Session on a database with the full schema."""
    migrator.create_all_tables()
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def bare_client(session_factory):
    """Client on a database where no tables exist yet."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(migrator, bare_client):
    """Client on a database with the full schema."""
    migrator.create_all_tables()
    return bare_client


@pytest.fixture
def register():
    """Sign a user up and return ``(headers, user_id)``."""
    def _register(client, email="alice@example.com", password="s3cret-pass", name=None):
        response = client.post(
            "/api/auth/signup",
            json={"email": email, "password": password, "name": name}
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]["id"]
    return _register


@pytest.fixture
def auth_headers(client, register):
    headers, _ = register(client)
    return headers
