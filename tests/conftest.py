from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from afterschool.core.config import Settings
from afterschool.core.db import Database
from afterschool.main import create_app
from afterschool.models.db import Lesson


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'afterschool-test.db'}")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def images_dir(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def app(database, images_dir):
    settings = Settings(DB_URL=database.url, IMAGES_DIR=str(images_dir))
    return create_app(settings, database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def lessons(database) -> dict[str, str]:
    """Seed a small catalogue and return lesson ids keyed by subject."""
    rows = [
        Lesson(subject="Math", location="London", price=100, spaces=5),
        Lesson(subject="English", location="Oxford", price=80, spaces=3),
        Lesson(subject="Science", location="Cambridge", price=12.5, spaces=0),
        Lesson(subject="Art", location="Brighton", price=60, spaces=10),
    ]
    session = database.session()
    try:
        session.add_all(rows)
        session.commit()
        return {x.subject: x.id for x in rows}
    finally:
        session.close()
