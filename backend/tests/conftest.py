import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["TESTING"] = "true"
os.environ["REVALIDATION_WORKER_ENABLED"] = "false"

from collections.abc import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from slowcinema.api.deps import get_db  # noqa: E402
from slowcinema.core.config import settings  # noqa: E402
from slowcinema.core.db import StoreGateway  # noqa: E402
from slowcinema.main import app  # noqa: E402

from .fixtures.factories import *  # noqa: E402,F401,F403


@pytest.fixture(scope="session", autouse=True)
def create_test_database() -> Generator[Engine, None, None]:
    assert os.getenv("TESTING") == "true"

    # An in-memory database lives on the single pooled connection, so the
    # schema comes from the models rather than from an Alembic upgrade.
    store = StoreGateway(settings.TEST_DATABASE_URL)
    SQLModel.metadata.create_all(store.engine)

    yield store.engine

    store.shutdown()


@pytest.fixture(scope="function", autouse=True)
def db_transaction(create_test_database: Engine) -> Generator[Session, None, None]:
    connection = create_test_database.connect()
    transaction = connection.begin()

    session = Session(bind=connection)

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    transaction.rollback()
    connection.close()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
