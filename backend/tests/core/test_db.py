import threading
import time

import pytest
from pytest_mock import MockerFixture
from sqlalchemy import text

from slowcinema.core.config import settings
from slowcinema.core.db import StoreGateway
from slowcinema.models.movie import Movie
from slowcinema.models.review import Review


def test_gateway_requires_a_connection_string():
    with pytest.raises(ValueError):
        StoreGateway("")


def test_engine_is_created_lazily_and_reused():
    store = StoreGateway("sqlite://")
    assert not store.is_connected

    engine = store.engine

    assert store.is_connected
    assert store.engine is engine
    store.shutdown()
    assert not store.is_connected


def test_get_collection_returns_the_backing_model():
    store = StoreGateway("sqlite://", database_name="scc")

    assert store.get_collection("movies") is Movie
    assert store.get_collection("reviews", "scc") is Review
    store.shutdown()


def test_get_collection_rejects_unknown_names():
    store = StoreGateway("sqlite://", database_name="scc")

    with pytest.raises(KeyError):
        store.get_collection("lists")
    with pytest.raises(KeyError):
        store.get_collection("movies", "other")
    store.shutdown()


def test_from_settings_uses_pool_settings():
    store = StoreGateway.from_settings(settings, database_url="sqlite://")

    assert store.pool_max_size == settings.DB_POOL_MAX_SIZE
    assert store.pool_min_size == settings.DB_POOL_MIN_SIZE
    assert store.connect_timeout == settings.DB_CONNECT_TIMEOUT
    assert store.socket_timeout == settings.DB_SOCKET_TIMEOUT


def test_sessions_share_the_in_memory_database():
    store = StoreGateway("sqlite://")
    store.init(create_tables=True)

    with store.session() as session:
        session.add(Movie(title="Stalker", slug="stalker"))
        session.commit()

    with store.session() as session:
        count = session.execute(text("SELECT count(*) FROM movie")).scalar_one()

    assert count == 1
    store.shutdown()


def test_concurrent_first_callers_share_one_engine(mocker: MockerFixture):
    store = StoreGateway("sqlite://")
    engine = mocker.MagicMock(name="engine")

    def slow_create():
        time.sleep(0.05)
        return engine

    create_engine = mocker.patch.object(store, "_create_engine", side_effect=slow_create)
    barrier = threading.Barrier(8)
    seen = []

    def connect():
        barrier.wait()
        seen.append(store.engine)

    threads = [threading.Thread(target=connect) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert create_engine.call_count == 1
    assert len(seen) == 8
    assert all(item is engine for item in seen)
    store.shutdown()
    engine.dispose.assert_called_once()
