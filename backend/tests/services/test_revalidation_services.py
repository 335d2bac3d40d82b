import pytest
from pytest_mock import MockerFixture
from sqlmodel import Session

from slowcinema.core.enums import RevalidationStatus
from slowcinema.core.render_cache import RenderCache
from slowcinema.crud import revalidation as revalidation_crud
from slowcinema.exceptions.revalidation_exceptions import (
    MissingRevalidationTargetError,
)
from slowcinema.services import revalidation as revalidation_services


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"tag": "movies"}, ["movies"]),
        ({"movie_slug": "stalker"}, ["movie-stalker", "movies"]),
        ({"review_id": 3}, ["review-3", "reviews"]),
        ({"path": "/feed.xml"}, ["path:/feed.xml"]),
        (
            {"tag": "movies", "movie_slug": "stalker", "path": "/"},
            ["movies", "movie-stalker", "path:/"],
        ),
        ({}, []),
    ],
)
def test_invalidation_keys(kwargs, expected):
    assert revalidation_services.invalidation_keys(**kwargs) == expected


def test_emit_records_pending_events(db_transaction: Session):
    events = revalidation_services.emit(
        session=db_transaction,
        keys=["movie-stalker", "movies"],
        reason="movie created",
    )

    assert [event.tag for event in events] == ["movie-stalker", "movies"]
    pending = revalidation_crud.get_pending_events(session=db_transaction)
    assert [event.tag for event in pending] == ["movie-stalker", "movies"]
    assert all(event.status == RevalidationStatus.PENDING for event in pending)


def test_emit_swallows_failures(
    *,
    db_transaction: Session,
    mocker: MockerFixture,
):
    mocker.patch(
        "slowcinema.crud.revalidation.create_event",
        side_effect=RuntimeError("store unavailable"),
    )

    events = revalidation_services.emit(
        session=db_transaction, keys=["movies"], reason="movie created"
    )

    assert events == []


def test_emit_without_keys(db_transaction: Session):
    assert revalidation_services.emit(session=db_transaction, keys=[], reason="noop") == []


def test_apply_pending_invalidates_cache_and_keeps_audit_trail(db_transaction: Session):
    cache = RenderCache()
    cache.get_or_compute("page:/", lambda: "home", tags=["movies"], path="/")
    cache.get_or_compute("document:/feed.xml", lambda: "feed", path="/feed.xml")
    cache.get_or_compute("page:/other", lambda: "other", tags=["reviews"])
    revalidation_services.emit(
        session=db_transaction, keys=["movies", "path:/feed.xml"], reason="test"
    )

    applied = revalidation_services.apply_pending(session=db_transaction, cache=cache)

    assert len(applied) == 2
    assert all(event.status == RevalidationStatus.APPLIED for event in applied)
    assert all(event.applied_at is not None for event in applied)
    assert not cache.is_cached("page:/")
    assert not cache.is_cached("document:/feed.xml")
    assert cache.is_cached("page:/other")
    assert revalidation_crud.get_pending_events(session=db_transaction) == []


def test_apply_pending_marks_failures(
    *,
    db_transaction: Session,
    mocker: MockerFixture,
):
    cache = RenderCache()
    mocker.patch.object(cache, "invalidate_tag", side_effect=RuntimeError("boom"))
    revalidation_services.emit(session=db_transaction, keys=["movies"], reason="test")

    [event] = revalidation_services.apply_pending(session=db_transaction, cache=cache)

    assert event.status == RevalidationStatus.FAILED
    assert event.error == "boom"


def test_revalidate_requires_a_target(db_transaction: Session):
    with pytest.raises(MissingRevalidationTargetError):
        revalidation_services.revalidate(session=db_transaction, cache=RenderCache())


def test_revalidate_applies_immediately(db_transaction: Session):
    cache = RenderCache()
    cache.get_or_compute("page:/reviews/stalker", lambda: "page", tags=["movie-stalker"])

    result = revalidation_services.revalidate(
        session=db_transaction, cache=cache, movie_slug="stalker"
    )

    assert result.revalidated is True
    assert result.tags == ["movie-stalker", "movies"]
    assert not cache.is_cached("page:/reviews/stalker")
