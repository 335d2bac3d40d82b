from loguru import logger
from sqlmodel import Session

from slowcinema.core.render_cache import RenderCache
from slowcinema.crud import revalidation as revalidation_crud
from slowcinema.exceptions.revalidation_exceptions import (
    MissingRevalidationTargetError,
)
from slowcinema.models.revalidation_event import RevalidationEvent
from slowcinema.schemas.revalidation import RevalidationResult
from slowcinema.utils import now_utc

MOVIES_TAG = "movies"
REVIEWS_TAG = "reviews"
PATH_PREFIX = "path:"


def movie_tag(slug: str) -> str:
    return f"movie-{slug}"


def review_tag(review_id: int | str) -> str:
    return f"review-{review_id}"


def path_key(path: str) -> str:
    return f"{PATH_PREFIX}{path}"


def invalidation_keys(
    *,
    tag: str | None = None,
    movie_slug: str | None = None,
    review_id: int | str | None = None,
    path: str | None = None,
) -> list[str]:
    """
    Expand a revalidation request into the keys to invalidate.

    Item-level requests also invalidate the aggregate listing tag of their
    collection. The order is stable and duplicates are dropped.
    """
    keys: list[str] = []
    if tag:
        keys.append(tag)
    if movie_slug:
        keys.extend([movie_tag(movie_slug), MOVIES_TAG])
    if review_id is not None:
        keys.extend([review_tag(review_id), REVIEWS_TAG])
    if path:
        keys.append(path_key(path))
    return list(dict.fromkeys(keys))


def emit(*, session: Session, keys: list[str], reason: str) -> list[RevalidationEvent]:
    """
    Record a pending revalidation event per key after a successful mutation.

    Best-effort: a failure is logged and swallowed so it never affects the
    mutation that triggered it. Returns the recorded events, or an empty
    list on failure.
    """
    if not keys:
        return []
    try:
        created_at = now_utc()
        with session.begin_nested():
            events = [
                revalidation_crud.create_event(
                    session=session, tag=key, reason=reason, created_at=created_at
                )
                for key in keys
            ]
        session.commit()
        logger.debug("Queued revalidation", keys=keys, reason=reason)
        return events
    except Exception:
        logger.exception("Failed to queue revalidation for {}", keys)
        return []


def _invalidate(cache: RenderCache, key: str) -> int:
    if key.startswith(PATH_PREFIX):
        return cache.invalidate_path(key[len(PATH_PREFIX):])
    return cache.invalidate_tag(key)


def apply_pending(*, session: Session, cache: RenderCache) -> list[RevalidationEvent]:
    """
    Drain pending revalidation events into the render cache.

    Every event ends up ``applied`` or ``failed`` (with the error kept),
    which leaves an audit trail of what was invalidated and when.
    """
    events = revalidation_crud.get_pending_events(session=session)
    for event in events:
        try:
            dropped = _invalidate(cache, event.tag)
            revalidation_crud.mark_applied(event=event, applied_at=now_utc())
            logger.debug("Applied revalidation", tag=event.tag, dropped_entries=dropped)
        except Exception as e:
            logger.exception("Revalidation of {} failed", event.tag)
            revalidation_crud.mark_failed(event=event, error=str(e))
    if events:
        session.commit()
    return events


def revalidate(
    *,
    session: Session,
    cache: RenderCache,
    tag: str | None = None,
    movie_slug: str | None = None,
    path: str | None = None,
) -> RevalidationResult:
    """
    Invalidate on explicit request: record the events and apply them right
    away.

    Raises:
        MissingRevalidationTargetError: If no tag, movie slug or path is given.
    """
    keys = invalidation_keys(tag=tag, movie_slug=movie_slug, path=path)
    if not keys:
        raise MissingRevalidationTargetError()
    with session.begin_nested():
        created_at = now_utc()
        for key in keys:
            revalidation_crud.create_event(
                session=session, tag=key, reason="manual", created_at=created_at
            )
    session.commit()
    apply_pending(session=session, cache=cache)
    return RevalidationResult(revalidated=True, tags=keys)
