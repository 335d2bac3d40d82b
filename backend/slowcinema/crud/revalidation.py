from datetime import datetime

from sqlalchemy import select
from sqlmodel import Session, col

from slowcinema.core.enums import RevalidationStatus
from slowcinema.models.revalidation_event import RevalidationEvent


def create_event(
    *,
    session: Session,
    tag: str,
    reason: str,
    created_at: datetime,
) -> RevalidationEvent:
    event = RevalidationEvent(tag=tag, reason=reason, created_at=created_at)
    session.add(event)
    return event


def get_pending_events(*, session: Session, limit: int | None = None) -> list[RevalidationEvent]:
    """
    Retrieve pending revalidation events, oldest first.

    Parameters:
        session (Session): The database session.
        limit (int | None): Maximum number of events. If None, all are returned.
    Returns:
        list[RevalidationEvent]: The pending events.
    """
    stmt = (
        select(RevalidationEvent)
        .where(col(RevalidationEvent.status) == RevalidationStatus.PENDING)
        .order_by(col(RevalidationEvent.id))
    )
    if limit is not None:
        stmt = stmt.limit(limit)
    result = session.execute(stmt)
    events: list[RevalidationEvent] = list(result.scalars().all())
    return events


def mark_applied(*, event: RevalidationEvent, applied_at: datetime) -> RevalidationEvent:
    event.status = RevalidationStatus.APPLIED
    event.applied_at = applied_at
    event.error = None
    return event


def mark_failed(*, event: RevalidationEvent, error: str) -> RevalidationEvent:
    event.status = RevalidationStatus.FAILED
    event.error = error
    return event
