import datetime as dt

from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Column, Field, SQLModel

from slowcinema.core.enums import RevalidationStatus

__all__ = [
    "RevalidationEvent",
]


class RevalidationEvent(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    tag: str = Field(index=True, description="Cache tag or path to invalidate")
    reason: str
    status: RevalidationStatus = Field(
        default=RevalidationStatus.PENDING,
        sa_column=Column(
            SAEnum(
                RevalidationStatus,
                native_enum=False,
                name="revalidationstatus",
            ),
            nullable=False,
            index=True,
        ),
    )
    created_at: dt.datetime = Field(sa_type=DateTime(timezone=True))  # type: ignore[call-overload]
    applied_at: dt.datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[call-overload]
    )
    error: str | None = None
