from sqlmodel import SQLModel

__all__ = [
    "RevalidationResult",
]


class RevalidationResult(SQLModel):
    revalidated: bool
    tags: list[str]
