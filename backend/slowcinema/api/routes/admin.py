from uuid import UUID

from fastapi import APIRouter, status
from sqlmodel import SQLModel

from slowcinema.api.deps import SessionDep
from slowcinema.models.movie import MovieCreate, MovieUpdate
from slowcinema.schemas.movie import MovieDetail
from slowcinema.services import movies as movies_service

router = APIRouter(prefix="/admin", tags=["admin"])


class MigrationResult(SQLModel):
    success: bool
    message: str
    changed: int


@router.get("/migrate-languages", response_model=MigrationResult)
def migrate_languages(session: SessionDep) -> MigrationResult:
    changed = movies_service.migrate_movie_languages(session=session)
    return MigrationResult(
        success=True,
        message="Successfully migrated language fields to ISO codes",
        changed=changed,
    )


@router.post(
    "/movies",
    response_model=MovieDetail,
    status_code=status.HTTP_201_CREATED,
)
def ingest_movie(session: SessionDep, movie_create: MovieCreate) -> MovieDetail:
    return movies_service.ingest_movie(session=session, movie_create=movie_create)


@router.put("/movies/{movie_id}", response_model=MovieDetail)
def update_movie(
    session: SessionDep,
    movie_id: UUID,
    movie_update: MovieUpdate,
) -> MovieDetail:
    return movies_service.update_movie(
        session=session,
        movie_id=movie_id,
        movie_update=movie_update,
    )
