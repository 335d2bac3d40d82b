from collections.abc import Collection
from uuid import UUID

from sqlalchemy import func, select
from sqlmodel import Session, col

from slowcinema.core.enums import MovieSortField, SortOrder
from slowcinema.models.movie import Movie, MovieCreate, MovieUpdate

SORT_COLUMNS = {
    MovieSortField.UPDATED_AT: col(Movie.updated_at),
    MovieSortField.TITLE: col(Movie.title),
    MovieSortField.YEAR: col(Movie.year),
    MovieSortField.DURATION: col(Movie.duration),
    MovieSortField.RATING: col(Movie.rating),
}


def get_movie_by_id(*, session: Session, id: UUID) -> Movie | None:
    """
    Retrieve a movie by its store identifier.

    Parameters:
        session (Session): The database session.
        id (UUID): The ID of the movie to retrieve.
    Returns:
        Movie | None: The movie object if found, otherwise None.
    """
    return session.get(Movie, id)


def get_movie_by_slug(*, session: Session, slug: str) -> Movie | None:
    """
    Retrieve a movie by its stored slug.

    Parameters:
        session (Session): The database session.
        slug (str): The slug to look up.
    Returns:
        Movie | None: The movie object if found, otherwise None.
    """
    stmt = select(Movie).where(col(Movie.slug) == slug)
    result = session.execute(stmt)
    movie: Movie | None = result.scalars().one_or_none()
    return movie


def get_movie_by_url_suffix(*, session: Session, slug: str) -> Movie | None:
    """
    Retrieve the first movie whose source URL ends with ``slug``,
    ignoring case. Used for rows that predate stored slugs.

    Parameters:
        session (Session): The database session.
        slug (str): The slug the URL should end with.
    Returns:
        Movie | None: The first matching movie ordered by title, otherwise None.
    """
    escaped = slug.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    stmt = (
        select(Movie)
        .where(col(Movie.url).ilike(f"%{escaped}", escape="\\"))
        .order_by(col(Movie.title), col(Movie.id))
        .limit(1)
    )
    result = session.execute(stmt)
    movie: Movie | None = result.scalars().first()
    return movie


def count_movies(*, session: Session) -> int:
    stmt = select(func.count()).select_from(Movie)
    return int(session.execute(stmt).scalar_one())


def get_movies(
    *,
    session: Session,
    sort: MovieSortField = MovieSortField.UPDATED_AT,
    order: SortOrder = SortOrder.DESC,
    limit: int,
    offset: int = 0,
) -> list[Movie]:
    """
    Retrieve one page of movies.

    Parameters:
        session (Session): The database session.
        sort (MovieSortField): Field to sort by.
        order (SortOrder): Sort direction.
        limit (int): Maximum number of movies to return.
        offset (int): Number of movies to skip.
    Returns:
        list[Movie]: The movies in the requested window. Ties are broken by
        id so consecutive windows never overlap.
    """
    column = SORT_COLUMNS[sort]
    direction = column.asc() if order == SortOrder.ASC else column.desc()
    stmt = (
        select(Movie)
        .order_by(direction.nulls_last(), col(Movie.id))
        .offset(offset)
        .limit(limit)
    )
    result = session.execute(stmt)
    movies: list[Movie] = list(result.scalars().all())
    return movies


def get_latest_movies(*, session: Session, limit: int) -> list[Movie]:
    return get_movies(
        session=session,
        sort=MovieSortField.UPDATED_AT,
        order=SortOrder.DESC,
        limit=limit,
    )


def get_movies_by_title(
    *,
    session: Session,
    excluded_ids: Collection[UUID],
    offset: int,
    limit: int,
) -> list[Movie]:
    """
    Retrieve movies outside ``excluded_ids`` in title order, for the weekly
    featured rotation.
    """
    stmt = select(Movie)
    if excluded_ids:
        stmt = stmt.where(col(Movie.id).not_in(list(excluded_ids)))
    stmt = stmt.order_by(col(Movie.title), col(Movie.id)).offset(offset).limit(limit)
    result = session.execute(stmt)
    movies: list[Movie] = list(result.scalars().all())
    return movies


def get_recent_movies(
    *,
    session: Session,
    excluded_ids: Collection[UUID],
    limit: int,
) -> list[Movie]:
    stmt = select(Movie)
    if excluded_ids:
        stmt = stmt.where(col(Movie.id).not_in(list(excluded_ids)))
    stmt = stmt.order_by(
        col(Movie.updated_at).desc().nulls_last(), col(Movie.id)
    ).limit(limit)
    result = session.execute(stmt)
    movies: list[Movie] = list(result.scalars().all())
    return movies


def get_all_movies(*, session: Session) -> list[Movie]:
    stmt = select(Movie).order_by(col(Movie.updated_at).desc().nulls_last(), col(Movie.id))
    result = session.execute(stmt)
    movies: list[Movie] = list(result.scalars().all())
    return movies


def get_movies_without_slug(*, session: Session) -> list[Movie]:
    stmt = select(Movie).where(col(Movie.slug).is_(None))
    result = session.execute(stmt)
    movies: list[Movie] = list(result.scalars().all())
    return movies


def create_movie(*, session: Session, movie_create: MovieCreate, slug: str) -> Movie:
    """
    Create a new movie in the database.

    Parameters:
        session (Session): The database session.
        movie_create (MovieCreate): The movie data to create.
        slug (str): The slug to store with the movie.
    Returns:
        Movie: The created movie object.
    Raises:
        IntegrityError: If another movie already uses the slug.
    """
    db_obj = Movie(**movie_create.model_dump(), slug=slug)
    session.add(db_obj)
    session.flush()  # Check for Unique Violations
    return db_obj


def update_movie(*, db_movie: Movie, movie_update: MovieUpdate) -> Movie:
    """
    Update an existing movie. Does not flush, it's the caller's
    responsibility to flush and handle slug conflicts.
    """
    movie_data = movie_update.model_dump(exclude_unset=True)
    db_movie.sqlmodel_update(movie_data)
    return db_movie
