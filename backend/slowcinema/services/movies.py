from collections.abc import Callable, Collection
from datetime import date
from uuid import UUID

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from slowcinema.converters import movie as movie_converters
from slowcinema.core.enums import MOVIE_SORT_ALIASES, MovieSortField, ReviewListSort, SortOrder
from slowcinema.core.languages import to_language_codes
from slowcinema.core.slugs import slug_from_url, slugify
from slowcinema.crud import movie as movies_crud
from slowcinema.exceptions.base import AppError
from slowcinema.exceptions.movie_exceptions import (
    InvalidPaginationError,
    InvalidSortFieldError,
    MovieNotFoundError,
    MovieSlugConflictError,
    MovieSlugError,
)
from slowcinema.models.movie import Movie, MovieCreate, MovieUpdate
from slowcinema.schemas.movie import MovieDetail, MovieList, Pagination
from slowcinema.schemas.pages import HomePage, ReviewPage, ReviewsPage
from slowcinema.services import revalidation as revalidation_service
from slowcinema.utils import now_site, now_utc, week_of_year

MIN_LIMIT = 1
MAX_LIMIT = 100
LATEST_COUNT = 3
FEATURED_COUNT = 2
FEATURED_ROTATION_SPAN = 50
FEATURED_BACKFILL_LIMIT = 10

REVIEW_LIST_SORTS: dict[ReviewListSort, tuple[MovieSortField, SortOrder]] = {
    ReviewListSort.ADDED: (MovieSortField.UPDATED_AT, SortOrder.DESC),
    ReviewListSort.TITLE: (MovieSortField.TITLE, SortOrder.ASC),
    ReviewListSort.YEAR: (MovieSortField.YEAR, SortOrder.DESC),
    ReviewListSort.LENGTH: (MovieSortField.DURATION, SortOrder.DESC),
    ReviewListSort.RATING: (MovieSortField.RATING, SortOrder.DESC),
}


def parse_sort_field(sort: str | None) -> MovieSortField:
    """
    Map a requested sort name onto an allow-listed field.

    Raises:
        InvalidSortFieldError: If the name is not a known sort field or alias.
    """
    if not sort:
        return MovieSortField.UPDATED_AT
    name = sort.strip().lower()
    if name in MOVIE_SORT_ALIASES:
        return MOVIE_SORT_ALIASES[name]
    try:
        return MovieSortField(name)
    except ValueError:
        allowed = [field.value for field in MovieSortField]
        raise InvalidSortFieldError(sort, allowed) from None


def validate_window(*, limit: int, skip: int) -> None:
    if limit < MIN_LIMIT or limit > MAX_LIMIT:
        raise InvalidPaginationError(
            f"Invalid limit parameter. Must be between {MIN_LIMIT} and {MAX_LIMIT}."
        )
    if skip < 0:
        raise InvalidPaginationError("Invalid skip parameter. Must be >= 0.")


def list_movies(
    *,
    session: Session,
    limit: int,
    skip: int,
    sort: MovieSortField = MovieSortField.UPDATED_AT,
    order: SortOrder = SortOrder.DESC,
) -> MovieList:
    """
    Get one page of the movie listing.

    Parameters:
        session (Session): Database session.
        limit (int): Page size, between 1 and 100.
        skip (int): Number of movies to skip, at least 0.
        sort (MovieSortField): Field to sort by.
        order (SortOrder): Sort direction.
    Returns:
        MovieList: The movies plus pagination info.
    Raises:
        InvalidPaginationError: If limit or skip is out of range.
    """
    validate_window(limit=limit, skip=skip)
    total = movies_crud.count_movies(session=session)
    movies = movies_crud.get_movies(
        session=session,
        sort=sort,
        order=order,
        limit=limit,
        offset=skip,
    )
    return MovieList(
        movies=[movie_converters.to_summary(movie) for movie in movies],
        pagination=Pagination(
            total=total,
            limit=limit,
            skip=skip,
            has_more=skip + limit < total,
        ),
    )


def get_reviews_page(
    *,
    session: Session,
    sort: ReviewListSort,
    limit: int,
    skip: int,
) -> ReviewsPage:
    sort_field, order = REVIEW_LIST_SORTS[sort]
    listing = list_movies(
        session=session,
        limit=limit,
        skip=skip,
        sort=sort_field,
        order=order,
    )
    return ReviewsPage(sort=sort, movies=listing.movies, pagination=listing.pagination)


def get_movie_by_id(*, session: Session, movie_id: UUID) -> MovieDetail:
    movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
    if movie is None:
        raise MovieNotFoundError(movie_id=movie_id)
    return movie_converters.to_detail(movie)


def resolve_by_slug(*, session: Session, slug: str) -> Movie | None:
    """
    Find the movie a slug points at.

    The stored slug column is authoritative. Links built from the last
    segment of a movie's source URL, and rows ingested before slugs were
    stored, are still found by matching the end of the source URL.
    """
    slug = slug.strip().lower()
    if not slug:
        return None
    movie = movies_crud.get_movie_by_slug(session=session, slug=slug)
    if movie is not None:
        return movie
    return movies_crud.get_movie_by_url_suffix(session=session, slug=slug)


def get_review_page(*, session: Session, slug: str) -> ReviewPage:
    """
    Raises:
        MovieNotFoundError: If no movie resolves from the slug.
    """
    movie = resolve_by_slug(session=session, slug=slug)
    if movie is None:
        raise MovieNotFoundError(slug=slug)
    return movie_converters.to_review_page(movie)


def select_featured(
    *,
    session: Session,
    excluded_ids: Collection[UUID],
    week: int,
    count: int = FEATURED_COUNT,
) -> list[Movie]:
    """
    Pick this week's featured movies.

    Candidates come from three tiers, in order, until ``count`` movies are
    chosen:

    1. movies outside ``excluded_ids`` in title order, starting at
       ``((week - 1) * count) % FEATURED_ROTATION_SPAN``;
    2. the same ordering from the start, for weeks that land past the end;
    3. the most recently updated movies outside ``excluded_ids``.

    Every tier skips excluded and already chosen movies, so the result holds
    ``min(count, eligible)`` distinct movies, none of them excluded, and it
    only changes when the week does.
    """
    excluded = set(excluded_ids)
    offset = ((week - 1) * count) % FEATURED_ROTATION_SPAN
    tiers: list[Callable[[int], list[Movie]]] = [
        lambda needed: movies_crud.get_movies_by_title(
            session=session, excluded_ids=excluded, offset=offset, limit=needed
        ),
        lambda needed: movies_crud.get_movies_by_title(
            session=session, excluded_ids=excluded, offset=0, limit=needed + count
        ),
        lambda needed: movies_crud.get_recent_movies(
            session=session, excluded_ids=excluded, limit=FEATURED_BACKFILL_LIMIT
        ),
    ]

    selected: list[Movie] = []
    chosen_ids: set[UUID] = set()
    for tier in tiers:
        needed = count - len(selected)
        if needed <= 0:
            break
        for movie in tier(needed):
            if movie.id in excluded or movie.id in chosen_ids:
                continue
            selected.append(movie)
            chosen_ids.add(movie.id)
            if len(selected) == count:
                break
    return selected


def get_home_page(*, session: Session, today: date | None = None) -> HomePage:
    """
    Get the homepage data: the latest reviews and this week's featured ones.

    Parameters:
        session (Session): Database session.
        today (date | None): Date deciding the featured rotation. Defaults to
            the current date in the site's timezone.
    Returns:
        HomePage: Latest and featured movies, never overlapping.
    """
    today = today or now_site().date()
    latest = movies_crud.get_latest_movies(session=session, limit=LATEST_COUNT)
    featured = select_featured(
        session=session,
        excluded_ids=[movie.id for movie in latest],
        week=week_of_year(today),
    )
    return HomePage(
        latest=[movie_converters.to_summary(movie) for movie in latest],
        featured=[movie_converters.to_featured(movie) for movie in featured],
    )


def derive_slug(*, title: str, url: str | None) -> str:
    """
    Raises:
        MovieSlugError: If neither the title nor the URL yields a slug.
    """
    slug = slugify(title) or slugify(slug_from_url(url))
    if not slug:
        raise MovieSlugError(title)
    return slug


def _ensure_slug_free(*, session: Session, slug: str, movie_id: UUID | None = None) -> None:
    existing = movies_crud.get_movie_by_slug(session=session, slug=slug)
    if existing is not None and existing.id != movie_id:
        raise MovieSlugConflictError(slug)


def ingest_movie(*, session: Session, movie_create: MovieCreate) -> MovieDetail:
    """
    Store a movie coming from the ingestion process.

    The slug is computed here and persisted with the row; a slug already used
    by another movie is refused rather than disambiguated.

    Raises:
        MovieSlugError: If no slug can be derived.
        MovieSlugConflictError: If another movie already has the slug.
        AppError: If the insert fails for another reason.
    """
    slug = derive_slug(title=movie_create.title, url=movie_create.url)
    _ensure_slug_free(session=session, slug=slug)
    if movie_create.updated_at is None:
        movie_create = movie_create.model_copy(update={"updated_at": now_utc()})
    try:
        movie = movies_crud.create_movie(
            session=session, movie_create=movie_create, slug=slug
        )
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise MovieSlugConflictError(slug) from e
    except Exception as e:
        session.rollback()
        raise AppError from e

    logger.info("Ingested movie", slug=slug)
    revalidation_service.emit(
        session=session,
        keys=revalidation_service.invalidation_keys(movie_slug=slug),
        reason="movie created",
    )
    return movie_converters.to_detail(movie)


def update_movie(*, session: Session, movie_id: UUID, movie_update: MovieUpdate) -> MovieDetail:
    """
    Update a movie, recomputing its stored slug when the title or URL
    changes.

    Raises:
        MovieNotFoundError: If the movie does not exist.
        MovieSlugConflictError: If the new slug belongs to another movie.
        AppError: If the update fails for another reason.
    """
    movie = movies_crud.get_movie_by_id(session=session, id=movie_id)
    if movie is None:
        raise MovieNotFoundError(movie_id=movie_id)

    old_slug = movie.slug
    new_slug = derive_slug(
        title=movie_update.title or movie.title,
        url=movie_update.url if "url" in movie_update.model_fields_set else movie.url,
    )
    _ensure_slug_free(session=session, slug=new_slug, movie_id=movie.id)
    try:
        movies_crud.update_movie(db_movie=movie, movie_update=movie_update)
        movie.slug = new_slug
        movie.updated_at = now_utc()
        session.flush()
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise MovieSlugConflictError(new_slug) from e
    except Exception as e:
        session.rollback()
        raise AppError from e

    keys = revalidation_service.invalidation_keys(movie_slug=new_slug)
    if old_slug and old_slug != new_slug:
        keys.append(revalidation_service.movie_tag(old_slug))
    revalidation_service.emit(session=session, keys=keys, reason="movie updated")
    return movie_converters.to_detail(movie)


def backfill_movie_slugs(*, session: Session) -> int:
    """
    Store slugs for movies ingested before slugs were persisted.

    Movies whose slug would collide with another movie are skipped and
    logged; resolving such collisions needs an editorial decision.

    Returns:
        int: The number of movies that received a slug.
    """
    updated = 0
    for movie in movies_crud.get_movies_without_slug(session=session):
        try:
            slug = derive_slug(title=movie.title, url=movie.url)
            _ensure_slug_free(session=session, slug=slug, movie_id=movie.id)
        except (MovieSlugError, MovieSlugConflictError) as e:
            logger.warning("Skipping slug backfill for {}: {}", movie.id, e.detail)
            continue
        movie.slug = slug
        session.flush()
        updated += 1
    session.commit()
    if updated:
        revalidation_service.emit(
            session=session,
            keys=[revalidation_service.MOVIES_TAG],
            reason="slug backfill",
        )
    return updated


def migrate_movie_languages(*, session: Session) -> int:
    """
    Rewrite every movie's language label as ISO 639-1 codes.

    Returns:
        int: The number of movies whose label changed.
    """
    changed = 0
    for movie in movies_crud.get_all_movies(session=session):
        if not movie.language:
            continue
        codes = to_language_codes(movie.language)
        if codes != movie.language:
            movie.language = codes
            changed += 1
    session.commit()
    logger.info("Migrated movie languages", changed=changed)
    revalidation_service.emit(
        session=session,
        keys=[revalidation_service.MOVIES_TAG],
        reason="language migration",
    )
    return changed
