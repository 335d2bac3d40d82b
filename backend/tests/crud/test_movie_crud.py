import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from slowcinema.core.enums import MovieSortField, SortOrder
from slowcinema.crud import movie as movie_crud
from slowcinema.models.movie import Movie, MovieUpdate


def test_get_movie_by_id_success(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie: Movie = movie_factory()

    retrieved_movie = movie_crud.get_movie_by_id(
        session=db_transaction,
        id=movie.id,
    )

    assert retrieved_movie is movie


def test_get_movie_by_id_not_found(
    *,
    db_transaction: Session,
):
    retrieved_movie = movie_crud.get_movie_by_id(
        session=db_transaction,
        id=uuid.uuid4(),
    )

    assert retrieved_movie is None


def test_get_movie_by_slug(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie: Movie = movie_factory(title="The Turin Horse")
    movie_factory()

    assert movie_crud.get_movie_by_slug(session=db_transaction, slug="the-turin-horse") is movie
    assert movie_crud.get_movie_by_slug(session=db_transaction, slug="turin") is None


def test_get_movie_by_url_suffix_ignores_case(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie: Movie = movie_factory(
        slug=None,
        url="https://www.themoviedb.org/movie/31414-Satantango",
    )

    retrieved_movie = movie_crud.get_movie_by_url_suffix(
        session=db_transaction,
        slug="31414-satantango",
    )

    assert retrieved_movie is movie


def test_get_movie_by_url_suffix_treats_wildcards_literally(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie_factory(url="https://example.com/film/stalker")

    assert movie_crud.get_movie_by_url_suffix(session=db_transaction, slug="%") is None
    assert movie_crud.get_movie_by_url_suffix(session=db_transaction, slug="_talker") is None


def test_get_movie_by_url_suffix_prefers_first_title(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie_factory(title="Zerkalo", slug="zerkalo", url="https://a.example/mirror")
    first: Movie = movie_factory(title="Mirror", slug="mirror", url="https://b.example/mirror")

    assert movie_crud.get_movie_by_url_suffix(session=db_transaction, slug="mirror") is first


def test_count_movies(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie_factory.create_batch(4)

    assert movie_crud.count_movies(session=db_transaction) == 4


@pytest.mark.parametrize(
    ("order", "expected"),
    [
        (SortOrder.ASC, [90, 120, 480, None]),
        (SortOrder.DESC, [480, 120, 90, None]),
    ],
)
def test_get_movies_sorts_with_nulls_last(
    *,
    db_transaction: Session,
    movie_factory,
    order,
    expected,
):
    for duration in (120, None, 480, 90):
        movie_factory(duration=duration)

    movies = movie_crud.get_movies(
        session=db_transaction,
        sort=MovieSortField.DURATION,
        order=order,
        limit=10,
    )

    assert [movie.duration for movie in movies] == expected


def test_get_movies_windows_do_not_overlap(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie_factory.create_batch(5, rating=7.0)

    first = movie_crud.get_movies(
        session=db_transaction, sort=MovieSortField.RATING, limit=3, offset=0
    )
    second = movie_crud.get_movies(
        session=db_transaction, sort=MovieSortField.RATING, limit=3, offset=3
    )

    assert len(first) == 3
    assert len(second) == 2
    assert {m.id for m in first}.isdisjoint({m.id for m in second})


def test_get_latest_movies(
    *,
    db_transaction: Session,
    movie_factory,
):
    newest, middle, oldest = movie_factory.create_batch(3)

    latest = movie_crud.get_latest_movies(session=db_transaction, limit=2)

    assert latest == [newest, middle]


def test_get_movies_by_title_skips_excluded(
    *,
    db_transaction: Session,
    movie_factory,
):
    alpha = movie_factory(title="Alpha")
    beta = movie_factory(title="Beta")
    gamma = movie_factory(title="Gamma")

    movies = movie_crud.get_movies_by_title(
        session=db_transaction,
        excluded_ids={beta.id},
        offset=0,
        limit=10,
    )

    assert movies == [alpha, gamma]


def test_get_movies_without_slug(
    *,
    db_transaction: Session,
    movie_factory,
):
    legacy: Movie = movie_factory(slug=None)
    movie_factory()

    assert movie_crud.get_movies_without_slug(session=db_transaction) == [legacy]


def test_create_movie_success(
    *,
    db_transaction: Session,
    movie_create_factory,
):
    movie_create = movie_create_factory(title="Stalker")

    movie = movie_crud.create_movie(
        session=db_transaction,
        movie_create=movie_create,
        slug="stalker",
    )

    assert movie.id is not None
    assert movie.slug == "stalker"
    assert movie_crud.get_movie_by_slug(session=db_transaction, slug="stalker") is movie


def test_create_movie_duplicate_slug(
    *,
    db_transaction: Session,
    movie_factory,
    movie_create_factory,
):
    movie_factory(title="Stalker")

    with pytest.raises(IntegrityError):
        with db_transaction.begin_nested():
            movie_crud.create_movie(
                session=db_transaction,
                movie_create=movie_create_factory(title="Stalker"),
                slug="stalker",
            )


def test_update_movie_sets_only_given_fields(
    *,
    movie_factory,
):
    movie: Movie = movie_factory(title="Stalker", director="Andrei Tarkovsky")

    movie_crud.update_movie(
        db_movie=movie,
        movie_update=MovieUpdate(year=1979),
    )

    assert movie.year == 1979
    assert movie.title == "Stalker"
    assert movie.director == "Andrei Tarkovsky"
