from fastapi.testclient import TestClient
from sqlmodel import Session, select

from slowcinema.core.config import settings
from slowcinema.core.enums import RevalidationStatus
from slowcinema.models.movie import Movie
from slowcinema.models.revalidation_event import RevalidationEvent

ADMIN_URL = f"{settings.API_PREFIX}/admin"


def test_ingest_movie(
    client: TestClient,
    db_transaction: Session,
) -> None:
    response = client.post(
        f"{ADMIN_URL}/movies",
        json={"title": "The Turin Horse", "year": 2011, "language": "hu"},
    )

    assert response.status_code == 201
    assert response.json()["slug"] == "the-turin-horse"
    events = db_transaction.exec(select(RevalidationEvent)).all()
    assert {event.tag for event in events} == {"movie-the-turin-horse", "movies"}
    assert all(event.status == RevalidationStatus.PENDING for event in events)


def test_ingest_movie_slug_conflict(client: TestClient) -> None:
    client.post(f"{ADMIN_URL}/movies", json={"title": "Mirror"})

    response = client.post(f"{ADMIN_URL}/movies", json={"title": "mirror"})

    assert response.status_code == 409
    assert response.json() == {"detail": "Another movie already uses the slug 'mirror'."}


def test_ingest_movie_without_slug_source(client: TestClient) -> None:
    response = client.post(f"{ADMIN_URL}/movies", json={"title": "???"})

    assert response.status_code == 422


def test_update_movie(
    client: TestClient,
    movie_factory,
) -> None:
    movie_id = str(movie_factory(title="Solaris").id)

    response = client.put(f"{ADMIN_URL}/movies/{movie_id}", json={"title": "Solaris 1972"})

    assert response.status_code == 200
    assert response.json()["slug"] == "solaris-1972"
    assert client.get("/reviews/solaris-1972").status_code == 200


def test_migrate_languages(
    client: TestClient,
    db_transaction: Session,
    movie_factory,
) -> None:
    movie_factory(title="Stalker", language="Russisch")
    movie_factory(title="Mirror", language="ru")

    response = client.get(f"{ADMIN_URL}/migrate-languages")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Successfully migrated language fields to ISO codes",
        "changed": 1,
    }
    languages = db_transaction.exec(select(Movie.language)).all()
    assert sorted(languages) == ["ru", "ru"]
