from datetime import datetime, timedelta, timezone
from xml.etree import ElementTree as ET

import pytest
from sqlmodel import Session

from slowcinema.core.config import settings
from slowcinema.core.enums import ChangeFrequency
from slowcinema.core.slugs import slugify
from slowcinema.models.movie import Movie
from slowcinema.services import feeds as feeds_services

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_render_rss_has_one_item_per_movie():
    movies = [
        Movie(title="Stalker", year=1979, description="A zone.", updated_at=NOW),
        Movie(title="Mirror", year=1975, description="Memories.", updated_at=NOW),
    ]

    root = ET.fromstring(feeds_services.render_rss(movies, now=NOW))

    items = root.findall("./channel/item")
    assert len(items) == 2
    assert items[0].findtext("title") == "Stalker Review (1979)"
    assert items[0].findtext("link") == f"{settings.SITE_URL}/reviews/{slugify('Stalker')}"
    assert items[0].findtext("guid") == items[0].findtext("link")
    assert items[0].findtext("pubDate") == "Sat, 01 Jun 2024 12:00:00 GMT"


def test_render_rss_channel_metadata():
    root = ET.fromstring(feeds_services.render_rss([], now=NOW))

    channel = root.find("channel")
    assert channel is not None
    assert channel.findtext("title") == settings.SITE_NAME
    assert channel.findtext("link") == settings.SITE_URL
    self_link = channel.find(f"{{{feeds_services.ATOM_NS}}}link")
    assert self_link is not None
    assert self_link.get("href") == f"{settings.SITE_URL}/feed.xml"
    assert channel.findall("item") == []


def test_render_rss_escapes_markup():
    movies = [Movie(title="Tom & Jerry <3", description="<b>bold</b>", updated_at=NOW)]

    document = feeds_services.render_rss(movies, now=NOW)

    assert b"<b>" not in document
    item = ET.fromstring(document).find("./channel/item")
    assert item is not None
    assert item.findtext("description") == "<b>bold</b>"


def test_render_rss_uses_stored_slug():
    movie = Movie(title="Sátántangó", slug="satantango", updated_at=NOW)

    item = ET.fromstring(feeds_services.render_rss([movie], now=NOW)).find("./channel/item")

    assert item is not None
    assert item.findtext("link") == f"{settings.SITE_URL}/reviews/satantango"


@pytest.mark.parametrize(
    ("age", "priority", "frequency"),
    [
        (timedelta(days=1), 0.9, ChangeFrequency.WEEKLY),
        (timedelta(days=10), 0.8, ChangeFrequency.MONTHLY),
        (timedelta(days=60), 0.7, ChangeFrequency.MONTHLY),
    ],
)
def test_sitemap_entry_priority_bands(age, priority, frequency):
    movie = Movie(title="Stalker", slug="stalker", updated_at=NOW - age)

    entry = feeds_services.sitemap_entry_for(movie, now=NOW)

    assert entry.priority == priority
    assert entry.change_frequency == frequency
    assert entry.url == f"{settings.SITE_URL}/reviews/stalker"
    assert entry.last_modified == (NOW - age).isoformat().replace("+00:00", "Z")


def test_sitemap_entry_with_unreadable_timestamp():
    movie = Movie(title="Stalker", slug="stalker")
    movie.updated_at = "yesterday-ish"  # type: ignore[assignment]

    entry = feeds_services.sitemap_entry_for(movie, now=NOW)

    assert entry.priority == 0.9
    assert entry.last_modified == "2024-06-01T12:00:00Z"


def test_get_sitemap_entries_appends_static_pages(
    *,
    db_transaction: Session,
    movie_factory,
):
    movie_factory.create_batch(2)

    entries = feeds_services.get_sitemap_entries(session=db_transaction, now=NOW)

    assert len(entries) == 2 + len(feeds_services.STATIC_PAGES)
    assert entries[2].url == settings.SITE_URL
    assert entries[2].priority == 1.0
    assert [entry.url for entry in entries[-1:]] == [f"{settings.SITE_URL}/feed.xml"]


def test_render_sitemap():
    entries = [
        feeds_services.sitemap_entry_for(
            Movie(title="Stalker", slug="stalker", updated_at=NOW), now=NOW
        )
    ]

    root = ET.fromstring(feeds_services.render_sitemap(entries))

    ns = {"sm": feeds_services.SITEMAP_NS}
    urls = root.findall("sm:url", ns)
    assert len(urls) == 1
    assert urls[0].findtext("sm:loc", namespaces=ns) == f"{settings.SITE_URL}/reviews/stalker"
    assert urls[0].findtext("sm:changefreq", namespaces=ns) == "weekly"
    assert urls[0].findtext("sm:priority", namespaces=ns) == "0.9"
