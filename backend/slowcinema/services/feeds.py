from datetime import datetime, timedelta
from email.utils import format_datetime
from xml.etree import ElementTree as ET

from sqlmodel import Session

from slowcinema.converters.movie import review_url
from slowcinema.core.config import settings
from slowcinema.core.enums import ChangeFrequency
from slowcinema.crud import movie as movies_crud
from slowcinema.models.movie import Movie
from slowcinema.schemas.sitemap import SitemapEntry
from slowcinema.utils import isoformat_utc, now_utc, parse_timestamp

ATOM_NS = "http://www.w3.org/2005/Atom"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

RECENT_WINDOW = timedelta(days=7)
MONTH_WINDOW = timedelta(days=30)

# (path, change frequency, priority) of the site's top-level pages
STATIC_PAGES: list[tuple[str, ChangeFrequency, float]] = [
    ("", ChangeFrequency.DAILY, 1.0),
    ("/reviews", ChangeFrequency.DAILY, 0.9),
    ("/lists", ChangeFrequency.WEEKLY, 0.7),
    ("/articles", ChangeFrequency.WEEKLY, 0.7),
    ("/feed.xml", ChangeFrequency.DAILY, 0.4),
]

ET.register_namespace("atom", ATOM_NS)


def _item_title(movie: Movie) -> str:
    year = movie.year if movie.year is not None else ""
    return f"{movie.title} Review ({year})"


def render_rss(movies: list[Movie], *, now: datetime | None = None) -> bytes:
    """
    Render an RSS 2.0 document with one ``<item>`` per movie.

    Items link to the movie's review page; ``pubDate`` comes from the
    movie's update time, or ``now`` when it has none.
    """
    now = now or now_utc()
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = settings.SITE_NAME
    ET.SubElement(channel, "description").text = settings.SITE_DESCRIPTION
    ET.SubElement(channel, "link").text = settings.SITE_URL
    ET.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        {
            "href": f"{settings.SITE_URL}/feed.xml",
            "rel": "self",
            "type": "application/rss+xml",
        },
    )
    for movie in movies:
        link = review_url(movie)
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = _item_title(movie)
        ET.SubElement(item, "link").text = link
        ET.SubElement(item, "guid").text = link
        ET.SubElement(item, "description").text = movie.description
        published = parse_timestamp(movie.updated_at, fallback=now)
        ET.SubElement(item, "pubDate").text = format_datetime(published, usegmt=True)
    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)


def build_rss_feed(*, session: Session) -> bytes:
    return render_rss(movies_crud.get_all_movies(session=session))


def sitemap_entry_for(movie: Movie, *, now: datetime) -> SitemapEntry:
    """
    Sitemap entry for one review page. Recently updated reviews get a
    higher priority; a missing or unreadable update time counts as ``now``.
    """
    updated = parse_timestamp(movie.updated_at, fallback=now)
    age = now - updated
    if age < RECENT_WINDOW:
        priority, frequency = 0.9, ChangeFrequency.WEEKLY
    elif age < MONTH_WINDOW:
        priority, frequency = 0.8, ChangeFrequency.MONTHLY
    else:
        priority, frequency = 0.7, ChangeFrequency.MONTHLY
    return SitemapEntry(
        url=review_url(movie),
        last_modified=isoformat_utc(updated),
        change_frequency=frequency,
        priority=priority,
    )


def get_sitemap_entries(*, session: Session, now: datetime | None = None) -> list[SitemapEntry]:
    now = now or now_utc()
    entries = [
        sitemap_entry_for(movie, now=now)
        for movie in movies_crud.get_all_movies(session=session)
    ]
    entries.extend(
        SitemapEntry(
            url=f"{settings.SITE_URL}{path}",
            last_modified=isoformat_utc(now),
            change_frequency=frequency,
            priority=priority,
        )
        for path, frequency, priority in STATIC_PAGES
    )
    return entries


def render_sitemap(entries: list[SitemapEntry]) -> bytes:
    urlset = ET.Element("urlset", {"xmlns": SITEMAP_NS})
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified
        ET.SubElement(url, "changefreq").text = entry.change_frequency.value
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True)
