from typing import Any

from slowcinema.core.config import settings
from slowcinema.core.languages import to_display_name
from slowcinema.core.slugs import slugify
from slowcinema.models.movie import Movie
from slowcinema.schemas.movie import MovieDetail, MovieFeatured, MovieSummary
from slowcinema.schemas.pages import OpenGraphImage, PageMetadata, ReviewPage
from slowcinema.utils import isoformat_utc, parse_timestamp


def to_summary(movie: Movie) -> MovieSummary:
    return MovieSummary.model_validate(movie)


def to_featured(movie: Movie) -> MovieFeatured:
    return MovieFeatured.model_validate(movie)


def to_detail(movie: Movie) -> MovieDetail:
    return MovieDetail.model_validate(movie)


def review_url(movie: Movie) -> str:
    return f"{settings.SITE_URL}/reviews/{movie.slug or slugify(movie.title)}"


def split_cast(cast: str | None) -> list[str]:
    if not cast:
        return []
    return [name.strip() for name in cast.split(",") if name.strip()]


def _truncate(text: str, length: int) -> str:
    return text[:length] + "..."


def _year_label(movie: Movie) -> str:
    return str(movie.year) if movie.year is not None else ""


def build_metadata(movie: Movie, *, language_display: str) -> PageMetadata:
    """
    SEO metadata for a review page: title, keyword-rich description,
    keywords, canonical URL and the Open Graph image.
    """
    year = _year_label(movie)
    published = isoformat_utc(parse_timestamp(movie.updated_at))
    director_phrase = f"directed by {movie.director}" if movie.director else ""
    year_phrase = f"released in {year}" if year else ""
    description = (
        f"Read our in-depth analysis and critique of {movie.title}, "
        f"{director_phrase} {year_phrase}. This slow cinema masterpiece explores "
        f"{_truncate(movie.description, 150)} Explore artistic cinematography, "
        "narrative techniques, and cultural impact in our comprehensive review."
    )
    keywords = [
        movie.title,
        movie.director or "",
        f"{movie.title} film",
        f"{movie.title} movie",
        f"{movie.title} review",
        f"{movie.title} analysis",
        f"{movie.director} director" if movie.director else "",
        f"{year} film" if year else "",
        "slow cinema",
        "art house cinema",
        "film analysis",
        "film critique",
        "arthouse film review",
        f"{language_display} cinema" if language_display else "",
    ]
    images = []
    if movie.image_url:
        alt = f"Movie still from {movie.title} ({year})"
        if movie.director:
            alt += f" directed by {movie.director}"
        images.append(OpenGraphImage(url=movie.image_url, alt=alt))
    return PageMetadata(
        title=f"{movie.title} ({year}) - Film Review | {settings.SITE_NAME}",
        description=description,
        keywords=[keyword for keyword in keywords if keyword],
        canonical_url=review_url(movie),
        published_time=published,
        images=images,
    )


def build_structured_data(movie: Movie, *, language_display: str) -> dict[str, Any]:
    """schema.org ``Review`` document embedded in the review page."""
    organization = {
        "@type": "Organization",
        "name": settings.SITE_NAME,
        "url": settings.SITE_URL,
    }
    year = _year_label(movie)
    return {
        "@context": "https://schema.org",
        "@type": "Review",
        "name": f"{movie.title} ({year}) - Film Review",
        "reviewBody": _truncate(movie.description, 500),
        "datePublished": isoformat_utc(parse_timestamp(movie.updated_at)),
        "author": organization,
        "publisher": {
            **organization,
            "logo": {"@type": "ImageObject", "url": f"{settings.SITE_URL}/logo.png"},
        },
        "itemReviewed": {
            "@type": "Movie",
            "name": movie.title,
            "image": movie.image_url,
            "director": {"@type": "Person", "name": movie.director},
            "actor": [
                {"@type": "Person", "name": name} for name in split_cast(movie.cast)
            ],
            "datePublished": year,
            "duration": f"PT{movie.duration}M" if movie.duration else None,
            "inLanguage": language_display,
            "description": _truncate(movie.description, 200),
            "url": review_url(movie),
        },
        "reviewRating": {
            "@type": "Rating",
            "ratingValue": movie.rating,
            "bestRating": "10",
            "worstRating": "1",
            "ratingCount": movie.vote_count,
        },
    }


def to_review_page(movie: Movie) -> ReviewPage:
    language_display = to_display_name(movie.language)
    return ReviewPage(
        movie=to_detail(movie),
        language_display=language_display,
        cast=split_cast(movie.cast),
        metadata=build_metadata(movie, language_display=language_display),
        structured_data=build_structured_data(movie, language_display=language_display),
    )
