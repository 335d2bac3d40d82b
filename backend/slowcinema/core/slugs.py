import re

_NON_SLUG_RUN_RE = re.compile(r"[^a-z0-9]+")


def slugify(title: str | None) -> str:
    """
    Derive a URL-safe slug: lowercase, every run of characters outside
    ``[a-z0-9]`` collapsed to one hyphen, no leading or trailing hyphens.

    Total and idempotent; degenerate input gives an empty string.
    """
    if not title:
        return ""
    return _NON_SLUG_RUN_RE.sub("-", title.lower()).strip("-")


def slug_from_url(url: str | None) -> str:
    """Last path segment of a stored source URL ("" when there is none)."""
    if not url:
        return ""
    return url.split("/")[-1]
