import re
from dataclasses import dataclass

import pycountry

__all__ = [
    "LANGUAGE_ALIASES",
    "ResolvedLanguage",
    "resolve_languages",
    "to_display_name",
    "to_language_codes",
]

# Display forms that are not English language names, plus common aliases the
# ISO tables do not know. Keys are lowercase.
LANGUAGE_ALIASES = {
    "arabisch": "ar",
    "catalaans": "ca",
    "engels": "en",
    "frans": "fr",
    "ijslands": "is",
    "malayalam": "ml",
    "nederlands": "nl",
    "russisch": "ru",
    "spaans": "es",
    "cantonese": "zh",
    "mandarin": "zh",
    "greek": "el",
    "farsi": "fa",
    "flemish": "nl",
}

_QUALIFIER_RE = re.compile(r"\s*\(.*\)$")


@dataclass(frozen=True)
class ResolvedLanguage:
    token: str
    code: str | None
    name: str


def _iso_name(code: str) -> str | None:
    language = pycountry.languages.get(alpha_2=code)
    if language is None:
        return None
    # "Modern Greek (1453-)" -> "Modern Greek"
    return _QUALIFIER_RE.sub("", language.name)


def _code_for_name(name: str) -> str | None:
    language = pycountry.languages.get(name=name)
    if language is None:
        return None
    return getattr(language, "alpha_2", None)


def _resolve_token(token: str) -> ResolvedLanguage:
    lookup = token.lower()

    alias = LANGUAGE_ALIASES.get(lookup)
    if alias is not None:
        return ResolvedLanguage(token=token, code=alias, name=_iso_name(alias) or token)

    if len(lookup) == 2:
        name = _iso_name(lookup)
        if name is not None:
            return ResolvedLanguage(token=token, code=lookup, name=name)

    code = _code_for_name(lookup)
    if code is not None:
        return ResolvedLanguage(token=token, code=code, name=_iso_name(code) or token)

    return ResolvedLanguage(token=token, code=None, name=lookup[:1].upper() + lookup[1:])


def resolve_languages(label: str | None) -> list[ResolvedLanguage]:
    """
    Resolve a free-text language label into one entry per comma-separated
    token.

    Each token is matched, in order, against the alias table, ISO 639-1
    codes and English language names. Tokens that match nothing keep no
    code and display as the token with its first letter capitalized.
    Empty tokens are dropped, so an empty label resolves to ``[]``.
    """
    if not label:
        return []
    tokens = [part.strip() for part in label.split(",")]
    return [_resolve_token(token) for token in tokens if token]


def to_display_name(label: str | None) -> str:
    return ", ".join(language.name for language in resolve_languages(label))


def to_language_codes(label: str | None) -> str:
    """Label rewritten as ISO 639-1 codes; unmapped tokens are kept as given."""
    return ", ".join(
        language.code or language.token for language in resolve_languages(label)
    )
