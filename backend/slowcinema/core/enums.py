from enum import Enum, unique


@unique
class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@unique
class MovieSortField(str, Enum):
    UPDATED_AT = "updated_at"
    TITLE = "title"
    YEAR = "year"
    DURATION = "duration"
    RATING = "rating"


# Names used by the old listing page and API clients.
MOVIE_SORT_ALIASES: dict[str, MovieSortField] = {
    "updatedat": MovieSortField.UPDATED_AT,
    "added": MovieSortField.UPDATED_AT,
    "length": MovieSortField.DURATION,
}


@unique
class ReviewListSort(str, Enum):
    ADDED = "added"
    TITLE = "title"
    YEAR = "year"
    LENGTH = "length"
    RATING = "rating"


@unique
class ChangeFrequency(str, Enum):
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@unique
class RevalidationStatus(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    FAILED = "failed"
