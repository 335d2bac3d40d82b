from .movie import Movie, MovieCreate, MovieUpdate
from .revalidation_event import RevalidationEvent
from .review import Review, ReviewCreate, ReviewUpdate

__all__ = [
    "Movie",
    "MovieCreate",
    "MovieUpdate",
    "Review",
    "ReviewCreate",
    "ReviewUpdate",
    "RevalidationEvent",
]
