from fastapi import APIRouter

from slowcinema.api.routes import (
    admin,
    feeds,
    movies,
    pages,
    revalidate,
    reviews,
    utils,
)
from slowcinema.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(utils.router)
api_router.include_router(movies.router)
api_router.include_router(reviews.router)
api_router.include_router(revalidate.router)
api_router.include_router(admin.router)
api_router.include_router(feeds.api_router)

# Page data and documents served at the site root
site_router = APIRouter()
site_router.include_router(pages.router)
site_router.include_router(feeds.router)
