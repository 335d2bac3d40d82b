from slowcinema.core.config import settings
from slowcinema.core.db import StoreGateway
from slowcinema.logging_.logger import setup_logger
from slowcinema.services import movies as movies_service

logger = setup_logger("scripts")


def backfill_movie_slugs():
    store = StoreGateway.from_settings(settings)
    try:
        with store.session() as session:
            updated = movies_service.backfill_movie_slugs(session=session)
        logger.info(f"Stored slugs for {updated} movies")
    finally:
        store.shutdown()


if __name__ == '__main__':
    backfill_movie_slugs()
