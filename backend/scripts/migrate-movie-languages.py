from slowcinema.core.config import settings
from slowcinema.core.db import StoreGateway
from slowcinema.logging_.logger import setup_logger
from slowcinema.services import movies as movies_service

logger = setup_logger("scripts")


def migrate_movie_languages():
    store = StoreGateway.from_settings(settings)
    try:
        with store.session() as session:
            changed = movies_service.migrate_movie_languages(session=session)
        logger.info(f"Rewrote the language label of {changed} movies")
    finally:
        store.shutdown()


if __name__ == '__main__':
    migrate_movie_languages()
