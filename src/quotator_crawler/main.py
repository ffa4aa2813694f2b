import sys

import uvicorn
from pydantic import ValidationError

from quotator_crawler import SERVICE_NAME, __version__
from quotator_crawler.core.coordinator import RefreshCoordinator
from quotator_crawler.core.periodic_task import PeriodicTask
from quotator_crawler.core.settings import Settings
from quotator_crawler.core.utils import configure_log_level, setup_logger
from quotator_crawler.db.db import Database, DatabaseInitializationError
from quotator_crawler.db.repository import Repository
from quotator_crawler.web.api import create_app

logger = setup_logger(name="main")

SHUTDOWN_TIMEOUT = 10.0


def _load_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        logger.error("Configuration Error: Missing or invalid environment variables")
        for error in e.errors():
            field = error["loc"][0] if error["loc"] else "settings"
            logger.error(f"{field}: {error['msg']}")
        sys.exit(1)


def main():
    settings = _load_settings()
    configure_log_level(settings.get_log_level())
    logger.info(f"Starting {SERVICE_NAME} {__version__} on port {settings.PORT}")

    database = Database()
    try:
        database.init_db(settings.DB_PATH)
    except DatabaseInitializationError as e:
        logger.critical(f"Failed to initialize database: {e}")
        sys.exit(1)

    coordinator = RefreshCoordinator(Repository(database))

    scheduler = None
    if settings.initial_crawl_enabled:
        scheduler = PeriodicTask(
            interval_seconds=settings.REFRESH_INTERVAL,
            task_function=coordinator.refresh,
            initial_delay=settings.INITIAL_CRAWL_DELAY,
        )
        scheduler.start()

    app = create_app(coordinator)
    logger.info(f"Crawler listening on http://{settings.HOST}:{settings.PORT}")
    try:
        uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    finally:
        if scheduler is not None:
            scheduler.stop(timeout=SHUTDOWN_TIMEOUT)
        coordinator.wait(timeout=SHUTDOWN_TIMEOUT)
        database.close()
        logger.info("Crawler stopped")


if __name__ == "__main__":
    main()
