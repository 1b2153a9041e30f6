# File: main.py

import logging
import sys
from typing import List, Optional

from fastapi import FastAPI

from api.routers.drugs import router as drugs_router
from api.routers.health import router as health_router
from domain.errors import ConfigurationError, FormularyError
from infrastructure.db import create_pool, set_pool
from infrastructure.seeder import seed_data
from infrastructure.settings import DEFAULT_LOG_LEVEL, HOST, PORT, Settings, load_settings

logger = logging.getLogger("formulary")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_app() -> FastAPI:
    app = FastAPI(
        title="NLEM Drug Formulary API",
        version="1.0.0"
    )
    # Health check at "/", drug queries under /api/drugs
    app.include_router(health_router)
    app.include_router(drugs_router)
    return app


app = create_app()


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def run_seed(settings: Settings) -> int:
    """Run the seeder once against the configured CSV. Returns the exit code."""
    pool = create_pool(settings.database_url)
    try:
        seed_data(pool, settings.seed_csv_path)
    except FormularyError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        pool.close()
    return 0


def run_server(settings: Settings) -> int:
    import uvicorn

    set_pool(create_pool(settings.database_url))
    logger.info(f"Server listening on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging(DEFAULT_LOG_LEVEL)
        logger.critical(str(e))
        return 1

    configure_logging(settings.log_level)

    try:
        if argv[:1] == ["seed"]:
            return run_seed(settings)
        return run_server(settings)
    except FormularyError as e:
        logger.critical(f"Startup failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
