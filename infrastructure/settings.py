# File: infrastructure/settings.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv

from domain.errors import ConfigurationError

ENV_FILE             = "api.env"
DEFAULT_SEED_CSV     = "./data/nlem_2567.csv"
DEFAULT_LOG_LEVEL    = "INFO"

HOST                 = "0.0.0.0"
PORT                 = 3000

POOL_MAX_SIZE        = 20
POOL_ACQUIRE_TIMEOUT = 5  # seconds


@dataclass(frozen=True)
class Settings:
    database_url:  str
    seed_csv_path: str = DEFAULT_SEED_CSV
    log_level:     str = DEFAULT_LOG_LEVEL


def load_settings(env_file: str = ENV_FILE) -> Settings:
    """
    Read configuration from the environment, after loading env_file if it exists.
    DATABASE_URL is required; its absence raises ConfigurationError.
    """
    load_dotenv(env_file)

    database_url = (os.getenv("DATABASE_URL") or "").strip()
    if not database_url:
        raise ConfigurationError(
            "DATABASE_URL must be set (environment variable or api.env)"
        )

    return Settings(
        database_url=database_url,
        seed_csv_path=os.getenv("SEED_CSV_PATH") or DEFAULT_SEED_CSV,
        log_level=(os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )
