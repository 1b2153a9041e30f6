# File: infrastructure/seeder.py

import logging
from typing import Callable

from domain.models import SeedSummary
from domain.repository import FormularyWriter
from domain.services.seed_service import seed_rows
from infrastructure.db import Database
from infrastructure.postgres_repository import PostgresFormularyWriter
from utils.csv_source import read_nlem_csv

logger = logging.getLogger(__name__)


def seed_data(
    db: Database,
    csv_path: str,
    writer_factory: Callable[..., FormularyWriter] = PostgresFormularyWriter,
) -> SeedSummary:
    """
    Load csv_path into drug_categories and drugs inside a single transaction.
    Nothing is committed unless every row is processed.
    """
    logger.info(f"Starting database seeding process from {csv_path}...")
    with db.transaction() as conn:
        summary = seed_rows(writer_factory(conn), read_nlem_csv(csv_path))

    logger.info(
        f"Database seeding completed: {summary.rows_read} rows, "
        f"{summary.categories_upserted} category upserts, "
        f"{summary.drugs_inserted} drugs"
    )
    return summary
