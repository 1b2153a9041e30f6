# File: domain/services/drug_service.py

import logging
from typing import List

from domain.errors import DataAccessError, DrugNotFoundError
from domain.models import Drug, HealthResponse
from domain.repository import DrugRepository

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 100


def build_search_pattern(q: str) -> str:
    """Wrap q in LIKE wildcards; an empty q matches every row."""
    return f"%{q or ''}%"


class DrugService:
    """Read-only queries over the formulary."""

    def __init__(self, repo: DrugRepository):
        self.repo = repo

    @staticmethod
    def health() -> HealthResponse:
        # Never touches the database.
        return HealthResponse(status="OK")

    def search(self, q: str) -> List[Drug]:
        try:
            return self.repo.search_by_name(build_search_pattern(q), SEARCH_LIMIT)
        except DataAccessError as e:
            logger.error(f"Failed to query drugs: {e.cause or e}")
            raise

    def get(self, drug_id: int) -> Drug:
        try:
            drug = self.repo.get_by_id(drug_id)
        except DataAccessError as e:
            logger.error(f"Failed to fetch drug by id: {e.cause or e}")
            raise
        if drug is None:
            raise DrugNotFoundError(drug_id)
        return drug
