# File: infrastructure/postgres_repository.py

from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from domain.errors import DataAccessError
from domain.models import Drug, NewDrug
from domain.repository import DrugRepository, FormularyWriter
from infrastructure.db import Database
from utils.sql import (
    SEARCH_DRUGS_SQL,
    GET_DRUG_BY_ID_SQL,
    CLEAR_DRUGS_SQL,
    CLEAR_CATEGORIES_SQL,
    UPSERT_CATEGORY_SQL,
    INSERT_DRUG_SQL,
)


def _row_to_drug(row) -> Drug:
    data = dict(row)
    data["dosage_forms"] = list(data.get("dosage_forms") or [])
    return Drug(**data)


class PostgresDrugRepository(DrugRepository):
    """SQLAlchemy adapter implementing the DrugRepository interface."""

    def __init__(self, db: Database):
        self.db = db

    def search_by_name(self, pattern: str, limit: int) -> List[Drug]:
        with self.db.connection() as conn:
            try:
                rows = conn.execute(
                    text(SEARCH_DRUGS_SQL), {"pattern": pattern, "limit": limit}
                ).mappings().all()
            except SQLAlchemyError as e:
                raise DataAccessError("Drug search query failed", e) from e
        return [_row_to_drug(r) for r in rows]

    def get_by_id(self, drug_id: int) -> Optional[Drug]:
        with self.db.connection() as conn:
            try:
                row = conn.execute(text(GET_DRUG_BY_ID_SQL), {"id": drug_id}).mappings().first()
            except SQLAlchemyError as e:
                raise DataAccessError("Drug lookup query failed", e) from e
        return _row_to_drug(row) if row else None


class PostgresFormularyWriter(FormularyWriter):
    """
    SQLAlchemy adapter for the seeder's writes.

    Works on a connection the caller already holds inside a transaction;
    it never commits or rolls back itself.
    """

    def __init__(self, conn):
        self.conn = conn

    def _execute(self, query: str, params: dict = None):
        try:
            return self.conn.execute(text(query), params or {})
        except SQLAlchemyError as e:
            raise DataAccessError("Seeder write failed", e) from e

    def clear(self) -> None:
        # drugs reference categories, so they go first
        self._execute(CLEAR_DRUGS_SQL)
        self._execute(CLEAR_CATEGORIES_SQL)

    def upsert_category(self, code: str, name: str, level: int, parent_id: Optional[int]) -> int:
        result = self._execute(
            UPSERT_CATEGORY_SQL,
            {"code": code, "name": name, "level": level, "parent_id": parent_id},
        )
        return result.scalar_one()

    def insert_drug(self, drug: NewDrug) -> int:
        return self._execute(INSERT_DRUG_SQL, drug.model_dump()).scalar_one()
