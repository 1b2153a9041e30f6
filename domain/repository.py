# File: domain/repository.py

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.models import Drug, NewDrug

class DrugRepository(ABC):
    """Port interface for read-only drug queries."""

    @abstractmethod
    def search_by_name(self, pattern: str, limit: int) -> List[Drug]:
        """Case-insensitive LIKE match of pattern on generic_name or syn_name, ordered by generic_name."""
        ...

    @abstractmethod
    def get_by_id(self, drug_id: int) -> Optional[Drug]:
        """Fetch one drug by id, or None when no row has that id."""
        ...

class FormularyWriter(ABC):
    """Port interface for the seeder's writes. All calls share one transaction."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every drug, then every category."""
        ...

    @abstractmethod
    def upsert_category(self, code: str, name: str, level: int, parent_id: Optional[int]) -> int:
        """Insert a category keyed on code; on conflict update only its name. Returns the row id."""
        ...

    @abstractmethod
    def insert_drug(self, drug: NewDrug) -> int:
        """Insert one drug row and return its id."""
        ...
