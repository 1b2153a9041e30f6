# File: domain/services/seed_service.py

"""
Seeder for the NLEM formulary export.

Each CSV row may open a new category at any of four levels and/or describe
one drug. Rows are folded in order through a CategorySlots value that holds
the most recently seen category id per level; a drug is filed under the
deepest slot that is set.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from domain.errors import SeedError
from domain.models import NewDrug, SeedSummary
from domain.repository import FormularyWriter
from utils.helpers import LEVELS, category_code, clean_string, split_dosage_forms
from utils import csv_source as cols

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategorySlots:
    """Current category id at each hierarchy level."""
    level1: Optional[int] = None
    level2: Optional[int] = None
    level3: Optional[int] = None
    level4: Optional[int] = None

    def get(self, level: int) -> Optional[int]:
        return getattr(self, f"level{level}")

    def with_level(self, level: int, category_id: int) -> "CategorySlots":
        # Deeper slots are left untouched when an ancestor changes.
        return replace(self, **{f"level{level}": category_id})

    def parent_of(self, level: int) -> Optional[int]:
        return None if level == 1 else self.get(level - 1)

    def deepest(self) -> Optional[int]:
        for level in reversed(LEVELS):
            category_id = self.get(level)
            if category_id is not None:
                return category_id
        return None


@dataclass(frozen=True)
class NlemRow:
    codes:  Tuple[str, str, str, str]
    names:  Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]
    fields: Dict[str, Optional[str]]
    dosage: str

    @property
    def generic_name(self) -> Optional[str]:
        return self.fields["generic_name"]


# CSV column -> drugs table column
_DRUG_FIELDS = {
    cols.GENERIC_NAME:    "generic_name",
    cols.SYN_NAME:        "syn_name",
    cols.DETAIL:          "detail",
    cols.DRUG_TYPE:       "drug_type",
    cols.ED_LEVEL:        "ed_level",
    cols.RECOMMENDATIONS: "recommendations",
    cols.CONDITIONS:      "conditions",
    cols.WARNINGS:        "warnings",
    cols.NOTES:           "notes",
    cols.FOOTNOTE:        "footnote",
    cols.SOURCE_CODE:     "source_code",
}


def parse_row(record: Dict[str, str]) -> NlemRow:
    """Pick the used columns out of a raw CSV record and clean them."""
    try:
        codes = tuple(str(record[c]) for c in cols.CODE_COLUMNS)
        names = tuple(clean_string(record[c]) for c in cols.NAME_COLUMNS)
        fields = {dst: clean_string(record[src]) for src, dst in _DRUG_FIELDS.items()}
        dosage = str(record[cols.DOSAGE])
    except KeyError as e:
        raise SeedError(f"CSV row is missing column {e}", e) from e
    return NlemRow(codes=codes, names=names, fields=fields, dosage=dosage)


def fold_row(
    writer: FormularyWriter,
    slots: CategorySlots,
    row: NlemRow,
) -> Tuple[CategorySlots, int, bool]:
    """
    Apply one row: upsert the categories it names, then insert its drug if
    it has a generic name. Returns (new slots, categories upserted, drug inserted).
    """
    upserts = 0
    for level in LEVELS:
        name = row.names[level - 1]
        if name is None:
            continue
        category_id = writer.upsert_category(
            code=category_code(row.codes, level),
            name=name,
            level=level,
            parent_id=slots.parent_of(level),
        )
        slots = slots.with_level(level, category_id)
        upserts += 1

    if row.generic_name is None:
        return slots, upserts, False

    writer.insert_drug(
        NewDrug(
            category_id=slots.deepest(),
            dosage_forms=split_dosage_forms(row.dosage),
            **row.fields,
        )
    )
    return slots, upserts, True


def seed_rows(writer: FormularyWriter, records: Iterable[Dict[str, str]]) -> SeedSummary:
    """Clear both tables, then fold every record into categories and drugs."""
    logger.info("Clearing existing data to prevent duplicates...")
    writer.clear()

    summary = SeedSummary()
    slots = CategorySlots()

    logger.info("Reading CSV and inserting data...")
    for record in records:
        slots, upserts, inserted = fold_row(writer, slots, parse_row(record))
        summary.rows_read += 1
        summary.categories_upserted += upserts
        summary.drugs_inserted += int(inserted)

    return summary

