# File: tests/conftest.py

import copy
import csv
from contextlib import contextmanager
from typing import Dict, List, Optional

import pytest

from domain.models import Drug, DrugCategory, NewDrug
from domain.repository import DrugRepository, FormularyWriter
from utils.csv_source import REQUIRED_COLUMNS


class FakeDrugRepository(DrugRepository):
    """In-memory DrugRepository that mimics ILIKE '%q%' on generic_name/syn_name."""

    def __init__(self, drugs: List[Drug]):
        self.drugs = drugs
        self.patterns: List[str] = []

    def search_by_name(self, pattern: str, limit: int) -> List[Drug]:
        self.patterns.append(pattern)
        needle = pattern.strip("%").lower()
        hits = [
            d for d in self.drugs
            if needle in d.generic_name.lower() or needle in (d.syn_name or "").lower()
        ]
        return sorted(hits, key=lambda d: d.generic_name)[:limit]

    def get_by_id(self, drug_id: int) -> Optional[Drug]:
        return next((d for d in self.drugs if d.id == drug_id), None)


class FakeFormularyWriter(FormularyWriter):
    """In-memory FormularyWriter with upsert-by-code semantics."""

    def __init__(self, fail_on_drug: Optional[str] = None):
        self.categories: Dict[str, dict] = {}
        self.drugs: List[dict] = []
        self.next_category_id = 1
        self.next_drug_id = 1
        self.fail_on_drug = fail_on_drug
        self.calls: List[str] = []

    def clear(self) -> None:
        self.calls.append("clear")
        self.drugs = []
        self.categories = {}

    def upsert_category(self, code: str, name: str, level: int, parent_id: Optional[int]) -> int:
        self.calls.append(f"upsert {code}")
        existing = self.categories.get(code)
        if existing is not None:
            existing["name"] = name
            return existing["id"]
        row = {"id": self.next_category_id, "code": code, "name": name,
               "level": level, "parent_id": parent_id}
        self.next_category_id += 1
        self.categories[code] = row
        return row["id"]

    def insert_drug(self, drug: NewDrug) -> int:
        if self.fail_on_drug and drug.generic_name == self.fail_on_drug:
            raise RuntimeError(f"insert failed for {drug.generic_name}")
        self.calls.append(f"drug {drug.generic_name}")
        row = {"id": self.next_drug_id, **drug.model_dump()}
        self.next_drug_id += 1
        self.drugs.append(row)
        return row["id"]

    def category_by_id(self, category_id: int) -> Optional[dict]:
        return next((c for c in self.categories.values() if c["id"] == category_id), None)

    def category_models(self) -> List[DrugCategory]:
        return [DrugCategory(**row) for row in self.categories.values()]


class FakeTransactionPool:
    """
    Stands in for Database.transaction(): the block works on a copy of
    the committed writer, which replaces it only if the block exits cleanly.
    """

    def __init__(self, committed: FakeFormularyWriter):
        self.committed = committed
        self.commits = 0
        self.rollbacks = 0

    @contextmanager
    def transaction(self):
        working = copy.deepcopy(self.committed)
        try:
            yield working
        except Exception:
            self.rollbacks += 1
            raise
        self.committed = working
        self.commits += 1


def make_record(**overrides) -> Dict[str, str]:
    """A raw CSV record with every column blank except the given ones."""
    record = {c: "" for c in REQUIRED_COLUMNS}
    aliases = {
        "generic_name": "generic name",
        "syn_name": "syn name",
        "detail": "detail of generic name",
        "drug_type": "ประเภทยา",
        "ed_level": "ED",
        "recommendations": "คำแนะนำ",
        "conditions": "เงื่อนไข",
        "warnings": "คำเตือนและข้อควรระวัง",
        "notes": "หมายเหตุ",
        "footnote": "Footnote",
        "source_code": "Code ฉ.67",
    }
    for key, value in overrides.items():
        record[aliases.get(key, key)] = value
    return record


NLEM_ROWS = [
    make_record(grcode1="1", name1="Gastro-intestinal system"),
    make_record(grcode1="1", grcode2="1", name2="Antacids"),
    make_record(grcode1="1", grcode2="1", grcode3="1", name3="Aluminium compounds",
                generic_name="Aluminium hydroxide", dosage="tablet, oral suspension"),
    make_record(generic_name="Magnesium hydroxide", dosage="oral suspension"),
    make_record(grcode1="1", grcode2="2", name2="Antispasmodics",
                generic_name="Hyoscine butylbromide", dosage="tablet,, injection ,"),
    make_record(grcode1="2", name1="Cardiovascular system"),
    make_record(grcode1="2", grcode2="1", name2="Antihypertensives"),
    make_record(grcode1="2", grcode2="1", grcode3="1", name3="Adrenergic blockers"),
    make_record(grcode1="2", grcode2="1", grcode3="1", grcode4="3",
                name4="Beta blockers", generic_name="Atenolol", ed_level="ก"),
]


def write_csv(path, records: List[Dict[str, str]]) -> str:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=REQUIRED_COLUMNS)
        writer.writeheader()
        writer.writerows(records)
    return str(path)


@pytest.fixture
def sample_drugs() -> List[Drug]:
    return [
        Drug(id=1, category_id=1, generic_name="Paracetamol", syn_name="Acetaminophen",
             dosage_forms=["tablet", "syrup"]),
        Drug(id=2, category_id=1, generic_name="Ibuprofen", dosage_forms=["tablet"]),
        Drug(id=3, category_id=2, generic_name="Amoxicillin", syn_name="Amoxycillin",
             dosage_forms=["capsule"], ed_level="ก"),
        Drug(id=4, category_id=None, generic_name="Aspirin", warnings="Bleeding risk"),
    ]


@pytest.fixture
def writer() -> FakeFormularyWriter:
    return FakeFormularyWriter()
