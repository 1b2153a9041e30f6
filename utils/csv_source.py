# File: utils/csv_source.py

import logging
from typing import Dict, Iterator, List

import pandas as pd

from domain.errors import SeedError

logger = logging.getLogger(__name__)

# Header names of the NLEM export
CODE_COLUMNS = ["grcode1", "grcode2", "grcode3", "grcode4"]
NAME_COLUMNS = ["name1", "name2", "name3", "name4"]

GENERIC_NAME    = "generic name"
SYN_NAME        = "syn name"
DETAIL          = "detail of generic name"
DRUG_TYPE       = "ประเภทยา"
DOSAGE          = "dosage"
ED_LEVEL        = "ED"
RECOMMENDATIONS = "คำแนะนำ"
CONDITIONS      = "เงื่อนไข"
WARNINGS        = "คำเตือนและข้อควรระวัง"
NOTES           = "หมายเหตุ"
FOOTNOTE        = "Footnote"
SOURCE_CODE     = "Code ฉ.67"

REQUIRED_COLUMNS: List[str] = CODE_COLUMNS + NAME_COLUMNS + [
    GENERIC_NAME, SYN_NAME, DETAIL, DRUG_TYPE, DOSAGE, ED_LEVEL,
    RECOMMENDATIONS, CONDITIONS, WARNINGS, NOTES, FOOTNOTE, SOURCE_CODE,
]

# utf-8-sig drops the BOM that spreadsheet exports put before "grcode1"
_READ_OPTIONS = dict(dtype=str, keep_default_na=False, encoding="utf-8-sig")


def _check_header(csv_path: str) -> None:
    header = pd.read_csv(csv_path, nrows=0, **_READ_OPTIONS)
    columns = {c.strip() for c in header.columns}
    missing = [c for c in REQUIRED_COLUMNS if c not in columns]
    if missing:
        raise SeedError(f"Missing required columns in {csv_path}: {missing}")


def _reject_short_rows(chunk: pd.DataFrame, csv_path: str) -> None:
    # Blank cells read as "" (keep_default_na=False); NaN only appears where
    # pandas padded a row that had fewer fields than the header.
    short = chunk.index[chunk.isna().any(axis=1)]
    if len(short):
        row_number = int(short[0]) + 1
        raise SeedError(
            f"Malformed seed CSV {csv_path}: data row {row_number} has fewer than "
            f"{len(chunk.columns)} fields"
        )


def read_nlem_csv(csv_path: str, chunksize: int = 500) -> Iterator[Dict[str, str]]:
    """
    Stream the rows of an NLEM CSV export as dicts of column -> raw string.

    Blank cells come back as "". Rows are read chunksize at a time so the
    whole file is never held in memory. A missing file, an unreadable file or
    a malformed row raises SeedError.
    """
    try:
        _check_header(csv_path)
        with pd.read_csv(csv_path, chunksize=chunksize, **_READ_OPTIONS) as reader:
            for chunk in reader:
                chunk.columns = [c.strip() for c in chunk.columns]
                _reject_short_rows(chunk, csv_path)
                for record in chunk.to_dict("records"):
                    yield record
    except FileNotFoundError as e:
        raise SeedError(f"Seed CSV not found: {csv_path}", e) from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise SeedError(f"Malformed seed CSV {csv_path}: {e}", e) from e
