# File: utils/helpers.py

from typing import List, Optional, Sequence

LEVELS = [1, 2, 3, 4]


def clean_string(text: Optional[str]) -> Optional[str]:
    """
    Trim surrounding whitespace and turn embedded newlines into spaces.
    Returns None when nothing is left, so blank CSV cells are stored as NULL.
    """
    if text is None:
        return None
    cleaned = str(text).strip().replace("\n", " ")
    return cleaned or None


def split_dosage_forms(raw: Optional[str]) -> List[str]:
    """
    Split a comma-separated dosage cell into its trimmed, non-empty pieces,
    keeping their original order.
    """
    if not raw:
        return []
    return [part.strip() for part in str(raw).split(",") if part.strip()]


def category_code(codes: Sequence[str], level: int) -> str:
    """
    Join the trimmed code fragments of levels 1..level with dots,
    e.g. (["1", " 2", "3", ""], 3) -> "1.2.3".
    """
    if level not in LEVELS:
        raise ValueError(f"Category level must be one of {LEVELS}, got {level}")
    return ".".join((c or "").strip() for c in codes[:level])
