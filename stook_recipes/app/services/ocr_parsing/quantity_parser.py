import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from stook_recipes.app.services.ocr_parsing.constants import FRACTION_MAP, WORD_AMOUNTS

_NUMBER_RE = re.compile(r"^\d+(?:[.,]\d+)?$")
# Dutch thousands grouping: "1.000", "12.500"
_THOUSANDS_RE = re.compile(r"^\d{1,3}(?:\.\d{3})+$")
_RANGE_RE = re.compile(r"^(.+?)\s*(?:-|\s(?:à|a|tot|to)\s)\s*(.+)$", re.I)


def _to_decimal(value: str) -> Optional[Decimal]:
    if _THOUSANDS_RE.match(value):
        value = value.replace(".", "")
    if not _NUMBER_RE.match(value):
        return None
    try:
        return Decimal(value.replace(",", "."))
    except InvalidOperation:
        return None


def _expand_fraction_chars(value: str) -> str:
    fraction_chars = "".join(FRACTION_MAP.keys())
    # "1½" -> "1 ½"
    value = re.sub(rf"(\d)([{fraction_chars}])", r"\1 \2", value)
    for char, plain in FRACTION_MAP.items():
        value = value.replace(char, plain)
    return value


def _parse_single(value: str) -> Optional[Decimal]:
    if value in WORD_AMOUNTS:
        return Decimal(str(WORD_AMOUNTS[value]))

    # Whole or decimal numbers
    if "/" not in value and " " not in value:
        return _to_decimal(value)

    # Fractions like "1/2" or "1 1/2"
    try:
        if " " in value:
            whole_part, frac_part = value.split(" ", 1)
            whole = _to_decimal(whole_part)
            if whole is None or "/" not in frac_part:
                return None
            num_str, denom_str = frac_part.split("/", 1)
            num = Decimal(num_str)
            denom = Decimal(denom_str)
            if denom == 0:
                return None
            return whole + (num / denom)
        num_str, denom_str = value.split("/", 1)
        num = Decimal(num_str)
        denom = Decimal(denom_str)
        if denom == 0:
            return None
        return num / denom
    except (InvalidOperation, ValueError):
        return None


def parse_quantity_display(raw: Optional[str]) -> Optional[Decimal]:
    """Parse a quantity token such as "2", "1,5", "1 1/2", "½" or "2-3".

    Ranges resolve to their lower bound.
    """
    if raw is None:
        return None
    value = re.sub(r"\s+", " ", raw).strip().lower()
    if not value:
        return None

    value = _expand_fraction_chars(value)

    m = _RANGE_RE.match(value)
    if m and _parse_single(m.group(2).strip()) is not None:
        return _parse_single(m.group(1).strip())

    return _parse_single(value)
