"""General parsing utilities for OCR recipe extraction."""

import re
from typing import List, Optional, Tuple

from stook_recipes.app.services.ocr_parsing.constants import (
    CORE_TEMP_LABELS,
    HOUR_UNITS,
    MAX_TEMPERATURE_C,
    MIN_TEMPERATURE_C,
    MINUTE_UNITS,
    SERVINGS_UNITS,
    UNIT_ALIASES,
)

# At most four digits: longer runs are OCR debris, not times or servings
_NUM = r"(?<![\d.,])(\d{1,4}(?:[.,]\d{1,3})?)(?![\d.,])"
_INT = r"(?<![\d.,])(\d{1,4})(?![\d.,])"
_RANGE_SEP = r"\s*(?:-|–|à|tot|to)\s*"
_END = r"(?![a-zà-ÿ])"

# Ordered by priority when two patterns match at the same position
_DURATION_PATTERNS: List[Tuple[str, re.Pattern]] = [
    (
        "hours_minutes",
        re.compile(rf"{_INT}\s*{HOUR_UNITS}{_END}\s*(?:en\s+|and\s+)?(\d{{1,4}})\s*{MINUTE_UNITS}{_END}", re.I),
    ),
    ("minute_range", re.compile(rf"{_INT}{_RANGE_SEP}(\d{{1,4}})\s*{MINUTE_UNITS}{_END}", re.I)),
    ("hour_range", re.compile(rf"{_NUM}{_RANGE_SEP}(\d{{1,4}}(?:[.,]\d{{1,3}})?)\s*{HOUR_UNITS}{_END}", re.I)),
    ("minutes", re.compile(rf"{_INT}\s*{MINUTE_UNITS}{_END}", re.I)),
    ("hours", re.compile(rf"{_NUM}\s*{HOUR_UNITS}{_END}", re.I)),
]

_TEMPERATURE_PATTERNS = [
    re.compile(r"(?<![\d.,])(\d{2,3})\s*(?:°\s*C\b|°(?!\s*F)|graden|degrees\s*c(?:elsius)?\b)", re.I),
    re.compile(rf"{CORE_TEMP_LABELS}\s*(?:van|of)?\s*[:\-]?\s*(\d{{2,3}})", re.I),
]

_SERVINGS_PATTERNS = [
    re.compile(rf"{_INT}{_RANGE_SEP}(\d{{1,4}})\s*{SERVINGS_UNITS}", re.I),
    re.compile(rf"{_INT}\s*{SERVINGS_UNITS}{_END}", re.I),
    re.compile(r"\bserves?\s*:?\s*(\d{1,4})(?!\d)", re.I),
    re.compile(r"\b(?:aantal|personen|porties)\s*:\s*(\d{1,4})(?!\d)", re.I),
    re.compile(r"\brecept\s+voor\s+(\d{1,4})(?!\d)", re.I),
    re.compile(r"\b(?:maakt|makes|yields?)\s*:?\s*(\d{1,4})(?!\d)", re.I),
]


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def normalize_unit(unit: str) -> str:
    """Map a unit token to its canonical form; unknown units come back lowercased."""
    token = unit.lower().strip().rstrip(".")
    return UNIT_ALIASES.get(token, token)


def is_known_unit(unit: str) -> bool:
    """Check if a unit string is a recognized cooking unit."""
    return unit.lower().strip().rstrip(".") in UNIT_ALIASES


def to_number(value: str) -> float:
    """Parse "1,5" or "1.5" into a float."""
    return float(value.replace(",", "."))


def _duration_from_match(kind: str, m: re.Match) -> int:
    if kind == "hours_minutes":
        return int(m.group(1)) * 60 + int(m.group(2))
    if kind == "minute_range":
        return round((int(m.group(1)) + int(m.group(2))) / 2)
    if kind == "hour_range":
        return round((to_number(m.group(1)) + to_number(m.group(2))) / 2 * 60)
    if kind == "minutes":
        return int(m.group(1))
    return round(to_number(m.group(1)) * 60)


def find_duration(text: str) -> Optional[Tuple[int, int, int]]:
    """Return (minutes, start, end) of the first duration phrase in text."""
    best: Optional[Tuple[int, int, int]] = None
    for kind, pattern in _DURATION_PATTERNS:
        m = pattern.search(text or "")
        if not m:
            continue
        if best is None or m.start() < best[1]:
            best = (_duration_from_match(kind, m), m.start(), m.end())
    return best


def extract_timer_minutes(text: str) -> Optional[int]:
    """Extract the first duration in text as minutes ("2 uur" -> 120, "20-30 min" -> 25)."""
    found = find_duration(text)
    if found is None:
        return None
    minutes = found[0]
    return minutes if minutes > 0 else None


def extract_temperature(text: str) -> Optional[int]:
    """Extract the first plausible temperature in °C ("110°C", "180 graden", "kerntemperatuur: 75")."""
    if not text:
        return None
    candidates = []
    for pattern in _TEMPERATURE_PATTERNS:
        for m in pattern.finditer(text):
            candidates.append((m.start(), int(m.group(1))))
    for _, value in sorted(candidates):
        if MIN_TEMPERATURE_C <= value <= MAX_TEMPERATURE_C:
            return value
    return None


def parse_servings_from_text(text: str) -> Optional[int]:
    """Extract servings from text ("6 personen", "4-6 porties", "Serves 8")."""
    if not text:
        return None
    for pattern in _SERVINGS_PATTERNS:
        m = pattern.search(text)
        if not m:
            continue
        if m.lastindex and m.lastindex >= 2:
            return round((int(m.group(1)) + int(m.group(2))) / 2)
        value = int(m.group(1))
        if value > 0:
            return value
    return None
