"""Ingredient line parsing: quantity, unit and name."""

import logging
import re
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from stook_recipes.app.services.ocr_parsing.constants import (
    BULLET_RE,
    FRACTION_CHARS,
    UNIT_PATTERN,
    WORD_AMOUNTS,
)
from stook_recipes.app.services.ocr_parsing.models import ClassifiedLine, LineKind, ParsedIngredient
from stook_recipes.app.services.ocr_parsing.parsing_utils import clean_text, normalize_unit
from stook_recipes.app.services.ocr_parsing.quantity_parser import parse_quantity_display

logger = logging.getLogger(__name__)

_NUMBER = (
    rf"(?:\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d*\s?[{FRACTION_CHARS}]"
    rf"|\d{{1,3}}(?:\.\d{{3}})+(?![\d,])|\d+(?:[.,]\d+)?)"
)
_QUANTITY = rf"{_NUMBER}(?:(?:\s*-\s*|\s+(?:à|a|tot)\s+){_NUMBER})?"
_ARTICLES = ("een", "één")
_WORD_AMOUNT_PATTERN = "|".join(sorted(WORD_AMOUNTS, key=len, reverse=True))

_LEADING_QUANTITY_RE = re.compile(rf"^(?P<qty>{_QUANTITY})\s*(?P<rest>.*)$")
_LEADING_WORD_RE = re.compile(rf"^(?P<qty>{_WORD_AMOUNT_PATTERN})\s+(?P<rest>.*)$", re.I)
_LEADING_UNIT_RE = re.compile(rf"^(?P<unit>{UNIT_PATTERN})\.?(?=\s|$|[,;:)])\s*(?P<rest>.*)$", re.I)
# "I kg", "l el", "1O0 g": letters OCR confuses with digits, only repaired before a unit
_OCR_DIGITS_RE = re.compile(
    rf"^(?P<token>[0-9IlO|]*[IlO|][0-9IlO|]*)(?=\s*(?i:{UNIT_PATTERN})\.?(?:\s|$))"
)
_OCR_DIGIT_MAP = str.maketrans({"I": "1", "l": "1", "|": "1", "O": "0"})
_LEADING_DOTS_RE = re.compile(r"^[.·]+\s*")
# Larger amounts are OCR digit runs, not quantities
_MAX_AMOUNT = Decimal(100_000)


def _repair_ocr_digits(line: str) -> str:
    m = _OCR_DIGITS_RE.match(line)
    if not m or m.group("token") == "O":
        return line
    token = m.group("token")
    return token.translate(_OCR_DIGIT_MAP) + line[m.end():]


def _clean_name(text: str) -> str:
    return clean_text(text).strip(" ,.;:-")


def _has_letters(text: str) -> bool:
    return any(ch.isalpha() for ch in text)


def _split_unit(rest: str) -> Tuple[Optional[str], str]:
    m = _LEADING_UNIT_RE.match(rest)
    if not m:
        return None, rest
    return normalize_unit(m.group("unit")), m.group("rest")


def parse_ingredient_line(line: str) -> Optional[ParsedIngredient]:
    """Split one ingredient line into amount, unit and name.

    Lines without letters yield nothing. A line whose quantity cannot be
    recognized is kept whole as the name.
    """
    raw = clean_text(line)
    raw = BULLET_RE.sub("", raw, count=1)
    raw = _LEADING_DOTS_RE.sub("", raw)
    if not _has_letters(raw):
        return None

    raw = _repair_ocr_digits(raw)
    fallback = ParsedIngredient(name=_clean_name(raw) or raw)

    amount = None
    rest = None
    m = _LEADING_QUANTITY_RE.match(raw)
    if m:
        amount = parse_quantity_display(m.group("qty"))
        rest = m.group("rest")
    else:
        m = _LEADING_WORD_RE.match(raw)
        if m:
            amount = parse_quantity_display(m.group("qty"))
            rest = m.group("rest")

    if amount is None or rest is None or amount > _MAX_AMOUNT:
        return fallback

    unit, rest = _split_unit(rest)
    word_amount = not raw[0].isdigit() and raw[0] not in FRACTION_CHARS
    if word_amount and unit is None and m.group("qty").lower() in _ARTICLES:
        return fallback

    name = _clean_name(rest)
    if not name or not _has_letters(name):
        return fallback

    return ParsedIngredient(name=name, amount=round(float(amount), 3), unit=unit)


def ingredient_confidence(ingredient: ParsedIngredient) -> float:
    if ingredient.amount is not None and ingredient.unit is not None:
        return 1.0
    if ingredient.amount is not None:
        return 0.8
    return 0.5


def parse_ingredients(lines: Sequence[ClassifiedLine]) -> List[Tuple[ParsedIngredient, float]]:
    """Parse every ingredient line; returns (ingredient, confidence) pairs in input order."""
    parsed: List[Tuple[ParsedIngredient, float]] = []
    for line in lines:
        if line.kind != LineKind.INGREDIENT:
            continue
        ingredient = parse_ingredient_line(line.text)
        if ingredient is None:
            logger.debug("Ingredient line %d had no letters: %s", line.index, line.text[:50])
            continue
        confidence = min(ingredient_confidence(ingredient), line.strength)
        parsed.append((ingredient, confidence))
        logger.debug(
            "Ingredient %d: '%s' -> name='%s', amount=%s, unit=%s",
            line.index,
            line.text[:50],
            ingredient.name[:30],
            ingredient.amount,
            ingredient.unit,
        )
    return parsed
