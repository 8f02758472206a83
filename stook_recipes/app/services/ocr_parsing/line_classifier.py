"""
Line tokenizer and classifier for OCR recipe text.

Every line is tagged independently by ``classify_line`` using:
1. Noise filters (page numbers, credits, nutrition tables, OCR debris)
2. Section headings (Ingrediënten, Bereiding, Tips, ...)
3. Lexical cues (step ordinals, bullets, quantities, imperative verbs,
   metadata units such as °C, min, uur, personen)
4. Position (the first content line is the strongest title candidate)

The only state carried between lines is a small immutable ``LineContext``
(current section, what was seen so far), so the classifier can be tested
line by line. When cues conflict or are absent the line is tagged as noise:
downstream fields stay empty rather than being filled with garbage.
"""

import logging
import re
from dataclasses import dataclass, replace
from typing import List, Optional

from stook_recipes.app.services.ocr_parsing.constants import (
    BULLET_RE,
    FRACTION_CHARS,
    IMPERATIVE_VERBS,
    LABELLED_METADATA_RE,
    LEADING_METADATA_RE,
    MAX_HEADING_CHARS,
    METADATA_CUE_RE,
    NOISE_PATTERNS,
    SECTION_HEADINGS,
    STEP_MARKER_RE,
    UNIT_PATTERN,
    WORD_AMOUNTS,
)
from stook_recipes.app.services.ocr_parsing.models import ClassifiedLine, LineKind
from stook_recipes.app.services.ocr_parsing.text_normalizer import preprocess_ocr_text

logger = logging.getLogger(__name__)

_WORD_AMOUNT_PATTERN = "|".join(sorted(WORD_AMOUNTS, key=len, reverse=True))
_QUANTITY_START_RE = re.compile(
    rf"^(?:"
    rf"\d+\s+\d+\s*/\s*\d+\s*[a-zA-ZÀ-ÿ]"
    rf"|(?:\d+(?:[.,]\d+)?(?:\s*/\s*\d+)?|[{FRACTION_CHARS}])\s*(?:{UNIT_PATTERN})\.?(?:\s|$)"
    rf"|(?:\d+(?:[.,]\d+)?|\d+/\d+)(?:\s*(?:-|à|tot)\s*\d+)?\s+[a-zA-ZÀ-ÿ]"
    rf"|\d*\s?[{FRACTION_CHARS}]\s*[a-zA-ZÀ-ÿ]"
    rf"|(?:{_WORD_AMOUNT_PATTERN})\s+(?:{UNIT_PATTERN})\.?(?:\s|$)"
    rf"|(?-i:[IlO|])\s*(?:kg|g|gr|gram|ml|l|el|tl|eetl|theel)\.?\s"
    rf")",
    re.I,
)
_SENTENCE_END_RE = re.compile(r"[.!?]$")
# "3 Rook het vlees": a step number whose period OCR dropped
_BARE_STEP_NUMBER_RE = re.compile(r"^(\d{1,2})\s+(?=\S)")
_LEADING_UNIT_RE = re.compile(rf"^(?:{UNIT_PATTERN})\.?(?:\s|$|[,;:)])", re.I)
_MARKER_NUMBER_RE = re.compile(r"\d+")
_MAX_INGREDIENT_CHARS = 80
_LONG_BULLET_CHARS = 60


@dataclass(frozen=True)
class LineContext:
    """What the tokenizer has seen before the current line."""

    section: Optional[str] = None
    content_seen: bool = False
    body_seen: bool = False
    previous: Optional[ClassifiedLine] = None
    last_step_no: int = 0


def _alnum_count(text: str) -> int:
    return sum(1 for ch in text if ch.isalnum())


def is_noise_line(line: str) -> bool:
    """Page numbers, credits, nutrition rows, stray punctuation and OCR debris."""
    alnum = _alnum_count(line)
    if alnum < 2:
        return True
    if len(line) >= 4 and alnum / len(line) < 0.5:
        return True
    return any(pattern.match(line) for pattern in NOISE_PATTERNS)


def heading_section(line: str) -> Optional[str]:
    """Return the section a heading line opens ("ingredients", "steps", "info", "tips")."""
    if len(line) > MAX_HEADING_CHARS:
        return None
    for section, pattern in SECTION_HEADINGS.items():
        if pattern.match(line):
            return section
    return None


def step_marker(line: str) -> Optional[str]:
    m = STEP_MARKER_RE.match(line)
    if not m:
        return None
    return m.group(0).strip()


def bare_step_number(line: str, context: "LineContext") -> Optional[str]:
    """Step number without punctuation ("2 Roken op 110 graden").

    Only taken when no unit follows the number and the rest reads like a
    step: an imperative, or a capitalized phrase that continues the
    numbering after the title.
    """
    m = _BARE_STEP_NUMBER_RE.match(line)
    if not m:
        return None
    rest = line[m.end():]
    if _LEADING_UNIT_RE.match(rest) or LEADING_METADATA_RE.match(line):
        return None
    if starts_with_imperative(rest):
        return m.group(1)
    if (
        context.content_seen
        and rest[0].isupper()
        and len(rest.split()) >= 2
        and int(m.group(1)) == context.last_step_no + 1
    ):
        return m.group(1)
    return None


def starts_with_imperative(line: str) -> bool:
    words = line.split(maxsplit=1)
    if not words:
        return False
    first = words[0].lower().strip(".,:;!")
    return first in IMPERATIVE_VERBS


def starts_with_quantity(line: str) -> bool:
    return bool(_QUANTITY_START_RE.match(line))


def looks_like_title(line: str) -> bool:
    """Short, capitalized, unpunctuated line."""
    if not line or not (line[0].isupper() or line[0].isdigit()):
        return False
    if len(line) > 80 or len(line.split()) > 8:
        return False
    if re.search(r"[.,;:!?]$", line):
        return False
    return sum(1 for ch in line if ch.isalpha()) >= 2


def looks_like_prose(line: str) -> bool:
    if sum(1 for ch in line if ch.isalpha()) < 3:
        return False
    return (
        len(line.split()) >= 3
        or bool(_SENTENCE_END_RE.search(line))
        or line[0].islower()
    )


def _continues_step(line: str, previous: Optional[ClassifiedLine]) -> bool:
    if previous is None or previous.kind != LineKind.STEP:
        return False
    if _SENTENCE_END_RE.search(previous.text):
        return False
    if line[0].islower():
        return True
    return previous.marker is not None and not starts_with_imperative(line)


def classify_line(text: str, index: int, context: LineContext = LineContext()) -> ClassifiedLine:
    """Tag a single line given what came before it."""
    line = text.strip()
    section = context.section

    def tag(kind: LineKind, strength: float = 1.0, **extra) -> ClassifiedLine:
        extra.setdefault("section", section)
        return ClassifiedLine(index=index, text=line, kind=kind, strength=strength, **extra)

    if not line or is_noise_line(line):
        return tag(LineKind.NOISE)

    if LABELLED_METADATA_RE.match(line):
        return tag(LineKind.METADATA)

    opened = heading_section(line)
    if opened:
        kind = LineKind.METADATA if METADATA_CUE_RE.search(line) else LineKind.NOISE
        return tag(kind, 0.8 if kind == LineKind.METADATA else 1.0, section=opened)

    marker = step_marker(line)
    if marker:
        return tag(LineKind.STEP, marker=marker)

    if section not in ("ingredients", "tips"):
        marker = bare_step_number(line, context)
        if marker:
            return tag(LineKind.STEP, 0.9, marker=marker)

    if section == "tips":
        return tag(LineKind.NOISE)

    if section != "ingredients" and line[0].islower() and _continues_step(line, context.previous):
        return tag(LineKind.STEP, 0.8, continues=True)

    if section == "steps":
        return tag(LineKind.STEP, 0.8, continues=_continues_step(line, context.previous))

    bullet = BULLET_RE.match(line)
    if bullet:
        rest = line[bullet.end():]
        symbol = bullet.group(0).strip()
        if section == "ingredients":
            return tag(LineKind.INGREDIENT, 0.9, marker=symbol)
        if len(rest) > _LONG_BULLET_CHARS or starts_with_imperative(rest):
            return tag(LineKind.STEP, 0.9, marker=symbol)
        return tag(LineKind.INGREDIENT, 0.9, marker=symbol)

    if section != "ingredients" and starts_with_imperative(line):
        return tag(LineKind.STEP, 0.7)

    if section == "ingredients" and starts_with_quantity(line) and not LEADING_METADATA_RE.match(line):
        return tag(LineKind.INGREDIENT)

    if METADATA_CUE_RE.search(line):
        return tag(LineKind.METADATA, 0.8)

    if starts_with_quantity(line):
        return tag(LineKind.INGREDIENT)

    if section == "ingredients":
        if len(line) <= _MAX_INGREDIENT_CHARS:
            return tag(LineKind.INGREDIENT, 0.8)
        return tag(LineKind.NOISE, is_prose=True)

    if section is None and not context.body_seen:
        if not context.content_seen and 3 <= len(line) <= 100:
            return tag(LineKind.TITLE, 1.0 if looks_like_title(line) else 0.5)
        if looks_like_title(line):
            return tag(LineKind.TITLE, 0.5)

    return tag(LineKind.NOISE, is_prose=looks_like_prose(line))


def _advance(context: LineContext, line: ClassifiedLine) -> LineContext:
    body = line.kind in (LineKind.INGREDIENT, LineKind.STEP) or line.section in ("ingredients", "steps")
    content = line.kind != LineKind.NOISE or line.is_prose
    last_step_no = context.last_step_no
    if line.kind == LineKind.STEP and line.marker:
        number = _MARKER_NUMBER_RE.search(line.marker)
        if number:
            last_step_no = int(number.group())
    return replace(
        context,
        section=line.section,
        content_seen=context.content_seen or content,
        body_seen=context.body_seen or body,
        previous=line,
        last_step_no=last_step_no,
    )


def tokenize(raw_text: str) -> List[ClassifiedLine]:
    """Split OCR text into classified lines; never raises."""
    text = preprocess_ocr_text(raw_text or "")
    if not text:
        return []

    lines = [ln.strip() for ln in text.split("\n") if ln.strip()]
    context = LineContext()
    classified: List[ClassifiedLine] = []
    for index, line in enumerate(lines):
        result = classify_line(line, index, context)
        classified.append(result)
        context = _advance(context, result)
        logger.debug("Line %d [%s %.1f]: %s", index, result.kind.value, result.strength, line[:60])
    return classified
