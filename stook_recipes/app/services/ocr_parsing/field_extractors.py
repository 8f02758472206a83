"""
Field extractors for title, description and numeric metadata.

Each extractor returns a ``FieldValue`` so the confidence scorer can see how
sure the extraction was:
- explicit label and unit ("Kooktijd: 3 uur"): 1.0
- unit only ("480 min", "6 personen"): 0.8
- label with a bare number ("Kooktijd: 180"): 0.6
A field that nothing matches stays ``None`` rather than being guessed.
"""

import logging
import re
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from stook_recipes.app.services.ocr_parsing.constants import (
    COOK_LABELS,
    CORE_TEMP_LABELS,
    FALLBACK_TITLE,
    MAX_DESCRIPTION_CHARS,
    MAX_TEMPERATURE_C,
    MAX_TITLE_CHARS,
    MIN_TEMPERATURE_C,
    PREP_LABELS,
    SERVINGS_UNITS,
    TEMPERATURE_UNITS,
)
from stook_recipes.app.services.ocr_parsing.models import ClassifiedLine, FieldValue, LineKind
from stook_recipes.app.services.ocr_parsing.parsing_utils import (
    clean_text,
    extract_temperature,
    find_duration,
    parse_servings_from_text,
)

logger = logging.getLogger(__name__)

FALLBACK_TITLE_CONFIDENCE = 0.1
TIED_TITLE_CONFIDENCE = 0.5

LABELLED_CONFIDENCE = 1.0
UNIT_ONLY_CONFIDENCE = 0.8
BARE_NUMBER_CONFIDENCE = 0.6

METADATA_FIELDS = ("serves", "prep_minutes", "cook_minutes", "target_internal_temp")

# Commas between digits are decimal separators ("1,5 uur")
_FRAGMENT_SPLIT_RE = re.compile(r"(?<!\d),|,(?!\d)|[;|•]")
_PREP_RE = re.compile(rf"\b{PREP_LABELS}", re.I)
_COOK_RE = re.compile(rf"\b{COOK_LABELS}", re.I)
_CORE_TEMP_RE = re.compile(rf"\b{CORE_TEMP_LABELS}", re.I)
_SERVINGS_LABEL_RE = re.compile(
    r"\b(?:aantal|serves|yields?|maakt|makes|recept\s+voor)\b|\b(?:personen|porties)\s*:", re.I
)
_SERVINGS_UNIT_RE = re.compile(rf"\d\s*{SERVINGS_UNITS}", re.I)
_TEMPERATURE_UNIT_RE = re.compile(rf"\d\s*{TEMPERATURE_UNITS}", re.I)
_BARE_NUMBER_RE = re.compile(r"(?<![\d.,])(\d{1,4})(?![\d.,])")
_CORE_TEMP_IN_STEP_RE = re.compile(
    rf"\b{CORE_TEMP_LABELS}\s*(?:van|of|:)?\s*(?:tot\s+)?(\d{{2,3}})", re.I
)


def select_title_line(lines: Sequence[ClassifiedLine]) -> Optional[ClassifiedLine]:
    """Strongest title candidate; the earliest one wins ties."""
    best: Optional[ClassifiedLine] = None
    for line in lines:
        if line.kind != LineKind.TITLE:
            continue
        if best is None or line.strength > best.strength:
            best = line
    return best


def extract_title(lines: Sequence[ClassifiedLine]) -> FieldValue:
    chosen = select_title_line(lines)
    if chosen is None:
        logger.debug("No title candidate, using fallback title")
        return FieldValue(FALLBACK_TITLE, FALLBACK_TITLE_CONFIDENCE)

    title = clean_text(chosen.text)[:MAX_TITLE_CHARS].strip(" :-")
    if not title:
        return FieldValue(FALLBACK_TITLE, FALLBACK_TITLE_CONFIDENCE)

    tied = sum(
        1 for line in lines if line.kind == LineKind.TITLE and line.strength == chosen.strength
    )
    confidence = chosen.strength if tied == 1 else TIED_TITLE_CONFIDENCE
    return FieldValue(title, confidence)


def extract_description(
    lines: Sequence[ClassifiedLine], title_line: Optional[ClassifiedLine] = None
) -> FieldValue:
    """Prose between the title and the first ingredient or step line."""
    parts: List[str] = []
    start = title_line.index if title_line is not None else -1
    for line in lines:
        if line.index <= start:
            continue
        if line.kind in (LineKind.INGREDIENT, LineKind.STEP):
            break
        if line.kind == LineKind.TITLE or (line.kind == LineKind.NOISE and line.is_prose):
            parts.append(clean_text(line.text))

    description = " ".join(parts)[:MAX_DESCRIPTION_CHARS].strip()
    if not description:
        return FieldValue(None)
    return FieldValue(description, UNIT_ONLY_CONFIDENCE)


def metadata_fragments(lines: Sequence[ClassifiedLine]) -> Iterator[str]:
    for line in lines:
        if line.kind != LineKind.METADATA:
            continue
        for fragment in _FRAGMENT_SPLIT_RE.split(line.text):
            fragment = fragment.strip()
            if fragment:
                yield fragment


def _labelled_minutes(fragment: str) -> Optional[Tuple[int, float]]:
    found = find_duration(fragment)
    if found is not None and found[0] > 0:
        return found[0], LABELLED_CONFIDENCE
    m = _BARE_NUMBER_RE.search(fragment)
    if m and int(m.group(1)) > 0:
        return int(m.group(1)), BARE_NUMBER_CONFIDENCE
    return None


def _servings(fragment: str) -> Optional[Tuple[int, float]]:
    value = parse_servings_from_text(fragment)
    if value is None:
        return None
    labelled = bool(_SERVINGS_LABEL_RE.search(fragment))
    with_unit = bool(_SERVINGS_UNIT_RE.search(fragment))
    if labelled and with_unit:
        return value, LABELLED_CONFIDENCE
    if with_unit:
        return value, UNIT_ONLY_CONFIDENCE
    return value, BARE_NUMBER_CONFIDENCE


def _core_temperature(fragment: str) -> Optional[Tuple[int, float]]:
    value = extract_temperature(fragment)
    if value is None:
        m = _BARE_NUMBER_RE.search(fragment)
        if not m or not MIN_TEMPERATURE_C <= int(m.group(1)) <= MAX_TEMPERATURE_C:
            return None
        return int(m.group(1)), BARE_NUMBER_CONFIDENCE
    if _TEMPERATURE_UNIT_RE.search(fragment):
        return value, LABELLED_CONFIDENCE
    return value, BARE_NUMBER_CONFIDENCE


def extract_metadata(lines: Sequence[ClassifiedLine]) -> Dict[str, FieldValue]:
    """Serves, prep/cook minutes and target internal temperature.

    Labelled values beat unlabelled ones; otherwise the earliest value wins.
    """
    # field -> (priority, value, confidence); lower priority wins
    found: Dict[str, Tuple[int, int, float]] = {}

    def offer(field: str, priority: int, result: Optional[Tuple[int, float]]) -> None:
        if result is None:
            return
        current = found.get(field)
        if current is None or priority < current[0]:
            found[field] = (priority, result[0], result[1])

    for fragment in metadata_fragments(lines):
        if _PREP_RE.search(fragment):
            offer("prep_minutes", 0, _labelled_minutes(fragment))
        elif _COOK_RE.search(fragment):
            offer("cook_minutes", 0, _labelled_minutes(fragment))
        elif _CORE_TEMP_RE.search(fragment):
            offer("target_internal_temp", 0, _core_temperature(fragment))
        else:
            duration = find_duration(fragment)
            if duration is not None and duration[0] > 0:
                offer("cook_minutes", 1, (duration[0], UNIT_ONLY_CONFIDENCE))
            if _TEMPERATURE_UNIT_RE.search(fragment):
                temperature = extract_temperature(fragment)
                if temperature is not None:
                    offer("target_internal_temp", 1, (temperature, UNIT_ONLY_CONFIDENCE))
        offer("serves", 0, _servings(fragment))

    if "target_internal_temp" not in found:
        for line in lines:
            if line.kind != LineKind.STEP:
                continue
            m = _CORE_TEMP_IN_STEP_RE.search(line.text)
            if m and MIN_TEMPERATURE_C <= int(m.group(1)) <= MAX_TEMPERATURE_C:
                offer("target_internal_temp", 2, (int(m.group(1)), BARE_NUMBER_CONFIDENCE))
                break

    fields = {name: FieldValue(None) for name in METADATA_FIELDS}
    for name, (_, value, confidence) in found.items():
        fields[name] = FieldValue(value, confidence)
    logger.debug(
        "Metadata: %s",
        ", ".join(f"{name}={field.value}" for name, field in fields.items()),
    )
    return fields
