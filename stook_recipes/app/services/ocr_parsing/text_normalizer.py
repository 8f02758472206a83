"""Clean-up of raw OCR text before it is split into lines."""

import logging
import re
from typing import List, Optional

from stook_recipes.app.services.ocr_parsing.constants import (
    FRACTION_CHARS,
    SECTION_HEADINGS,
    STEP_MARKER_RE,
    UNIT_PATTERN,
)
from stook_recipes.app.services.ocr_parsing.parsing_utils import is_known_unit

logger = logging.getLogger(__name__)

_QUANTITY = rf"(?:\d+(?:[.,]\d+)?(?:\s*/\s*\d+)?|[{FRACTION_CHARS}])"
_BARE_QUANTITY_RE = re.compile(rf"^{_QUANTITY}$")
_QUANTITY_UNIT_RE = re.compile(rf"^{_QUANTITY}\s*(?:{UNIT_PATTERN})\.?(?:\s*\.)?$", re.I)
_STARTS_WITH_LETTER_RE = re.compile(r"^[a-zA-ZÀ-ÿ]")
_ALTERNATIVE_RE = re.compile(r"^(?:of|en|or|and)\s+[a-zà-ÿ]", re.I)


def normalize_whitespace(text: str) -> str:
    """Normalize line endings and runs of spaces; keep at most one blank line."""
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t\f\v\u00a0]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _is_heading(line: str) -> bool:
    return any(pattern.match(line) for pattern in SECTION_HEADINGS.values())


def _is_name_line(line: Optional[str]) -> bool:
    """A line that can carry an ingredient name after a split quantity."""
    if not line or not _STARTS_WITH_LETTER_RE.match(line):
        return False
    if _is_heading(line) or STEP_MARKER_RE.match(line):
        return False
    return not is_known_unit(line.strip(" ."))


def _is_unit_line(line: Optional[str]) -> bool:
    return bool(line) and is_known_unit(line.strip(" ."))


def merge_split_quantities(lines: List[str]) -> List[str]:
    """Re-join ingredient fragments that OCR put on separate lines.

    "500" / "g" / "kipfilet" -> "500 g kipfilet"
    "2 eetlepels" / "olijfolie" -> "2 eetlepels olijfolie"
    """
    merged: List[str] = []
    i = 0
    while i < len(lines):
        line = lines[i].strip()
        nxt = lines[i + 1].strip() if i + 1 < len(lines) else None
        after = lines[i + 2].strip() if i + 2 < len(lines) else None

        if _BARE_QUANTITY_RE.match(line) and _is_unit_line(nxt):
            unit = nxt.strip(" .")
            if _is_name_line(after):
                merged.append(f"{line} {unit} {after}")
                i += 3
            else:
                merged.append(f"{line} {unit}")
                i += 2
            continue

        if _QUANTITY_UNIT_RE.match(line) and _is_name_line(nxt):
            head = line.rstrip(" .")
            if after and _ALTERNATIVE_RE.match(after):
                merged.append(f"{head} {nxt} {after}")
                i += 3
            else:
                merged.append(f"{head} {nxt}")
                i += 2
            continue

        merged.append(lines[i])
        i += 1

    if len(merged) != len(lines):
        logger.debug("Merged split quantity lines: %d -> %d lines", len(lines), len(merged))
    return merged


def preprocess_ocr_text(text: str) -> str:
    """Normalize OCR artifacts so that line classification sees clean lines."""
    processed = normalize_whitespace(text)
    if not processed:
        return processed

    processed = re.sub(r"[–—]", "-", processed)
    processed = re.sub(r"[“”„]", '"', processed)
    processed = re.sub(r"[‘’‚]", "'", processed)
    processed = processed.replace("º", "°")

    # "aardap-\nelen" -> "aardappelen"
    processed = re.sub(r"([a-zA-Zà-ÿ])-\n([a-zà-ÿ])", r"\1\2", processed)

    # A leading "|" is OCR's reading of a bullet
    processed = re.sub(r"(?m)^\|\s*", "• ", processed)

    # Dashes or bullets alone on a line
    processed = re.sub(r"(?m)^[-•·*]+$\n?", "", processed)

    lines = merge_split_quantities(processed.split("\n"))
    return normalize_whitespace("\n".join(lines))
