"""Step parsing: instruction text, timers, temperatures and order."""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from stook_recipes.app.services.ocr_parsing.constants import BULLET_RE, STEP_MARKER_RE
from stook_recipes.app.services.ocr_parsing.models import ClassifiedLine, LineKind, ParsedStep
from stook_recipes.app.services.ocr_parsing.parsing_utils import (
    clean_text,
    extract_temperature,
    extract_timer_minutes,
)

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+(?=[A-ZÀ-Ý])")
_SENTENCE_SPLIT_CONFIDENCE = 0.5


def normalize_step(text: str, marker: Optional[str] = None) -> str:
    """Remove a leading ordinal, "Stap N" or bullet from a step line.

    ``marker`` is the bare step number the classifier found ("2 Roken ..."),
    which has no punctuation for the ordinal pattern to strip.
    """
    cleaned = clean_text(text)
    cleaned = STEP_MARKER_RE.sub("", cleaned, count=1)
    if marker and marker.isdigit() and re.match(rf"{marker}\s", cleaned):
        cleaned = cleaned[len(marker):]
    cleaned = BULLET_RE.sub("", cleaned, count=1)
    return cleaned.strip(" -:")


def _letter_count(text: str) -> int:
    return sum(1 for ch in text if ch.isalpha())


def _split_sentences(text: str) -> List[str]:
    return [part.strip() for part in _SENTENCE_SPLIT_RE.split(text) if part.strip()]


def parse_steps(lines: Sequence[ClassifiedLine]) -> List[Tuple[ParsedStep, float]]:
    """Build ordered steps from step lines; returns (step, confidence) pairs."""
    drafts: List[List] = []
    for line in lines:
        if line.kind != LineKind.STEP:
            continue
        text = normalize_step(line.text, line.marker)
        if not text:
            continue
        if line.continues and drafts:
            drafts[-1][0] = f"{drafts[-1][0]} {text}"
            continue
        drafts.append([text, line.strength, line.marker is not None])

    # A single unmarked paragraph is usually several steps run together
    if len(drafts) == 1 and not drafts[0][2]:
        sentences = _split_sentences(drafts[0][0])
        if len(sentences) > 1:
            logger.debug("Split unmarked step paragraph into %d sentences", len(sentences))
            drafts = [[sentence, _SENTENCE_SPLIT_CONFIDENCE, False] for sentence in sentences]

    steps: List[Tuple[ParsedStep, float]] = []
    for instruction, confidence, _ in drafts:
        if _letter_count(instruction) < 2:
            logger.debug("Dropping step without text: %s", instruction[:50])
            continue
        step = ParsedStep(
            instruction=instruction,
            timer_minutes=extract_timer_minutes(instruction),
            target_temp=extract_temperature(instruction),
            order_no=len(steps) + 1,
        )
        steps.append((step, confidence))
        logger.debug(
            "Step %d: timer=%s, temp=%s, '%s'",
            step.order_no,
            step.timer_minutes,
            step.target_temp,
            instruction[:50],
        )
    return steps
