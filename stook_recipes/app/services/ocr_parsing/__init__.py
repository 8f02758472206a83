"""OCR recipe parsing package.

This package turns noisy OCR text of recipe cards into a structured recipe
draft: line classification, field extraction, ingredient and step parsing,
and confidence scoring.
"""

from stook_recipes.app.services.ocr_parsing.confidence import score_confidence
from stook_recipes.app.services.ocr_parsing.field_extractors import (
    extract_description,
    extract_metadata,
    extract_title,
    select_title_line,
)
from stook_recipes.app.services.ocr_parsing.ingredient_parser import (
    parse_ingredient_line,
    parse_ingredients,
)
from stook_recipes.app.services.ocr_parsing.line_classifier import (
    LineContext,
    classify_line,
    tokenize,
)
from stook_recipes.app.services.ocr_parsing.models import (
    ClassifiedLine,
    ConfidenceBreakdown,
    FieldValue,
    LineKind,
    ParsedIngredient,
    ParsedRecipe,
    ParsedStep,
)
from stook_recipes.app.services.ocr_parsing.parsing_utils import (
    extract_temperature,
    extract_timer_minutes,
    parse_servings_from_text,
)
from stook_recipes.app.services.ocr_parsing.step_parser import normalize_step, parse_steps
from stook_recipes.app.services.ocr_parsing.text_normalizer import (
    normalize_whitespace,
    preprocess_ocr_text,
)

__all__ = [
    # Models
    "ClassifiedLine",
    "ConfidenceBreakdown",
    "FieldValue",
    "LineKind",
    "ParsedIngredient",
    "ParsedRecipe",
    "ParsedStep",
    # Text normalization and classification
    "LineContext",
    "classify_line",
    "normalize_whitespace",
    "preprocess_ocr_text",
    "tokenize",
    # Field extraction
    "extract_description",
    "extract_metadata",
    "extract_title",
    "select_title_line",
    # Ingredients and steps
    "normalize_step",
    "parse_ingredient_line",
    "parse_ingredients",
    "parse_steps",
    # Parsing utilities
    "extract_temperature",
    "extract_timer_minutes",
    "parse_servings_from_text",
    # Scoring
    "score_confidence",
]
