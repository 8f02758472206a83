import logging

from stook_recipes.app.services.ocr_parsing import (
    ParsedRecipe,
    extract_description,
    extract_metadata,
    extract_title,
    parse_ingredients,
    parse_steps,
    score_confidence,
    select_title_line,
    tokenize,
)

logger = logging.getLogger(__name__)


class OcrTextValidationError(ValueError):
    """Raised when there is no OCR text to parse."""

    error_code = "validation_error"


def parse(raw_text: str) -> ParsedRecipe:
    """Parse OCR text of a recipe card into a recipe draft with confidences.

    Only empty or whitespace-only text is rejected; anything else yields a
    (possibly sparse) draft.
    """
    if not isinstance(raw_text, str):
        raise OcrTextValidationError(f"OCR text must be a string, got {type(raw_text).__name__}")
    if not raw_text.strip():
        raise OcrTextValidationError("OCR text is empty")

    lines = tokenize(raw_text)

    title = extract_title(lines)
    description = extract_description(lines, select_title_line(lines))
    metadata = extract_metadata(lines)
    ingredients = parse_ingredients(lines)
    steps = parse_steps(lines)

    confidence = score_confidence(
        title.confidence,
        [conf for _, conf in ingredients],
        [conf for _, conf in steps],
        [field.confidence for field in metadata.values() if field.found],
    )

    recipe = ParsedRecipe(
        title=title.value,
        description=description.value,
        serves=metadata["serves"].value,
        prep_minutes=metadata["prep_minutes"].value,
        cook_minutes=metadata["cook_minutes"].value,
        target_internal_temp=metadata["target_internal_temp"].value,
        ingredients=[ingredient for ingredient, _ in ingredients],
        steps=[step for step, _ in steps],
        confidence=confidence,
    )

    logger.info(
        "Parsed OCR text (%d lines): title='%s', %d ingredients, %d steps, confidence=%.2f",
        len(lines),
        recipe.title[:40],
        len(recipe.ingredients),
        len(recipe.steps),
        confidence.overall,
    )
    if not recipe.ingredients and not recipe.steps:
        logger.warning("No ingredients or steps recognized in OCR text (%d lines)", len(lines))
    return recipe


parse_ocr_text = parse
