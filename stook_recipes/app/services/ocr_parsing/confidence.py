"""Per-field and overall confidence for a parsed recipe."""

from typing import Dict, Sequence

from stook_recipes.app.services.ocr_parsing.models import ConfidenceBreakdown

FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.25,
    "ingredients": 0.30,
    "steps": 0.30,
    "metadata": 0.15,
}
# Overall may exceed the weakest of title/ingredients/steps by at most this much
WEAKEST_FIELD_TOLERANCE = 0.15


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 2)


def score_confidence(
    title_confidence: float,
    ingredient_confidences: Sequence[float],
    step_confidences: Sequence[float],
    metadata_confidences: Sequence[float],
) -> ConfidenceBreakdown:
    """Combine field confidences into a breakdown with a weighted overall score.

    When no metadata was found its weight is left out, so a card without
    times or servings is not punished for it.
    """
    scores = {
        "title": _clamp(title_confidence),
        "ingredients": _clamp(_mean(ingredient_confidences)),
        "steps": _clamp(_mean(step_confidences)),
        "metadata": _clamp(_mean(metadata_confidences)),
    }

    weights = dict(FIELD_WEIGHTS)
    if not metadata_confidences:
        weights.pop("metadata")

    weighted = sum(scores[field] * weight for field, weight in weights.items())
    overall = weighted / sum(weights.values())

    weakest = min(scores["title"], scores["ingredients"], scores["steps"])
    overall = min(overall, weakest + WEAKEST_FIELD_TOLERANCE)

    return ConfidenceBreakdown(overall=_clamp(overall), **scores)
