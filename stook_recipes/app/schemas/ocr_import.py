from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stook_recipes.app.services.ocr_parsing.models import (
    ConfidenceBreakdown,
    ParsedIngredient,
    ParsedStep,
)


class PhotoPreviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    raw_text: str = Field(min_length=1)
    path: Optional[str] = None


class PhotoPreviewResponse(BaseModel):
    """Recipe preview in the same shape as the URL import preview."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    path: Optional[str] = None
    title: str
    description: Optional[str] = None
    serves: Optional[int] = None
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None
    target_internal_temp: Optional[int] = None
    ingredients: List[ParsedIngredient] = Field(default_factory=list)
    steps: List[ParsedStep] = Field(default_factory=list)
    confidence: float
    confidence_details: ConfidenceBreakdown
    needs_review: bool
    source: str = "OCR Import"
