"""Pydantic models for OCR recipe parsing."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class ParsedIngredient(_Frozen):
    """An ingredient line split into quantity, unit and name."""

    name: str = Field(min_length=1)
    amount: Optional[float] = None
    unit: Optional[str] = None


class ParsedStep(_Frozen):
    """A preparation step with the timer and temperature it mentions."""

    instruction: str = Field(min_length=1)
    timer_minutes: Optional[int] = None
    target_temp: Optional[int] = None
    order_no: int = 1


class ConfidenceBreakdown(_Frozen):
    overall: float = Field(ge=0.0, le=1.0)
    title: float = Field(ge=0.0, le=1.0)
    ingredients: float = Field(ge=0.0, le=1.0)
    steps: float = Field(ge=0.0, le=1.0)
    metadata: float = Field(0.0, ge=0.0, le=1.0)


class ParsedRecipe(_Frozen):
    """A recipe draft parsed from OCR text."""

    title: str = Field(min_length=1)
    description: Optional[str] = None
    serves: Optional[int] = None
    prep_minutes: Optional[int] = None
    cook_minutes: Optional[int] = None
    target_internal_temp: Optional[int] = None
    ingredients: List[ParsedIngredient] = Field(default_factory=list)
    steps: List[ParsedStep] = Field(default_factory=list)
    confidence: ConfidenceBreakdown


class LineKind(str, Enum):
    """What a single OCR line most likely holds."""

    TITLE = "title"
    METADATA = "metadata"
    INGREDIENT = "ingredient"
    STEP = "step"
    NOISE = "noise"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    One OCR line tagged by the line classifier.

    - strength: how sure the classifier is about ``kind`` (0-1)
    - marker: the ordinal or bullet the line started with, if any
    - section: the heading section the line appeared under
    - is_prose: noise line that reads like a sentence (description material)
    - continues: step line that continues the previous step
    """

    index: int
    text: str
    kind: LineKind
    strength: float = 1.0
    marker: Optional[str] = None
    section: Optional[str] = None
    is_prose: bool = False
    continues: bool = False


@dataclass(frozen=True)
class FieldValue:
    value: Optional[object]
    confidence: float = 0.0

    @property
    def found(self) -> bool:
        return self.value is not None
