"""
Pydantic Schema Models for Page Scan Results.

Field names follow Python conventions; the wire names the model is asked to
produce ("que", "type", "bbox") are accepted as aliases and used when
serialising back to JSON.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, field_validator


class QuestionKind(str, Enum):
    """Answer format of a detected question."""
    MULTIPLE_CHOICE = "mcq"
    NUMERIC_ANSWER = "nat"


# Finite JSON number; ints stay ints. Rejects NaN, +/-Infinity, strings,
# booleans and null.
FiniteNumber = StrictInt | Annotated[float, Field(strict=True, allow_inf_nan=False)]
Coordinate = FiniteNumber

# (ymin, xmin, ymax, xmax) in source-image pixels
BoundingBox = tuple[Coordinate, Coordinate, Coordinate, Coordinate]


class Question(BaseModel):
    """A single question located on the page."""
    model_config = ConfigDict(frozen=True)

    number: FiniteNumber = Field(
        validation_alias=AliasChoices("que", "number"),
        serialization_alias="que",
    )
    kind: QuestionKind = Field(
        validation_alias=AliasChoices("type", "kind"),
        serialization_alias="type",
    )
    bounding_box: BoundingBox = Field(
        validation_alias=AliasChoices("bbox", "boundingBox", "bounding_box"),
        serialization_alias="bbox",
    )

    @field_validator("number")
    @classmethod
    def _integral_number(cls, value: int | float) -> int | float:
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value

    @property
    def y_min(self) -> int | float:
        return self.bounding_box[0]

    @property
    def x_min(self) -> int | float:
        return self.bounding_box[1]

    @property
    def y_max(self) -> int | float:
        return self.bounding_box[2]

    @property
    def x_max(self) -> int | float:
        return self.bounding_box[3]


class ScanResult(BaseModel):
    """
    All questions detected on one page.

    An empty list is a valid result: the page was read but held no questions.
    """
    model_config = ConfigDict(frozen=True)

    questions: list[Question]

    def to_wire(self) -> dict[str, Any]:
        """Dump using the wire field names, e.g. for writing JSON output."""
        return self.model_dump(mode="json", by_alias=True)
