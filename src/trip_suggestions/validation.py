"""Shape validation for suggestion agent replies.

Every item is a place-like record. Food and shopping venues, and
activities, carry extra category-specific fields; these are validated as a
separate extension record and merged into the base record, tagged with the
category as ``kind``.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trip_suggestions.entities import Category
from trip_suggestions.errors import UpstreamInvalidResponse


class PlaceFields(BaseModel):
    """Fields shared by every suggestion item."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    description: str | None = None
    address: str | None = None
    rating: float | None = Field(None, ge=0.0, le=5.0)
    latitude: float | None = Field(None, ge=-90.0, le=90.0)
    longitude: float | None = Field(None, ge=-180.0, le=180.0)


class ActivityFields(BaseModel):
    """Extension fields for activities."""

    model_config = ConfigDict(extra="ignore")

    duration_hours: float | None = Field(None, gt=0)
    price: float | None = Field(None, ge=0)
    booking_url: str | None = None


class FoodFields(BaseModel):
    """Extension fields for restaurants and other food venues."""

    model_config = ConfigDict(extra="ignore")

    cuisine: str | None = None
    price_range: str | None = None
    dietary_options: list[str] | None = None


class ShoppingFields(BaseModel):
    """Extension fields for shopping venues."""

    model_config = ConfigDict(extra="ignore")

    venue_type: str | None = None
    opening_hours: str | None = None


CATEGORY_EXTENSIONS: dict[Category, type[BaseModel] | None] = {
    Category.PLACES: None,
    Category.ACTIVITIES: ActivityFields,
    Category.FOOD: FoodFields,
    Category.SHOPPING: ShoppingFields,
}


def _extract_items(category: Category, payload: Any) -> list[Any]:
    if isinstance(payload, Mapping):
        for key in ("items", category.value):
            if key in payload:
                payload = payload[key]
                break
        else:
            raise UpstreamInvalidResponse(
                f"Agent reply has no 'items' list (keys: {sorted(payload)})"
            )

    if not isinstance(payload, list):
        raise UpstreamInvalidResponse(
            f"Agent reply items must be a list, got {type(payload).__name__}"
        )
    if not payload:
        raise UpstreamInvalidResponse("Agent reply contains no suggestions")
    return payload


def parse_suggestions(category: Category | str, payload: Any) -> list[dict[str, Any]]:
    """Validate an agent reply and normalize its items.

    Args:
        category: Category the request was made for
        payload: Decoded agent reply (list of items or ``{"items": [...]}``)

    Returns:
        List of item dicts, in the agent's order

    Raises:
        UpstreamInvalidResponse: If any part of the reply is malformed
    """
    category = Category(category)
    extension = CATEGORY_EXTENSIONS[category]

    items: list[dict[str, Any]] = []
    for index, raw in enumerate(_extract_items(category, payload)):
        if not isinstance(raw, Mapping):
            raise UpstreamInvalidResponse(
                f"Suggestion #{index} must be an object, got {type(raw).__name__}"
            )
        try:
            item = PlaceFields.model_validate(raw).model_dump(exclude_none=True)
            if extension is not None:
                item.update(extension.model_validate(raw).model_dump(exclude_none=True))
        except ValidationError as e:
            raise UpstreamInvalidResponse(f"Suggestion #{index} is invalid: {e}") from e

        item["kind"] = category.value
        items.append(item)

    return items
