"""Request DTOs for API endpoints."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from trip_suggestions.entities import Category, SuggestionRequestEntity

MAX_LIST_ITEMS = 20


class SuggestionRequestDTO(BaseModel):
    """Request DTO for trip suggestions.

    The handler converts this to a SuggestionRequestEntity for the service layer.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    city: str = Field(..., description="Destination city", min_length=1, max_length=100)
    country: str = Field(..., description="Destination country", min_length=1, max_length=100)
    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip")
    category: Category = Field(..., description="places, activities, food or shopping")
    interests: list[str] = Field(
        default_factory=list,
        description="Traveller interests (order and case do not matter)",
        max_length=MAX_LIST_ITEMS,
    )
    cuisines: list[str] = Field(
        default_factory=list,
        description="Cuisine filters, e.g. ['Italian', 'Japanese']",
        max_length=MAX_LIST_ITEMS,
    )
    venue_types: list[str] = Field(
        default_factory=list,
        description="Venue filters, e.g. ['market', 'boutique']",
        max_length=MAX_LIST_ITEMS,
    )
    budget_min: float | None = Field(
        None, description="Lower budget bound", ge=0.0, allow_inf_nan=False
    )
    budget_max: float | None = Field(
        None, description="Upper budget bound", ge=0.0, allow_inf_nan=False
    )

    @model_validator(mode="after")
    def check_ranges(self) -> "SuggestionRequestDTO":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError("budget_min must not exceed budget_max")
        return self

    def to_entity(self, trip_id: str | None = None) -> SuggestionRequestEntity:
        """Convert to the domain entity used by the service layer."""
        return SuggestionRequestEntity(
            city=self.city,
            country=self.country,
            start_date=self.start_date,
            end_date=self.end_date,
            category=self.category,
            interests=tuple(self.interests),
            cuisines=tuple(self.cuisines),
            venue_types=tuple(self.venue_types),
            budget_min=self.budget_min,
            budget_max=self.budget_max,
            trip_id=trip_id,
        )
