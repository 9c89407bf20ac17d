"""Suggestion request domain entity."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Category(str, Enum):
    """Kinds of suggestions the agent can produce."""

    PLACES = "places"
    ACTIVITIES = "activities"
    FOOD = "food"
    SHOPPING = "shopping"


@dataclass(frozen=True)
class SuggestionRequestEntity:
    """Domain entity for one suggestion request scoped to a trip.

    Lives only for the duration of a single broker call. ``trip_id`` scopes
    the call for the caller but does not take part in fingerprinting, so two
    trips asking the same question share a cache entry.

    Attributes:
        city: Destination city
        country: Destination country
        start_date: First day of the trip
        end_date: Last day of the trip
        category: Kind of suggestions requested
        interests: Free-form traveller interests
        cuisines: Cuisine filters (mostly for food)
        venue_types: Venue filters (mostly for shopping)
        budget_min: Lower budget bound, if any
        budget_max: Upper budget bound, if any
        trip_id: Identifier of the owning trip, if any
    """

    city: str
    country: str
    start_date: date
    end_date: date
    category: Category
    interests: tuple[str, ...] = ()
    cuisines: tuple[str, ...] = ()
    venue_types: tuple[str, ...] = ()
    budget_min: float | None = None
    budget_max: float | None = None
    trip_id: str | None = None
