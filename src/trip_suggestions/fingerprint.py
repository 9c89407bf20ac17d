"""Request canonicalization and fingerprinting.

Callers rarely send byte-identical payloads, so every request is first
reduced to a canonical dict: strings are lower-cased and whitespace
collapsed, multi-value fields are de-duplicated and sorted, budgets are
rounded, and dates become ISO strings. The fingerprint is a SHA-256 digest
of that dict (as compact, key-sorted JSON) plus the category tag.
"""

import hashlib
import json
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from trip_suggestions.config import settings
from trip_suggestions.entities import Category, SuggestionRequestEntity

CANONICAL_FIELDS = (
    "city",
    "country",
    "start_date",
    "end_date",
    "category",
    "interests",
    "cuisines",
    "venue_types",
    "budget_min",
    "budget_max",
)

MULTI_VALUE_FIELDS = ("interests", "cuisines", "venue_types")


def _normalize_text(value: str) -> str:
    return " ".join(str(value).split()).lower()


def _normalize_values(values: Iterable[str] | None) -> list[str]:
    if not values:
        return []
    normalized = {_normalize_text(v) for v in values}
    normalized.discard("")
    return sorted(normalized)


def _normalize_budget(value: float | None, precision: int) -> float | None:
    if value is None:
        return None
    # Adding 0.0 folds -0.0 into 0.0
    return round(float(value), precision) + 0.0


def _normalize_date(value: date | str) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value)).isoformat()


def canonicalize(
    request: SuggestionRequestEntity | Mapping[str, Any],
    precision: int | None = None,
) -> dict[str, Any]:
    """Reduce a request to its canonical form.

    Accepts either a request entity or an already-canonical mapping, so
    ``canonicalize(canonicalize(r)) == canonicalize(r)`` holds.

    Args:
        request: The request entity or a mapping with the canonical field names
        precision: Decimal places kept for budget bounds. Defaults to settings.

    Returns:
        A plain dict with exactly the keys in ``CANONICAL_FIELDS``

    Raises:
        ValueError: If the category or a date cannot be parsed
    """
    if precision is None:
        precision = settings.budget_precision

    if isinstance(request, SuggestionRequestEntity):
        raw: Mapping[str, Any] = {name: getattr(request, name) for name in CANONICAL_FIELDS}
    else:
        raw = request

    canonical: dict[str, Any] = {
        "city": _normalize_text(raw["city"]),
        "country": _normalize_text(raw["country"]),
        "start_date": _normalize_date(raw["start_date"]),
        "end_date": _normalize_date(raw["end_date"]),
        "category": Category(raw["category"]).value,
        "budget_min": _normalize_budget(raw.get("budget_min"), precision),
        "budget_max": _normalize_budget(raw.get("budget_max"), precision),
    }
    for name in MULTI_VALUE_FIELDS:
        canonical[name] = _normalize_values(raw.get(name))

    return {name: canonical[name] for name in CANONICAL_FIELDS}


def compute_fingerprint(canonical: Mapping[str, Any], category: Category | str) -> str:
    """Compute the cache fingerprint of a canonical request.

    Args:
        canonical: Output of ``canonicalize``
        category: Category tag appended to the digested text

    Returns:
        64-character lowercase hex SHA-256 digest
    """
    body = json.dumps(canonical, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    tag = Category(category).value
    return hashlib.sha256(f"{body}|{tag}".encode("utf-8")).hexdigest()


def fingerprint_request(
    request: SuggestionRequestEntity,
    precision: int | None = None,
) -> tuple[dict[str, Any], str]:
    """Canonicalize a request and fingerprint it in one step.

    Returns:
        Tuple of (canonical dict, fingerprint)
    """
    canonical = canonicalize(request, precision)
    return canonical, compute_fingerprint(canonical, request.category)
