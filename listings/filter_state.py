"""
Listing filters as one immutable value.

A FilterState is rebuilt from the URL query string on every request
(see listings.url_query); nothing else holds filter state.
"""
import dataclasses
import re
from dataclasses import dataclass, field
from typing import Optional

from .constants import ALL_CATEGORIES, DEFAULT_MAX_PRICE

BHK_LABEL_RE = re.compile(r"^\s*(\d+)\s*(\+?)\s*BHK\s*$", re.IGNORECASE)

SET_FIELDS = (
    "transaction_types",
    "subcategories",
    "project_stages",
    "bhk",
    "seller_types",
    "property_age",
)


def parse_bhk_label(label):
    """'2 BHK' -> (2, False), '4+ BHK' -> (4, True), anything else -> None."""
    match = BHK_LABEL_RE.match(label or "")
    if not match:
        return None
    return int(match.group(1)), bool(match.group(2))


def bhk_label(count, at_least=False):
    return f"{count}{'+' if at_least else ''} BHK"


def _freeze_dynamic(value):
    if isinstance(value, str):
        return value
    return frozenset(value)


@dataclass(frozen=True)
class FilterState:
    price_min: int = 0
    price_max: int = DEFAULT_MAX_PRICE
    transaction_types: frozenset = frozenset()
    category: str = ALL_CATEGORIES
    subcategories: frozenset = frozenset()
    project_stages: frozenset = frozenset()
    bhk: frozenset = frozenset()
    seller_types: frozenset = frozenset()
    property_age: frozenset = frozenset()
    builder: Optional[str] = None
    locality: Optional[str] = None
    # field key -> str or frozenset[str]; "<key>_min"/"<key>_max" are numeric bounds
    dynamic_filters: dict = field(default_factory=dict, hash=False)
    seller_id: Optional[str] = None
    featured: bool = False

    def __post_init__(self):
        # Accept any iterable for set-valued fields
        for name in SET_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value or ()))
        object.__setattr__(
            self,
            "dynamic_filters",
            {key: _freeze_dynamic(value) for key, value in (self.dynamic_filters or {}).items()},
        )
        if not self.category:
            object.__setattr__(self, "category", ALL_CATEGORIES)

    @property
    def has_price_range(self):
        return self.price_min != 0 or self.price_max != DEFAULT_MAX_PRICE

    def is_default(self):
        return self == FilterState()

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def to_dict(self):
        """JSON-friendly form, used in listings responses and saved searches."""
        return {
            "price_min": self.price_min,
            "price_max": self.price_max,
            "transaction_types": sorted(self.transaction_types),
            "category": self.category,
            "subcategories": sorted(self.subcategories),
            "project_stages": sorted(self.project_stages),
            "bhk": sorted(self.bhk),
            "seller_types": sorted(self.seller_types),
            "property_age": sorted(self.property_age),
            "builder": self.builder,
            "locality": self.locality,
            "dynamic_filters": {
                key: value if isinstance(value, str) else sorted(value)
                for key, value in sorted(self.dynamic_filters.items())
            },
            "seller_id": self.seller_id,
            "featured": self.featured,
        }
