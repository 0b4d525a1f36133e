"""
FilterState <-> URL query string.

Decoding is lenient: malformed numbers fall back to defaults, unknown
members and bad labels are dropped, broken dynamicFilters JSON becomes {}.
Encoding is canonical: fixed parameter order, defaults omitted, list
values sorted and comma-joined.
"""
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import parse_qsl, quote, urlencode

from .constants import (
    ALL_CATEGORIES,
    DEFAULT_MAX_PRICE,
    DEFAULT_SORT,
    PROJECT_STAGES,
    PROPERTY_AGE_BUCKETS,
    SELLER_TYPES,
    SORT_OPTIONS,
    TRANSACTION_ALIASES,
    TRANSACTION_TYPES,
)
from .filter_state import FilterState, bhk_label, parse_bhk_label

logger = logging.getLogger(__name__)

# Canonical parameter order
PARAM_ORDER = (
    "category", "minPrice", "maxPrice", "bhk", "transactionTypes", "sellerTypes",
    "propertyAge", "subcategories", "projectStages", "builder", "locality",
    "dynamicFilters", "page", "sort", "sellerId", "featured",
)

_SELLER_TYPES_BY_KEY = {label.lower(): label for label in SELLER_TYPES}
_TRUE_VALUES = {"true", "1", "yes"}


@dataclass(frozen=True)
class ListingQuery:
    state: FilterState
    page: int = 1
    sort: str = DEFAULT_SORT

    def encode(self):
        return encode_query(self.state, self.page, self.sort)


def _params_from(query):
    """Flatten a raw query string or a mapping into {name: last value}."""
    if query is None:
        return {}
    if isinstance(query, str):
        return dict(parse_qsl(query.lstrip("?"), keep_blank_values=True))
    if isinstance(query, Mapping):
        params = {}
        for key in query:
            # QueryDict.get() already returns the last value
            value = query.get(key)
            if isinstance(value, (list, tuple)):
                value = value[-1] if value else ""
            params[key] = "" if value is None else str(value)
        return params
    raise TypeError(f"Unsupported query type: {type(query).__name__}")


def _parse_non_negative_int(name, raw, default):
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Dropping malformed %s=%r", name, raw)
        return default
    if value < 0:
        logger.debug("Dropping negative %s=%r", name, raw)
        return default
    return value


def parse_page(raw):
    page = _parse_non_negative_int("page", raw, 1)
    return page if page >= 1 else 1


def parse_sort(raw):
    sort = (raw or "").strip()
    if sort in SORT_OPTIONS:
        return sort
    if sort:
        logger.debug("Unknown sort %r, using %s", sort, DEFAULT_SORT)
    return DEFAULT_SORT


def _split(raw):
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def _parse_members(name, raw, normalize):
    members = set()
    for part in _split(raw):
        value = normalize(part)
        if value is None:
            logger.debug("Dropping unknown %s value %r", name, part)
            continue
        members.add(value)
    return frozenset(members)


def _transaction_type(value):
    value = value.lower()
    value = TRANSACTION_ALIASES.get(value, value)
    return value if value in TRANSACTION_TYPES else None


def _seller_type(value):
    return _SELLER_TYPES_BY_KEY.get(value.lower())


def _property_age(value):
    return value if value in PROPERTY_AGE_BUCKETS else None


def _project_stage(value):
    value = value.lower()
    return value if value in PROJECT_STAGES else None


def _bhk(value):
    parsed = parse_bhk_label(value)
    if parsed is None:
        return None
    return bhk_label(*parsed)


def _text(raw):
    value = (raw or "").strip()
    return value or None


def parse_dynamic_filters(raw):
    """JSON object of field key -> string or list of strings; anything else is dropped."""
    if not raw or not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring malformed dynamicFilters %r", raw)
        return {}
    if not isinstance(data, dict):
        logger.debug("Ignoring non-object dynamicFilters %r", raw)
        return {}
    filters = {}
    for key, value in data.items():
        if isinstance(value, str):
            if value.strip():
                filters[key] = value
        elif isinstance(value, list) and all(isinstance(item, str) for item in value):
            if value:
                filters[key] = frozenset(value)
        else:
            logger.debug("Dropping dynamic filter %r with value %r", key, value)
    return filters


def decode_query(query):
    """Raw query string (leading '?' allowed) or mapping -> ListingQuery. Never raises on bad values."""
    if isinstance(query, ListingQuery):
        return query
    params = _params_from(query)

    state = FilterState(
        price_min=_parse_non_negative_int("minPrice", params.get("minPrice"), 0),
        price_max=_parse_non_negative_int("maxPrice", params.get("maxPrice"), DEFAULT_MAX_PRICE),
        transaction_types=_parse_members("transactionTypes", params.get("transactionTypes"), _transaction_type),
        category=(params.get("category") or "").strip() or ALL_CATEGORIES,
        subcategories=_parse_members("subcategories", params.get("subcategories"), str.strip),
        project_stages=_parse_members("projectStages", params.get("projectStages"), _project_stage),
        bhk=_parse_members("bhk", params.get("bhk"), _bhk),
        seller_types=_parse_members("sellerTypes", params.get("sellerTypes"), _seller_type),
        property_age=_parse_members("propertyAge", params.get("propertyAge"), _property_age),
        builder=_text(params.get("builder")),
        locality=_text(params.get("locality")),
        dynamic_filters=parse_dynamic_filters(params.get("dynamicFilters")),
        seller_id=_text(params.get("sellerId")),
        featured=(params.get("featured") or "").strip().lower() in _TRUE_VALUES,
    )
    return ListingQuery(state=state, page=parse_page(params.get("page")), sort=parse_sort(params.get("sort")))


def _join(values):
    return ",".join(sorted(values))


def encode_dynamic_filters(filters):
    if not filters:
        return ""
    data = {
        key: value if isinstance(value, str) else sorted(value)
        for key, value in sorted(filters.items())
    }
    return json.dumps(data, separators=(",", ":"), sort_keys=True)


def encode_params(state, page=1, sort=DEFAULT_SORT):
    """Ordered (name, value) pairs of the canonical query, defaults omitted."""
    values = {}
    if state.category and state.category != ALL_CATEGORIES:
        values["category"] = state.category
    if state.has_price_range:
        values["minPrice"] = str(state.price_min)
        values["maxPrice"] = str(state.price_max)
    values["bhk"] = _join(state.bhk)
    values["transactionTypes"] = _join(state.transaction_types)
    values["sellerTypes"] = _join(state.seller_types)
    values["propertyAge"] = _join(state.property_age)
    values["subcategories"] = _join(state.subcategories)
    values["projectStages"] = _join(state.project_stages)
    values["builder"] = state.builder or ""
    values["locality"] = state.locality or ""
    values["dynamicFilters"] = encode_dynamic_filters(state.dynamic_filters)
    if page and page != 1:
        values["page"] = str(page)
    if sort and sort != DEFAULT_SORT:
        values["sort"] = sort
    values["sellerId"] = state.seller_id or ""
    if state.featured:
        values["featured"] = "true"
    return [(name, values[name]) for name in PARAM_ORDER if values.get(name)]


def encode_query(state, page=1, sort=DEFAULT_SORT):
    """Canonical query string without the leading '?'; empty for the default view."""
    return urlencode(encode_params(state, page, sort), quote_via=quote, safe=",")


def update_query(query, *, page=None, sort=None, **changes):
    """
    Apply filter changes to a query and re-encode it.

    Changing any filter or the sort sends the user back to page 1 unless
    an explicit page is given.
    """
    current = decode_query(query)
    state = current.state.replace(**changes) if changes else current.state
    new_sort = parse_sort(sort) if sort is not None else current.sort

    if page is not None:
        new_page = parse_page(str(page))
    elif state != current.state or new_sort != current.sort:
        new_page = 1
    else:
        new_page = current.page
    return encode_query(state, new_page, new_sort)
