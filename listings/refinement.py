"""
Client-side refinement of fetched property rows.

The properties endpoint enforces most filters, but not all of them
(property age, custom fields) and not every backend is exact about the
rest, so every active filter is re-applied here before sorting and
pagination. Rows are plain dicts as returned by the API; both snake_case
and camelCase keys are understood.
"""
from .api_query import api_transaction
from .constants import (
    ALL_CATEGORIES,
    DEFAULT_MAX_PRICE,
    SORT_FEATURED,
    SORT_PRICE_HIGH,
    SORT_PRICE_LOW,
)
from .filter_state import parse_bhk_label

_SELLER_TYPE_ALIASES = {"corporate": "builder"}


def _field(row, *names):
    for name in names:
        if name in row and row[name] is not None:
            return row[name]
    return None


def _number(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _category_key(value):
    if isinstance(value, dict):
        value = value.get("slug") or value.get("name")
    key = str(value or "").strip().lower()
    return key[:-1] if key.endswith("s") else key


def _seller_key(value):
    key = str(value or "").strip().lower()
    return _SELLER_TYPE_ALIASES.get(key, key)


def age_bucket(value):
    """Years since construction -> 'new', '1-5' or '5+'. Missing or unparsable ages count as new."""
    years = _number(value)
    if years is None or years <= 0:
        return "new"
    if years <= 5:
        return "1-5"
    return "5+"


def row_price(row):
    return _number(_field(row, "price"))


def _matches_category(row, category):
    return _category_key(_field(row, "category")) == _category_key(category)


def _matches_transaction(row, allowed):
    return api_transaction(_field(row, "transaction_type", "transactionType")) in allowed


def _matches_price(row, state):
    price = row_price(row)
    if price is None:
        return False
    if state.price_min > 0 and price < state.price_min:
        return False
    if state.price_max < DEFAULT_MAX_PRICE and price > state.price_max:
        return False
    return True


def _matches_bhk(row, labels):
    bedrooms = _number(_field(row, "bedrooms"))
    if bedrooms is None:
        return False
    for label in labels:
        parsed = parse_bhk_label(label)
        if parsed is None:
            continue
        count, at_least = parsed
        if (at_least and bedrooms >= count) or bedrooms == count:
            return True
    return False


def _matches_locality(row, needle):
    needle = needle.lower()
    for name in ("locality", "address", "city"):
        value = row.get(name)
        if value and needle in str(value).lower():
            return True
    return False


def _custom_value(row, key):
    fields = _field(row, "custom_fields", "customFields") or {}
    if not isinstance(fields, dict):
        return None
    return fields.get(key)


def _matches_dynamic(row, key, wanted):
    if isinstance(wanted, str) and key.endswith(("_min", "_max")):
        bound = _number(wanted)
        if bound is None:
            # Unusable bound, filter ignored
            return True
        actual = _number(_custom_value(row, key[:-4]))
        if actual is None:
            return False
        return actual >= bound if key.endswith("_min") else actual <= bound

    actual = _custom_value(row, key)
    if actual is None:
        return False
    actual_values = [str(v).lower() for v in actual] if isinstance(actual, (list, tuple)) else [str(actual).lower()]

    if isinstance(wanted, str):
        needle = wanted.lower()
        return any(needle in value for value in actual_values)
    wanted_values = {str(v).lower() for v in wanted}
    if not wanted_values:
        return True
    return any(value in wanted_values for value in actual_values)


def refine(rows, state, transaction=None):
    """Apply every active filter of `state` to `rows`; `transaction` is the route segment, if any."""
    rows = list(rows)

    if state.featured:
        rows = [r for r in rows if _field(r, "is_featured", "isFeatured")]

    if state.category and state.category != ALL_CATEGORIES:
        rows = [r for r in rows if _matches_category(r, state.category)]

    if transaction:
        allowed = {api_transaction(transaction)}
    else:
        allowed = {api_transaction(t) for t in state.transaction_types}
    if allowed:
        rows = [r for r in rows if _matches_transaction(r, allowed)]

    if state.has_price_range:
        rows = [r for r in rows if _matches_price(r, state)]

    if state.bhk:
        rows = [r for r in rows if _matches_bhk(r, state.bhk)]

    if state.seller_types:
        wanted = {_seller_key(s) for s in state.seller_types}
        rows = [r for r in rows if _seller_key(_field(r, "seller_type", "sellerType")) in wanted]

    if state.project_stages:
        stages = {s.lower() for s in state.project_stages}
        rows = [r for r in rows if str(_field(r, "project_stage", "projectStage") or "").lower() in stages]

    if state.locality:
        rows = [r for r in rows if _matches_locality(r, state.locality)]

    if state.property_age:
        rows = [
            r for r in rows
            if age_bucket(_field(r, "age_of_property", "ageOfProperty")) in state.property_age
        ]

    for key, wanted in state.dynamic_filters.items():
        rows = [r for r in rows if _matches_dynamic(r, key, wanted)]

    return rows


def sort_rows(rows, sort):
    """Stable sort by the listings sort key; 'newest' keeps the fetch order."""
    rows = list(rows)
    if sort in (SORT_PRICE_LOW, SORT_PRICE_HIGH):
        priced = [r for r in rows if row_price(r) is not None]
        unpriced = [r for r in rows if row_price(r) is None]
        priced.sort(key=row_price, reverse=(sort == SORT_PRICE_HIGH))
        return priced + unpriced
    if sort == SORT_FEATURED:
        return sorted(rows, key=lambda r: not _field(r, "is_featured", "isFeatured"))
    return rows
