"""FilterState -> query parameters of GET /api/properties/."""
from .constants import ALL_CATEGORIES, DEFAULT_MAX_PRICE, TRANSACTION_ALIASES
from .filter_state import parse_bhk_label

# Route segment -> value shown in the transaction filter
PATH_TRANSACTION_LABELS = {
    "buy": "Sale",
    "rent": "Rent",
    "lease": "Lease",
}

# The top BHK bucket is sent as "5+"
_BHK_API_OVERRIDES = {"4+ BHK": "5+"}

_SELLER_TYPE_API_OVERRIDES = {"corporate": "builder"}


def transaction_for_path(path):
    """'/buy', '/rent/', '/lease?x=1' -> 'buy'/'rent'/'lease'; other paths -> None."""
    if not path:
        return None
    segment = path.split("?", 1)[0].strip("/").split("/", 1)[0].lower()
    return segment if segment in PATH_TRANSACTION_LABELS else None


def api_transaction(value):
    value = (value or "").strip().lower()
    return TRANSACTION_ALIASES.get(value, value)


def api_bhk(label):
    if label in _BHK_API_OVERRIDES:
        return _BHK_API_OVERRIDES[label]
    parsed = parse_bhk_label(label)
    if parsed is None:
        return None
    count, at_least = parsed
    return f"{count}+" if at_least else str(count)


def api_seller_type(label):
    value = (label or "").strip().lower()
    return _SELLER_TYPE_API_OVERRIDES.get(value, value)


def _csv(values):
    return ",".join(sorted({v for v in values if v}))


def build_api_params(state, transaction=None, offset=0, limit=None):
    """
    Flat string params for the properties endpoint.

    `transaction` is the route segment (buy/rent/lease); when given it
    replaces the transaction types picked in the URL. Property age and
    dynamic filters are not sent: the refinement pass applies them.
    """
    params = {}

    if transaction:
        params["transactionType"] = api_transaction(transaction)
    elif state.transaction_types:
        params["transactionType"] = _csv(api_transaction(t) for t in state.transaction_types)

    if state.category and state.category != ALL_CATEGORIES:
        params["category"] = state.category
    if state.subcategories:
        params["subcategories"] = _csv(state.subcategories)
    if state.project_stages:
        params["projectStages"] = _csv(state.project_stages)

    bhk = _csv(api_bhk(label) for label in state.bhk)
    if bhk:
        params["bhk"] = bhk
    if state.seller_types:
        params["sellerType"] = _csv(api_seller_type(s) for s in state.seller_types)

    if state.price_min > 0:
        params["minPrice"] = str(state.price_min)
    if state.price_max < DEFAULT_MAX_PRICE:
        params["maxPrice"] = str(state.price_max)

    if state.builder:
        params["builder"] = state.builder
    if state.locality:
        params["locality"] = state.locality
    if state.seller_id:
        params["sellerId"] = state.seller_id
    if state.featured:
        params["isFeatured"] = "true"

    if offset and offset > 0:
        params["offset"] = str(offset)
    if limit is not None:
        params["limit"] = str(limit)
    return params
