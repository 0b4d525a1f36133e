PAGE_SIZE = 20

# Upper end of the price slider (5 Cr); a max at this value means "no upper bound"
DEFAULT_MAX_PRICE = 50_000_000

# Rows requested from /api/properties/ per request; a listings load keeps
# requesting the next window until one comes back short
FETCH_LIMIT = 500
MAX_FETCH_WINDOWS = 40

SORT_NEWEST = "newest"
SORT_PRICE_LOW = "price-low"
SORT_PRICE_HIGH = "price-high"
SORT_FEATURED = "featured"
SORT_OPTIONS = (SORT_NEWEST, SORT_PRICE_LOW, SORT_PRICE_HIGH, SORT_FEATURED)
DEFAULT_SORT = SORT_NEWEST

TRANSACTION_TYPES = ("sale", "rent", "lease")
# Accepted on decode, stored as the canonical member
TRANSACTION_ALIASES = {"buy": "sale"}

PROJECT_STAGES = ("pre_launch", "launch", "under_construction", "ready_to_move")
SELLER_TYPES = ("Individual", "Broker", "Builder", "Corporate")
PROPERTY_AGE_BUCKETS = ("new", "1-5", "5+")

ALL_CATEGORIES = "all"
