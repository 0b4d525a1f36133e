import logging
from dataclasses import dataclass

from .api_query import build_api_params, transaction_for_path
from .constants import FETCH_LIMIT, MAX_FETCH_WINDOWS, PAGE_SIZE
from .pagination import Page, paginate
from .refinement import refine, sort_rows
from .url_query import ListingQuery, decode_query

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingResult:
    query: ListingQuery
    transaction: object  # route segment or None
    api_params: dict
    page: Page

    @property
    def query_string(self):
        return self.query.encode()


def fetch_all(fetch, state, transaction=None, fetch_limit=None):
    """
    Fetch every matching row, `fetch_limit` rows per request.

    Windows are requested with a growing offset until one comes back short.
    Returns (rows, params of the first request).
    """
    fetch_limit = fetch_limit or FETCH_LIMIT
    first_params = None
    rows = []
    for window in range(MAX_FETCH_WINDOWS):
        params = build_api_params(
            state, transaction=transaction, offset=window * fetch_limit, limit=fetch_limit
        )
        if first_params is None:
            first_params = params
        batch = list(fetch(params))
        rows.extend(batch)
        if len(batch) < fetch_limit:
            break
    else:
        logger.warning("Listings fetch stopped after %s windows rows=%s", MAX_FETCH_WINDOWS, len(rows))
    return rows, first_params


def run_listing_query(query, fetch, path=None, fetch_limit=None, page_size=PAGE_SIZE):
    """
    One listings load: decode the URL query, fetch rows for it,
    refine, sort and paginate.

    `fetch` takes the API params dict and returns a list of row dicts.
    Errors raised by `fetch` propagate to the caller.
    """
    query = decode_query(query)
    transaction = transaction_for_path(path)
    rows, params = fetch_all(fetch, query.state, transaction=transaction, fetch_limit=fetch_limit)

    refined = sort_rows(refine(rows, query.state, transaction=transaction), query.sort)
    page = paginate(refined, query.page, page_size)

    logger.debug(
        "Listings load fetched=%s refined=%s page=%s/%s params=%s",
        len(rows), page.total_count, page.page, page.total_pages, params,
    )
    return ListingResult(query=query, transaction=transaction, api_params=params, page=page)
