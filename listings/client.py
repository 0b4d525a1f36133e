"""
HTTP client for the marketplace API and a listings session built on it.

MarketplaceClient is a thin wrapper over a requests.Session: it attaches
the bearer token, raises ApiError for non-2xx answers and
ApiConnectionError when no answer arrives. It never retries on its own.

ListingsSession keeps what a listings screen needs between loads: the
current result, the favorites set, a retryable error and user-visible
notifications.
"""
import logging
import threading
from dataclasses import dataclass

import requests
from django.conf import settings

from .exceptions import ApiConnectionError, ApiError, MarketplaceClientError
from .pipeline import run_listing_query
from .url_query import decode_query

logger = logging.getLogger(__name__)


class MarketplaceClient:
    def __init__(self, base_url=None, token=None, timeout=None, session=None):
        self.base_url = (base_url or settings.MARKETPLACE_API_URL).rstrip("/")
        self.token = token
        self.timeout = timeout if timeout is not None else settings.MARKETPLACE_API_TIMEOUT
        self.session = session or requests.Session()

    @property
    def is_authenticated(self):
        return bool(self.token)

    def _headers(self):
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method, path, params=None, json=None):
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method, url, params=params, json=json, headers=self._headers(), timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Marketplace API unreachable method=%s path=%s error=%s", method, path, exc)
            raise ApiConnectionError(str(exc)) from exc

        if resp.status_code >= 400:
            detail = _error_detail(resp)
            if resp.status_code >= 500:
                logger.warning("Marketplace API error method=%s path=%s status=%s", method, path, resp.status_code)
            raise ApiError(resp.status_code, detail)

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    # Listings
    def get_properties(self, params=None):
        data = self._request("GET", "/api/properties/", params=params)
        if isinstance(data, dict):
            return list(data.get("results") or [])
        return list(data or [])

    # Favorites
    def get_favorites(self):
        """Favorite properties of the current user; an unauthorized answer means none."""
        try:
            data = self._request("GET", "/api/me/favorites/")
        except ApiError as exc:
            if exc.status_code == 401:
                return []
            raise
        return list(data or [])

    def get_favorite_ids(self):
        return {row["id"] for row in self.get_favorites() if "id" in row}

    def add_favorite(self, property_id):
        return self._request("POST", "/api/me/favorites/", json={"property_id": property_id})

    def remove_favorite(self, property_id):
        return self._request("DELETE", "/api/me/favorites/", json={"property_id": property_id})

    # Searches
    def record_search(self, query, filters):
        return self._request("POST", "/api/me/search-history/", json={"query": query, "filters": filters})

    def save_search(self, name, query, filters, alert_enabled=False):
        payload = {"name": name, "query": query, "filters": filters, "alert_enabled": alert_enabled}
        return self._request("POST", "/api/saved-searches/", json=payload)


def _error_detail(resp):
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason
    if isinstance(data, dict):
        return data.get("detail") or data.get("error") or data
    return data


@dataclass(frozen=True)
class Notification:
    title: str
    description: str = ""
    level: str = "info"


class ListingsSession:
    """
    State of one listings screen (e.g. path '/rent').

    Loads may overlap; only the most recently started one is applied,
    results of superseded loads are dropped.
    """

    def __init__(self, client, path="/listings"):
        self.client = client
        self.path = path
        self.result = None
        self.last_error = None
        self.notifications = []
        self._last_query = None
        self._generation = 0
        self._favorite_ids = None
        self._pending_favorites = set()
        self._lock = threading.Lock()

    # Listings
    @property
    def can_retry(self):
        return self.last_error is not None

    def load(self, query):
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._last_query = query

        try:
            result = run_listing_query(query, self.client.get_properties, path=self.path)
        except MarketplaceClientError as exc:
            with self._lock:
                if generation != self._generation:
                    return None
                self.last_error = exc
            logger.warning("Listings load failed path=%s error=%s", self.path, exc)
            return None

        with self._lock:
            superseded = generation != self._generation
            if not superseded:
                self.result = result
                self.last_error = None
        if superseded:
            logger.debug("Discarding superseded listings load generation=%s", generation)
            return None

        if not result.query.state.is_default():
            self._record_search(result)
        return result

    def retry(self):
        """Re-issue the last load, typically after a network failure."""
        if self._last_query is None:
            return None
        return self.load(self._last_query)

    def _record_search(self, result):
        if not self.client.is_authenticated:
            return
        try:
            self.client.record_search(result.query_string, result.query.state.to_dict())
        except MarketplaceClientError as exc:
            self.notify("Could not save search history", str(exc), level="error")

    # Favorites
    def _load_favorite_ids(self):
        """Cached favorite ids, or None when they could not be fetched."""
        if self._favorite_ids is None:
            try:
                self._favorite_ids = set(self.client.get_favorite_ids())
            except MarketplaceClientError as exc:
                logger.warning("Favorites fetch failed error=%s", exc)
                return None
        return self._favorite_ids

    @property
    def favorite_ids(self):
        ids = self._load_favorite_ids()
        return set() if ids is None else ids

    def is_favorited(self, property_id):
        return property_id in self.favorite_ids

    def is_toggle_pending(self, property_id):
        return property_id in self._pending_favorites

    def toggle_favorite(self, property_id):
        """
        Add or remove a favorite. Returns False when the request was not
        sent (a toggle for this property is still pending, or the current
        favorites could not be loaded) or failed.
        """
        with self._lock:
            if property_id in self._pending_favorites:
                return False
            self._pending_favorites.add(property_id)

        try:
            ids = self._load_favorite_ids()
            if ids is None:
                self.notify("Failed to update favorites", "Could not load your favorites.", level="error")
                return False
            adding = property_id not in ids
            if adding:
                self.client.add_favorite(property_id)
            else:
                self.client.remove_favorite(property_id)
        except MarketplaceClientError as exc:
            logger.warning("Favorite toggle failed property_id=%s error=%s", property_id, exc)
            self.notify("Failed to update favorites", _describe(exc), level="error")
            return False
        else:
            self.notify("Added to favorites" if adding else "Removed from favorites")
            return True
        finally:
            with self._lock:
                self._pending_favorites.discard(property_id)
            # Refetched on next access
            self._favorite_ids = None

    # Saved searches
    def save_search(self, name, alert_enabled=False):
        query = decode_query(self._last_query)
        try:
            saved = self.client.save_search(name, query.encode(), query.state.to_dict(), alert_enabled)
        except MarketplaceClientError as exc:
            logger.warning("Save search failed error=%s", exc)
            self.notify("Failed to save search", _describe(exc), level="error")
            return None
        self.notify("Search saved", name)
        return saved

    def notify(self, title, description="", level="info"):
        self.notifications.append(Notification(title=title, description=description, level=level))


def _describe(exc):
    if isinstance(exc, ApiError) and exc.status_code == 401:
        return "Please log in to continue."
    if isinstance(exc, ApiError):
        return str(exc.detail or "Please try again.")
    return "Please check your connection and try again."
