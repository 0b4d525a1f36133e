class MarketplaceClientError(Exception):
    """Base class for marketplace API client failures."""


class ApiError(MarketplaceClientError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code, detail=None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API error {status_code}: {detail}")


class ApiConnectionError(MarketplaceClientError):
    """The request never got an answer (DNS, refused connection, timeout)."""
