import logging
import json
import time
from django.utils.deprecation import MiddlewareMixin

from listings.api_query import transaction_for_path
from listings.url_query import decode_query

requests_logger = logging.getLogger("requests")
fallback_logger = logging.getLogger(__name__)

SENSITIVE_PATHS = (
    "/api/token/",
    "/api/token/refresh/",
    "/api/accounts/register/",
    "/api/accounts/change-password/",
)

SKIPPED_PREFIXES = ("/static/", "/admin/")

LISTINGS_PATHS = ("/listings/", "/buy/", "/rent/", "/lease/")


def listing_summary(request, response):
    """Canonical listings query of a listings page request, with the result size."""
    query = decode_query(request.GET)
    summary = {
        "query": query.encode(),
        "page": query.page,
        "sort": query.sort,
        "transaction": transaction_for_path(request.path),
    }
    data = getattr(response, "data", None)
    if isinstance(data, dict) and "count" in data:
        summary["count"] = data["count"]
    return summary


class RequestLogMiddleware(MiddlewareMixin):
    """
    Logs incoming requests and responses:
    - method, path, status, user, duration, raw query string
    - for listings pages also the decoded listings query (canonical form, page, sort)
    - does not log body and tokens, short form for auth endpoints
    """

    def process_request(self, request):
        request._start_time = time.monotonic()

    def process_response(self, request, response):
        try:
            start = getattr(request, "_start_time", None)
            duration_ms = int((time.monotonic() - start) * 1000) if start else None

            path = request.path
            if path.startswith(SKIPPED_PREFIXES):
                return response

            user_id = getattr(getattr(request, "user", None), "id", None)
            user_repr = f"user_id={user_id}" if user_id else "anon"
            status = getattr(response, "status_code", "-")

            if path.startswith(SENSITIVE_PATHS):
                requests_logger.info(
                    "HTTP %s %s -> %s [%s] %sms",
                    request.method,
                    path,
                    status,
                    user_repr,
                    duration_ms if duration_ms is not None else "-",
                )
                return response

            payload = {
                "method": request.method,
                "path": path,
                "status": status,
                "user": user_repr,
                "duration_ms": duration_ms,
                "query": request.META.get("QUERY_STRING", ""),
            }
            if path in LISTINGS_PATHS and request.method == "GET":
                payload["listing"] = listing_summary(request, response)
            requests_logger.info(json.dumps(payload, ensure_ascii=False))
        except Exception as e:
            # Never break a response due to logging
            fallback_logger.warning("Failed to log request/response: %s", e)
        return response
