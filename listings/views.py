import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from analytics.models import SearchHistory
from favorites.models import Favorite
from properties.filters import PropertyFilter
from properties.models import Property
from properties.serializers import PropertySerializer
from .api_query import PATH_TRANSACTION_LABELS
from .pipeline import run_listing_query

logger = logging.getLogger(__name__)


def make_queryset_fetch(request):
    """
    Fetch callable for run_listing_query that answers API params
    in-process, through the same filter set as GET /api/properties/.
    """
    def fetch(params):
        params = dict(params)
        offset = int(params.pop("offset", 0))
        limit = params.pop("limit", None)

        queryset = (
            Property.objects.active()
            .select_related("owner", "category", "subcategory")
            .prefetch_related("images")
        )
        filterset = PropertyFilter(data=params, queryset=queryset, request=request)
        if not filterset.is_valid():
            logger.info("Listings filter rejected errors=%s", dict(filterset.errors))
            return []
        queryset = filterset.qs
        if limit is not None:
            queryset = queryset[offset:offset + int(limit)]
        elif offset:
            queryset = queryset[offset:]
        return PropertySerializer(queryset, many=True, context={"request": request}).data

    return fetch


@api_view(["GET"])
@permission_classes([AllowAny])
def listings_page(request, format=None):
    """
    Listings page data for /listings/, /buy/, /rent/ and /lease/.
    The URL query string carries every filter plus page and sort.
    """
    result = run_listing_query(request.GET, make_queryset_fetch(request), path=request.path)
    state = result.query.state
    page = result.page

    favorite_ids = set()
    if request.user.is_authenticated:
        favorite_ids = set(Favorite.objects.filter(user=request.user).values_list("property_id", flat=True))
        if not state.is_default():
            SearchHistory.objects.create(
                user=request.user, search_query=result.query_string, filters=state.to_dict()
            )

    results = []
    for row in page.items:
        row = dict(row)
        if request.user.is_authenticated:
            row["is_favorited"] = row["id"] in favorite_ids
        results.append(row)

    return Response({
        "query": result.query_string,
        "filters": state.to_dict(),
        "transaction": PATH_TRANSACTION_LABELS.get(result.transaction),
        "page": page.page,
        "sort": result.query.sort,
        "count": page.total_count,
        "total_pages": page.total_pages,
        "page_size": page.page_size,
        "has_previous": page.has_previous,
        "has_next": page.has_next,
        "results": results,
    })
