import logging

from django.db.models import Count
from rest_framework import generics, permissions, status, views
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

from .models import SearchHistory
from .serializers import SearchHistorySerializer

logger = logging.getLogger(__name__)

MAX_POPULAR_LIMIT = 50


class MySearchHistoryView(generics.ListCreateAPIView):
    """
    GET  /api/me/search-history/  the caller's recent searches
    POST /api/me/search-history/  {"query": "...", "filters": {...}}
    DELETE /api/me/search-history/  clears it
    """
    serializer_class = SearchHistorySerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return SearchHistory.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        entry = serializer.save(user=self.request.user)
        logger.info("Search recorded user_id=%s query=%r", entry.user_id, entry.search_query)

    def delete(self, request, *args, **kwargs):
        deleted, _ = self.get_queryset().delete()
        logger.info("Search history cleared user_id=%s entries=%s", request.user.id, deleted)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PopularSearchesView(views.APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", 10))
        except ValueError:
            limit = 10
        limit = max(1, min(limit, MAX_POPULAR_LIMIT))
        qs = (
            SearchHistory.objects.exclude(search_query="")
            .values("search_query")
            .annotate(cnt=Count("id"))
            .order_by("-cnt", "search_query")[:limit]
        )
        data = [{"query": r["search_query"], "count": r["cnt"]} for r in qs]
        return Response(data)


@api_view(["GET"])
@permission_classes([AllowAny])
def analytics_root(request, format=None):
    return Response({
        "popular_searches": reverse("popular-searches", request=request, format=format),
        "my_search_history": reverse("my-search-history", request=request, format=format),
    })
