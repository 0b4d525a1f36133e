import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from marketplace.permissions import IsOwnerOrReadOnly
from properties.serializers import PropertySerializer
from .models import Favorite, SavedSearch
from .serializers import FavoriteToggleSerializer, SavedSearchSerializer

logger = logging.getLogger(__name__)


class MyFavoritesView(APIView):
    """
    GET    /api/me/favorites/  favorite properties of the caller
    POST   /api/me/favorites/  {"property_id": <id>}  (idempotent)
    DELETE /api/me/favorites/  {"property_id": <id>}  (204 even if absent)
    """
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        favorites = (
            Favorite.objects.filter(user=request.user)
            .select_related("property__owner", "property__category", "property__subcategory")
            .prefetch_related("property__images")
        )
        properties = [fav.property for fav in favorites]
        return Response(PropertySerializer(properties, many=True, context={"request": request}).data)

    def post(self, request):
        serializer = FavoriteToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_id = serializer.validated_data["property_id"]
        _, created = Favorite.objects.get_or_create(user=request.user, property_id=property_id)
        if created:
            logger.info("Favorite added user_id=%s property_id=%s", request.user.id, property_id)
        return Response(
            {"property_id": property_id, "is_favorited": True},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    def delete(self, request):
        serializer = FavoriteToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        property_id = serializer.validated_data["property_id"]
        deleted, _ = Favorite.objects.filter(user=request.user, property_id=property_id).delete()
        if deleted:
            logger.info("Favorite removed user_id=%s property_id=%s", request.user.id, property_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SavedSearchCreateView(generics.CreateAPIView):
    """POST /api/saved-searches/ {"name": ..., "query": ..., "filters": {...}}"""

    serializer_class = SavedSearchSerializer
    permission_classes = [permissions.IsAuthenticated]

    def perform_create(self, serializer):
        saved = serializer.save(user=self.request.user)
        logger.info("Saved search created user_id=%s saved_search_id=%s", saved.user_id, saved.id)


class MySavedSearchesView(generics.ListAPIView):
    serializer_class = SavedSearchSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return SavedSearch.objects.filter(user=self.request.user)


class SavedSearchDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    PATCH/DELETE /api/saved-searches/<id>/
    Other users' searches are not found (404) rather than forbidden.
    """
    serializer_class = SavedSearchSerializer
    permission_classes = [permissions.IsAuthenticated, IsOwnerOrReadOnly]
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return SavedSearch.objects.filter(user=self.request.user)

    def perform_update(self, serializer):
        saved = serializer.save()
        logger.info("Saved search updated saved_search_id=%s alert_enabled=%s", saved.id, saved.alert_enabled)

    def perform_destroy(self, instance):
        logger.info("Saved search deleted saved_search_id=%s", instance.id)
        instance.delete()
