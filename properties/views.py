import logging

from django.db.models import F
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import decorators, permissions, response, viewsets
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.pagination import LimitOffsetPagination

from marketplace.permissions import IsOwnerOrReadOnly, IsSeller
from .filters import PropertyFilter
from .models import Property
from .serializers import PropertySerializer

logger = logging.getLogger(__name__)


class PropertyLimitOffsetPagination(LimitOffsetPagination):
    default_limit = None
    max_limit = 500


class PublicPropertyViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Public catalogue of active listings:
    - GET /api/properties/ (list), newest first; ?limit=&offset= paginate
    - GET /api/properties/{id}/ (retrieve), bumps views_count
    """
    serializer_class = PropertySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = PropertyLimitOffsetPagination
    filterset_class = PropertyFilter
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    search_fields = ["title", "description", "locality", "city"]
    ordering_fields = ["price", "created_at", "views_count"]
    ordering = ["-created_at", "-id"]

    def get_queryset(self):
        return (
            Property.objects.active()
            .select_related("owner", "category", "subcategory")
            .prefetch_related("images")
        )

    def retrieve(self, request, *args, **kwargs):
        obj = self.get_object()
        Property.objects.filter(pk=obj.pk).update(views_count=F("views_count") + 1)
        obj.refresh_from_db(fields=["views_count"])
        return response.Response(self.get_serializer(obj).data)


class SellerPropertyViewSet(viewsets.ModelViewSet):
    """
    Seller's own listings under /api/properties/mine/.
    Every status is visible here; other sellers' listings are not.
    """
    serializer_class = PropertySerializer
    permission_classes = [permissions.IsAuthenticated, IsSeller, IsOwnerOrReadOnly]
    filter_backends = [SearchFilter, OrderingFilter]
    search_fields = ["title", "description", "locality", "city"]
    ordering_fields = ["price", "created_at", "views_count"]
    ordering = ["-created_at", "-id"]

    def get_queryset(self):
        return (
            Property.objects.filter(owner=self.request.user)
            .select_related("owner", "category", "subcategory")
            .prefetch_related("images")
        )

    def perform_create(self, serializer):
        prop = serializer.save()  # owner is set in serializer.create
        logger.info("Property created property_id=%s owner_id=%s", prop.id, prop.owner_id)

    def perform_destroy(self, instance):
        logger.info("Property deleted property_id=%s owner_id=%s", instance.id, instance.owner_id)
        instance.delete()

    @decorators.action(detail=True, methods=["post"])
    def toggle_status(self, request, pk=None):
        obj = self.get_object()
        old_status = obj.status
        obj.status = obj.Status.DRAFT if obj.status == obj.Status.ACTIVE else obj.Status.ACTIVE
        obj.save(update_fields=["status", "updated_at"])
        logger.info("Property status changed property_id=%s %s->%s", obj.id, old_status, obj.status)
        return response.Response({"old_status": old_status, "new_status": obj.status})
