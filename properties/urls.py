from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import PublicPropertyViewSet, SellerPropertyViewSet

# Seller's own listings
seller_router = SimpleRouter()
seller_router.register(r"", SellerPropertyViewSet, basename="my-property")

# Public read-only catalogue
public_router = SimpleRouter()
public_router.register(r"", PublicPropertyViewSet, basename="property")

urlpatterns = [
    path("mine/", include(seller_router.urls)),
    path("", include(public_router.urls)),
]
