from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView

from analytics.views import MySearchHistoryView
from favorites.views import MyFavoritesView, MySavedSearchesView
from .views import home

urlpatterns = [
    # Home page with links
    path("", home, name="home"),

    # Admin
    path("admin/", admin.site.urls),

    # Auth (JWT)
    path("api/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # DRF browsable API login/logout
    path("api-auth/", include("rest_framework.urls")),

    # Apps
    path("api/accounts/", include("accounts.urls")),
    path("api/properties/", include("properties.urls")),
    path("api/saved-searches/", include("favorites.urls")),
    path("api/analytics/", include("analytics.urls")),

    # Current user's collections
    path("api/me/favorites/", MyFavoritesView.as_view(), name="my-favorites"),
    path("api/me/saved-searches/", MySavedSearchesView.as_view(), name="my-saved-searches"),
    path("api/me/search-history/", MySearchHistoryView.as_view(), name="my-search-history"),

    # Listings pages (/listings/, /buy/, /rent/, /lease/)
    path("", include("listings.urls")),

    # OpenAPI schema + Swagger UI + Redoc
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
