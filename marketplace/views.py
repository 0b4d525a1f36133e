from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(["GET"])
@permission_classes([AllowAny])
def home(request, format=None):
    links = [
        {"label": "Admin", "url": "/admin/"},
        {"label": "JWT: Obtain Token", "url": "/api/token/"},
        {"label": "JWT: Refresh Token", "url": "/api/token/refresh/"},
        {"label": "Accounts", "url": "/api/accounts/"},
        {"label": "Properties", "url": "/api/properties/"},
        {"label": "My favorites", "url": "/api/me/favorites/"},
        {"label": "My saved searches", "url": "/api/me/saved-searches/"},
        {"label": "My search history", "url": "/api/me/search-history/"},
        {"label": "Analytics", "url": "/api/analytics/"},
        {"label": "Listings", "url": "/listings/"},
        {"label": "Buy", "url": "/buy/"},
        {"label": "Rent", "url": "/rent/"},
        {"label": "Lease", "url": "/lease/"},
        {"label": "Swagger UI", "url": "/api/docs/"},
        {"label": "Redoc", "url": "/api/redoc/"},
        {"label": "OpenAPI Schema (JSON)", "url": "/api/schema/"},
        {"label": "DRF Login/Logout", "url": "/api-auth/login/"},
    ]
    return Response({"links": links})
