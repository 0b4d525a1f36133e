from django.urls import path

from .views import SavedSearchCreateView, SavedSearchDetailView

# /api/me/favorites/ and /api/me/saved-searches/ are routed in marketplace.urls
urlpatterns = [
    path("", SavedSearchCreateView.as_view(), name="saved-search-create"),
    path("<int:pk>/", SavedSearchDetailView.as_view(), name="saved-search-detail"),
]
