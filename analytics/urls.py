from django.urls import path

from .views import PopularSearchesView, analytics_root

urlpatterns = [
    path("", analytics_root, name="analytics-root"),
    path("popular-searches/", PopularSearchesView.as_view(), name="popular-searches"),
]
