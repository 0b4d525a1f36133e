from django.urls import path

from .views import listings_page

urlpatterns = [
    path("listings/", listings_page, name="listings"),
    path("buy/", listings_page, name="listings-buy"),
    path("rent/", listings_page, name="listings-rent"),
    path("lease/", listings_page, name="listings-lease"),
]
