from django.contrib import admin

from .models import Favorite, SavedSearch


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "property", "created_at")
    list_select_related = ("user", "property")
    search_fields = ("user__email", "property__title")
    list_filter = (("created_at", admin.DateFieldListFilter),)
    ordering = ("-created_at",)


@admin.register(SavedSearch)
class SavedSearchAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "user", "query", "alert_enabled", "created_at")
    list_select_related = ("user",)
    search_fields = ("name", "query", "user__email")
    list_filter = ("alert_enabled", ("created_at", admin.DateFieldListFilter))
    ordering = ("-created_at",)
