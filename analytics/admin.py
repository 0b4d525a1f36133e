from django.contrib import admin

from .models import SearchHistory


@admin.register(SearchHistory)
class SearchHistoryAdmin(admin.ModelAdmin):
    list_display = ("id", "search_query", "user", "created_at")
    list_select_related = ("user",)
    search_fields = ("search_query", "user__email")
    list_filter = (("created_at", admin.DateFieldListFilter),)
    ordering = ("-created_at",)
    date_hierarchy = "created_at"
