from django.conf import settings
from django.db import models


class SearchHistory(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, blank=True, null=True, related_name="search_history")
    # Canonical listings query string, e.g. "category=residential&bhk=2+BHK"
    search_query = models.CharField(max_length=1000, blank=True)
    filters = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["created_at"], name="search_history_created_idx"),
            models.Index(fields=["user", "created_at"], name="search_history_user_idx"),
        ]
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "search history"

    def __str__(self):
        return f"{self.search_query or '(all)'} ({self.user_id})"
