from django.conf import settings
from django.db import models

from properties.models import Property


class Favorite(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="favorites")
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="favorited_by")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["user", "property"], name="unique_favorite_per_user"),
        ]

    def __str__(self):
        return f"Favorite p#{self.property_id} by u#{self.user_id}"


class SavedSearch(models.Model):
    """A named listings query the user can re-run (and get alerts for)."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="saved_searches")
    name = models.CharField(max_length=120)
    # Canonical listings query string
    query = models.CharField(max_length=1000, blank=True)
    filters = models.JSONField(default=dict, blank=True)
    alert_enabled = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "saved searches"

    def __str__(self):
        return f"{self.name} ({self.user_id})"
