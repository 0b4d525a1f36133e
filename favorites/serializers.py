from rest_framework import serializers

from properties.models import Property
from .models import SavedSearch


class FavoriteToggleSerializer(serializers.Serializer):
    property_id = serializers.IntegerField()

    def validate_property_id(self, value):
        if not Property.objects.filter(pk=value).exists():
            raise serializers.ValidationError("Property not found.")
        return value


class SavedSearchSerializer(serializers.ModelSerializer):
    class Meta:
        model = SavedSearch
        fields = ["id", "name", "query", "filters", "alert_enabled", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value

    def validate_filters(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("filters must be an object.")
        return value
