from rest_framework import serializers

from .models import SearchHistory


class SearchHistorySerializer(serializers.ModelSerializer):
    # Clients send the canonical query as "query"
    query = serializers.CharField(source="search_query", required=False, allow_blank=True, max_length=1000)

    class Meta:
        model = SearchHistory
        fields = ["id", "query", "filters", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_filters(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("filters must be an object.")
        return value
