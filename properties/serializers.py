from rest_framework import serializers

from .models import Category, Property, PropertyImage, Subcategory


class PropertyImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = PropertyImage
        fields = ["id", "url", "caption", "is_primary", "order", "created_at"]
        read_only_fields = ["id", "created_at"]


class PropertySerializer(serializers.ModelSerializer):
    """
    Row shape consumed by the listings refinement pass: snake_case keys,
    category/subcategory as slugs, seller_type taken from the owner.
    """
    owner_id = serializers.IntegerField(source="owner.id", read_only=True)
    seller_type = serializers.CharField(source="owner.seller_type", read_only=True)
    builder_name = serializers.CharField(source="owner.company_name", read_only=True)
    category = serializers.SlugRelatedField(
        slug_field="slug", queryset=Category.objects.all(), required=False, allow_null=True
    )
    subcategory = serializers.SlugRelatedField(
        slug_field="slug", queryset=Subcategory.objects.all(), required=False, allow_null=True
    )
    images = PropertyImageSerializer(many=True, read_only=True)
    main_image_url = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            "id", "title", "slug", "description",
            "property_type", "transaction_type", "category", "subcategory", "project_stage",
            "price", "area", "bedrooms", "bathrooms", "age_of_property",
            "address", "locality", "city", "state", "custom_fields",
            "owner_id", "seller_type", "builder_name",
            "status", "workflow_status", "is_featured", "is_verified", "views_count",
            "created_at", "updated_at", "images", "main_image_url",
        ]
        read_only_fields = [
            "id", "owner_id", "seller_type", "builder_name", "workflow_status",
            "is_featured", "is_verified", "views_count", "created_at", "updated_at",
            "images", "main_image_url",
        ]

    def get_main_image_url(self, obj):
        images = list(obj.images.all())
        for image in images:
            if image.is_primary:
                return image.url
        return images[0].url if images else None

    def validate_price(self, value):
        if value <= 0:
            raise serializers.ValidationError("The price should be > 0.")
        return value

    def validate_custom_fields(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("custom_fields must be an object.")
        return value

    def validate(self, attrs):
        category = attrs.get("category", getattr(self.instance, "category", None))
        subcategory = attrs.get("subcategory", getattr(self.instance, "subcategory", None))
        if subcategory is not None and category is not None and subcategory.category_id != category.id:
            raise serializers.ValidationError({"subcategory": "Subcategory does not belong to the category."})
        return attrs

    def create(self, validated_data):
        user = self.context["request"].user
        return Property.objects.create(owner=user, **validated_data)
