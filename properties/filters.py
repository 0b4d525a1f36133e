import re

import django_filters
from django.db.models import Q

from .models import Property

BHK_VALUE_RE = re.compile(r"^(\d+)(\+?)$")

# The listings "4+ BHK" choice is sent as "5+", the top bucket
BHK_TOP_BUCKET = "5+"
BHK_TOP_BUCKET_MIN = 4


def _split_csv(value):
    return [part.strip() for part in (value or "").split(",") if part.strip()]


class PropertyFilter(django_filters.FilterSet):
    """
    Query parameters of GET /api/properties/.
    The names match what listings.api_query.build_api_params sends.
    """

    transactionType = django_filters.CharFilter(method="filter_csv", field_name="transaction_type")
    category = django_filters.CharFilter(method="filter_category")
    subcategories = django_filters.CharFilter(method="filter_csv", field_name="subcategory__slug")
    projectStages = django_filters.CharFilter(method="filter_csv", field_name="project_stage")
    bhk = django_filters.CharFilter(method="filter_bhk")
    sellerType = django_filters.CharFilter(method="filter_seller_type")
    minPrice = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    maxPrice = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    builder = django_filters.CharFilter(method="filter_builder")
    locality = django_filters.CharFilter(method="filter_locality")
    sellerId = django_filters.NumberFilter(field_name="owner_id")
    isFeatured = django_filters.BooleanFilter(field_name="is_featured")

    class Meta:
        model = Property
        fields = [
            "transactionType", "category", "subcategories", "projectStages",
            "bhk", "sellerType", "minPrice", "maxPrice",
            "builder", "locality", "sellerId", "isFeatured",
        ]

    def filter_csv(self, queryset, name, value):
        values = [v.lower() for v in _split_csv(value)]
        if not values:
            return queryset
        return queryset.filter(**{f"{name}__in": values})

    def filter_category(self, queryset, name, value):
        # Singular and plural slugs match each other ("apartment" and "apartments")
        value = value.strip().lower()
        if not value:
            return queryset
        stem = value[:-1] if value.endswith("s") else value
        return queryset.filter(Q(category__slug__iexact=stem) | Q(category__slug__iexact=stem + "s"))

    def filter_bhk(self, queryset, name, value):
        # "2" exact bedrooms, "3+" at least three
        condition = Q()
        for part in _split_csv(value):
            match = BHK_VALUE_RE.match(part)
            if not match:
                continue
            count = int(match.group(1))
            if part == BHK_TOP_BUCKET:
                condition |= Q(bedrooms__gte=BHK_TOP_BUCKET_MIN)
            elif match.group(2):
                condition |= Q(bedrooms__gte=count)
            else:
                condition |= Q(bedrooms=count)
        if not condition:
            return queryset
        return queryset.filter(condition)

    def filter_seller_type(self, queryset, name, value):
        values = {v.lower() for v in _split_csv(value)}
        if "corporate" in values:
            values.discard("corporate")
            values.add("builder")
        if not values:
            return queryset
        return queryset.filter(owner__seller_type__in=values)

    def filter_builder(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(owner__company_name__icontains=value)
            | Q(owner__first_name__icontains=value)
            | Q(owner__last_name__icontains=value)
        )

    def filter_locality(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(locality__icontains=value) | Q(address__icontains=value) | Q(city__icontains=value)
        )
