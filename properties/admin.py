from django.contrib import admin

from .models import Category, Property, PropertyImage, Subcategory

LAKH = 100_000
CRORE = 100 * LAKH


class PropertyPriceRangeFilter(admin.SimpleListFilter):
    title = "Price"
    parameter_name = "price_range"

    def lookups(self, request, model_admin):
        return (
            ("<50l", "< 50 Lakh"),
            ("50l-1cr", "50 Lakh - 1 Cr"),
            ("1cr-5cr", "1 Cr - 5 Cr"),
            (">5cr", "> 5 Cr"),
        )

    def queryset(self, request, queryset):
        val = self.value()
        if val == "<50l":
            return queryset.filter(price__lt=50 * LAKH)
        if val == "50l-1cr":
            return queryset.filter(price__gte=50 * LAKH, price__lte=CRORE)
        if val == "1cr-5cr":
            return queryset.filter(price__gt=CRORE, price__lte=5 * CRORE)
        if val == ">5cr":
            return queryset.filter(price__gt=5 * CRORE)
        return queryset


class BhkFilter(admin.SimpleListFilter):
    title = "BHK"
    parameter_name = "bhk"

    def lookups(self, request, model_admin):
        return (
            ("1", "1 BHK"),
            ("2", "2 BHK"),
            ("3", "3 BHK"),
            ("4+", "4+ BHK"),
        )

    def queryset(self, request, queryset):
        val = self.value()
        if val in {"1", "2", "3"}:
            return queryset.filter(bedrooms=int(val))
        if val == "4+":
            return queryset.filter(bedrooms__gte=4)
        return queryset


class PropertyImageInline(admin.TabularInline):
    model = PropertyImage
    extra = 0


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "id", "title", "owner", "city", "locality", "price", "bedrooms",
        "transaction_type", "status", "workflow_status", "is_featured", "views_count", "created_at",
    )
    list_select_related = ("owner",)
    search_fields = ("title", "description", "locality", "city", "owner__email", "owner__company_name")
    list_filter = (
        PropertyPriceRangeFilter,
        BhkFilter,
        "transaction_type",
        "property_type",
        "status",
        "is_featured",
        ("created_at", admin.DateFieldListFilter),
        "city",
    )
    inlines = [PropertyImageInline]
    ordering = ("-created_at",)
    date_hierarchy = "created_at"


class SubcategoryInline(admin.TabularInline):
    model = Subcategory
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [SubcategoryInline]
