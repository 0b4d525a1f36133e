from django.conf import settings
from django.db import models


class Category(models.Model):
    slug = models.SlugField(max_length=80, unique=True)
    name = models.CharField(max_length=120)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name


class Subcategory(models.Model):
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="subcategories")
    slug = models.SlugField(max_length=80, unique=True)
    name = models.CharField(max_length=120)

    class Meta:
        ordering = ["category__name", "name"]
        verbose_name_plural = "subcategories"

    def __str__(self):
        return f"{self.category.name} / {self.name}"


class PropertyQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Property.Status.ACTIVE)


class Property(models.Model):
    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        PENDING = "pending", "Pending"
        ACTIVE = "active", "Active"
        SOLD = "sold", "Sold"
        RENTED = "rented", "Rented"
        EXPIRED = "expired", "Expired"
        REJECTED = "rejected", "Rejected"

    class WorkflowStatus(models.TextChoices):
        DRAFT = "draft", "Draft"
        SUBMITTED = "submitted", "Submitted"
        UNDER_REVIEW = "under_review", "Under review"
        APPROVED = "approved", "Approved"
        LIVE = "live", "Live"
        NEEDS_REAPPROVAL = "needs_reapproval", "Needs re-approval"
        REJECTED = "rejected", "Rejected"

    class PropertyType(models.TextChoices):
        APARTMENT = "apartment", "Apartment"
        VILLA = "villa", "Villa"
        PLOT = "plot", "Plot"
        COMMERCIAL = "commercial", "Commercial"
        FARMHOUSE = "farmhouse", "Farmhouse"
        PENTHOUSE = "penthouse", "Penthouse"

    class TransactionType(models.TextChoices):
        SALE = "sale", "Sale"
        RENT = "rent", "Rent"
        LEASE = "lease", "Lease"

    class ProjectStage(models.TextChoices):
        PRE_LAUNCH = "pre_launch", "Pre-launch"
        LAUNCH = "launch", "Launch"
        UNDER_CONSTRUCTION = "under_construction", "Under construction"
        READY_TO_MOVE = "ready_to_move", "Ready to move"

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="properties")
    title = models.CharField(max_length=255)
    slug = models.SlugField(max_length=280, blank=True)
    description = models.TextField(blank=True)

    property_type = models.CharField(max_length=20, choices=PropertyType.choices)
    transaction_type = models.CharField(max_length=10, choices=TransactionType.choices)
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name="properties")
    subcategory = models.ForeignKey(Subcategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="properties")
    project_stage = models.CharField(max_length=30, choices=ProjectStage.choices, blank=True)

    # Whole currency units (INR)
    price = models.PositiveBigIntegerField()
    area = models.PositiveIntegerField(help_text="Square feet")
    bedrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    bathrooms = models.PositiveSmallIntegerField(null=True, blank=True)
    age_of_property = models.PositiveSmallIntegerField(null=True, blank=True, help_text="Years")

    address = models.CharField(max_length=255)
    locality = models.CharField(max_length=120, blank=True)
    city = models.CharField(max_length=120)
    state = models.CharField(max_length=120)

    # Values of admin-defined form fields, keyed by field key
    custom_fields = models.JSONField(default=dict, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.DRAFT)
    workflow_status = models.CharField(max_length=20, choices=WorkflowStatus.choices, default=WorkflowStatus.DRAFT)
    is_featured = models.BooleanField(default=False)
    is_verified = models.BooleanField(default=False)
    views_count = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "properties"
        indexes = [
            models.Index(fields=["status", "transaction_type"], name="property_status_txn_idx"),
            models.Index(fields=["city"], name="property_city_idx"),
            models.Index(fields=["price"], name="property_price_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.city}) - ₹{self.price}"

    @property
    def seller_type(self):
        return self.owner.seller_type


class PropertyImage(models.Model):
    """Listing photos; files live in object storage, only URLs are kept here."""

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="images")
    url = models.URLField(max_length=500)
    caption = models.CharField(max_length=200, blank=True)
    is_primary = models.BooleanField(default=False)
    order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["order", "created_at"]
        indexes = [
            models.Index(fields=["property", "order"], name="property_image_order_idx"),
        ]

    def __str__(self):
        return f"Image for {self.property.title}"
