from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("id", "email", "first_name", "last_name", "role", "seller_type", "is_staff", "is_active", "date_joined")
    list_filter = ("role", "seller_type", "is_staff", "is_superuser", "is_active")
    search_fields = ("email", "first_name", "last_name", "company_name")
    readonly_fields = ("last_login", "date_joined",)
    ordering = ("email", "-date_joined",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Personal info", {"fields": ("first_name", "last_name", "phone_number", "profile_image_url")}),
        ("Marketplace", {"fields": ("role", "seller_type", "company_name")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "first_name", "last_name", "role", "password1", "password2")}),
    )
