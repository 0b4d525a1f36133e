import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from properties.models import Category, Property, Subcategory


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def user_factory(db):
    def create_user(email, password="Testpass123", role="buyer", **extra):
        User = get_user_model()
        extra.setdefault("first_name", "Test")
        extra.setdefault("last_name", "User")
        return User.objects.create_user(email=email, password=password, role=role, **extra)
    return create_user


@pytest.fixture
def seller(user_factory):
    return user_factory(
        "seller@example.com", role="seller", seller_type="builder", company_name="Skyline Builders"
    )


@pytest.fixture
def buyer(user_factory):
    return user_factory("buyer@example.com")


@pytest.fixture
def residential(db):
    category = Category.objects.create(slug="residential", name="Residential")
    Subcategory.objects.create(category=category, slug="flats", name="Flats")
    return category


@pytest.fixture
def property_factory(db):
    def create_property(owner, **kw):
        defaults = dict(
            title="Test Property",
            description="Nice place",
            property_type=Property.PropertyType.APARTMENT,
            transaction_type=Property.TransactionType.SALE,
            price=5_000_000,
            area=1200,
            bedrooms=2,
            bathrooms=2,
            address="12 MG Road",
            locality="Indiranagar",
            city="Bengaluru",
            state="Karnataka",
            status=Property.Status.ACTIVE,
        )
        defaults.update(kw)
        return Property.objects.create(owner=owner, **defaults)
    return create_property
