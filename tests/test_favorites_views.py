import logging

import pytest

from favorites.models import Favorite

URL = "/api/me/favorites/"


@pytest.mark.django_db
def test_anonymous_favorites_are_unauthorized(api_client):
    assert api_client.get(URL).status_code == 401
    assert api_client.post(URL, {"property_id": 1}, format="json").status_code == 401


@pytest.mark.django_db
def test_add_is_idempotent(api_client, buyer, seller, property_factory, caplog):
    caplog.set_level(logging.INFO, logger="favorites.views")
    prop = property_factory(seller)
    api_client.force_authenticate(user=buyer)

    first = api_client.post(URL, {"property_id": prop.id}, format="json")
    assert first.status_code == 201
    assert first.json() == {"property_id": prop.id, "is_favorited": True}

    second = api_client.post(URL, {"property_id": prop.id}, format="json")
    assert second.status_code == 200
    assert Favorite.objects.filter(user=buyer, property=prop).count() == 1

    added = [r for r in caplog.records if "Favorite added" in r.getMessage()]
    assert len(added) == 1


@pytest.mark.django_db
def test_list_returns_property_rows(api_client, buyer, seller, property_factory):
    older = property_factory(seller, title="Older")
    newer = property_factory(seller, title="Newer")
    property_factory(seller, title="Not liked")
    api_client.force_authenticate(user=buyer)
    api_client.post(URL, {"property_id": older.id}, format="json")
    api_client.post(URL, {"property_id": newer.id}, format="json")

    data = api_client.get(URL).json()
    assert [row["id"] for row in data] == [newer.id, older.id]
    assert data[0]["title"] == "Newer"


@pytest.mark.django_db
def test_delete_is_204_even_when_missing(api_client, buyer, seller, property_factory):
    prop = property_factory(seller)
    Favorite.objects.create(user=buyer, property=prop)
    api_client.force_authenticate(user=buyer)

    assert api_client.delete(URL, {"property_id": prop.id}, format="json").status_code == 204
    assert not Favorite.objects.filter(user=buyer).exists()
    assert api_client.delete(URL, {"property_id": prop.id}, format="json").status_code == 204


@pytest.mark.django_db
def test_unknown_property_is_rejected(api_client, buyer):
    api_client.force_authenticate(user=buyer)
    resp = api_client.post(URL, {"property_id": 999}, format="json")
    assert resp.status_code == 400
    assert "property_id" in resp.json()


@pytest.mark.django_db
def test_favorites_are_per_user(api_client, buyer, user_factory, seller, property_factory):
    prop = property_factory(seller)
    other = user_factory("other-buyer@example.com")
    Favorite.objects.create(user=other, property=prop)

    api_client.force_authenticate(user=buyer)
    assert api_client.get(URL).json() == []
