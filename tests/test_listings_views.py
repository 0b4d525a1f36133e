import pytest

from analytics.models import SearchHistory
from favorites.models import Favorite
from properties.models import Property


def _ids(resp):
    return [row["id"] for row in resp.json()["results"]]


@pytest.fixture
def catalogue(seller, user_factory, property_factory, residential):
    broker = user_factory("broker@example.com", role="seller", seller_type="broker")
    return {
        "flat": property_factory(seller, title="2BHK flat", bedrooms=2, price=5_000_000, category=residential),
        "rental": property_factory(
            broker, title="3BHK rental", transaction_type="rent", bedrooms=3, price=30_000,
            locality="Whitefield", age_of_property=7,
        ),
        "villa": property_factory(
            seller, title="Villa", property_type="villa", bedrooms=4, price=12_000_000,
            is_featured=True, age_of_property=3,
        ),
        "draft": property_factory(seller, title="Draft", status=Property.Status.DRAFT),
    }


@pytest.mark.django_db
def test_listings_default_view(api_client, catalogue):
    resp = api_client.get("/listings/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["count"] == 3
    assert data["page"] == 1
    assert data["sort"] == "newest"
    assert data["total_pages"] == 1
    assert data["page_size"] == 20
    assert data["query"] == ""
    assert data["transaction"] is None
    # newest first, drafts hidden
    assert _ids(resp) == [catalogue["villa"].id, catalogue["rental"].id, catalogue["flat"].id]
    assert "is_favorited" not in data["results"][0]


@pytest.mark.django_db
def test_rent_route_filters_by_transaction(api_client, catalogue):
    resp = api_client.get("/rent/")
    assert resp.json()["transaction"] == "Rent"
    assert _ids(resp) == [catalogue["rental"].id]


@pytest.mark.django_db
def test_buy_route_with_bhk_and_sort(api_client, catalogue):
    resp = api_client.get("/buy/", {"bhk": "2 BHK,3+ BHK", "sort": "price-high"})
    data = resp.json()
    assert data["transaction"] == "Sale"
    assert _ids(resp) == [catalogue["villa"].id, catalogue["flat"].id]
    assert data["query"] == "bhk=2%20BHK,3%2B%20BHK&sort=price-high"


@pytest.mark.django_db
def test_category_and_seller_type(api_client, catalogue):
    assert _ids(api_client.get("/listings/", {"category": "residential"})) == [catalogue["flat"].id]
    assert _ids(api_client.get("/listings/", {"sellerTypes": "Broker"})) == [catalogue["rental"].id]
    assert _ids(api_client.get("/listings/", {"sellerTypes": "Corporate"})) == [
        catalogue["villa"].id, catalogue["flat"].id,
    ]


@pytest.mark.django_db
def test_refinement_only_filters(api_client, catalogue):
    # Age is applied after the fetch
    assert _ids(api_client.get("/listings/", {"propertyAge": "1-5"})) == [catalogue["villa"].id]
    assert _ids(api_client.get("/listings/", {"propertyAge": "new"})) == [catalogue["flat"].id]
    assert _ids(api_client.get("/listings/", {"locality": "whitefield"})) == [catalogue["rental"].id]
    assert _ids(api_client.get("/listings/", {"featured": "true"})) == [catalogue["villa"].id]


@pytest.mark.django_db
def test_dynamic_filters_over_custom_fields(api_client, seller, property_factory):
    east = property_factory(seller, custom_fields={"facing": "east", "floor": 3})
    property_factory(seller, custom_fields={"facing": "west", "floor": 12})
    property_factory(seller)

    resp = api_client.get("/listings/", {"dynamicFilters": '{"facing":["east","north"]}'})
    assert _ids(resp) == [east.id]

    resp = api_client.get("/listings/", {"dynamicFilters": '{"floor_max":"5"}'})
    assert _ids(resp) == [east.id]


@pytest.mark.django_db
def test_pagination_pages_of_twenty(api_client, seller, property_factory):
    for n in range(25):
        property_factory(seller, title=f"Flat {n}")

    first = api_client.get("/listings/").json()
    assert first["count"] == 25
    assert first["total_pages"] == 2
    assert len(first["results"]) == 20
    assert first["has_next"] is True

    second = api_client.get("/listings/", {"page": "2"}).json()
    assert len(second["results"]) == 5
    assert second["has_previous"] is True
    assert second["has_next"] is False

    beyond = api_client.get("/listings/", {"page": "9"}).json()
    assert beyond["page"] == 9
    assert beyond["results"] == []


@pytest.mark.django_db
def test_malformed_query_falls_back_to_defaults(api_client, catalogue):
    resp = api_client.get(
        "/listings/",
        {"minPrice": "cheap", "page": "-1", "sort": "random", "dynamicFilters": "{oops", "sellerId": "abc"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["page"] == 1
    assert data["sort"] == "newest"
    assert data["filters"]["price_min"] == 0
    assert data["filters"]["dynamic_filters"] == {}


@pytest.mark.django_db
def test_authenticated_user_sees_favorites_and_history(api_client, buyer, catalogue):
    Favorite.objects.create(user=buyer, property=catalogue["villa"])
    api_client.force_authenticate(user=buyer)

    resp = api_client.get("/listings/", {"bhk": "4+ BHK,2 BHK"})
    favorited = {row["id"]: row["is_favorited"] for row in resp.json()["results"]}
    assert favorited == {catalogue["flat"].id: False, catalogue["villa"].id: True}

    resp = api_client.get("/listings/")
    favorited = {row["id"]: row["is_favorited"] for row in resp.json()["results"]}
    assert favorited[catalogue["villa"].id] is True
    assert favorited[catalogue["flat"].id] is False

    history = list(SearchHistory.objects.filter(user=buyer))
    assert len(history) == 1
    assert history[0].search_query == "bhk=2%20BHK,4%2B%20BHK"
    assert history[0].filters["bhk"] == ["2 BHK", "4+ BHK"]


@pytest.mark.django_db
def test_anonymous_searches_are_not_recorded(api_client, catalogue):
    api_client.get("/listings/", {"bhk": "2 BHK"})
    assert SearchHistory.objects.count() == 0


@pytest.mark.django_db
def test_plural_category_slug_matches(api_client, catalogue):
    resp = api_client.get("/listings/", {"category": "residentials"})
    assert resp.json()["count"] == 1
    assert _ids(resp) == [catalogue["flat"].id]


@pytest.mark.django_db
def test_top_bhk_bucket_includes_four_bedrooms(api_client, catalogue):
    resp = api_client.get("/listings/", {"bhk": "4+ BHK"})
    assert resp.json()["count"] == 1
    assert _ids(resp) == [catalogue["villa"].id]


@pytest.mark.django_db
def test_count_covers_rows_beyond_one_fetch_window(api_client, seller, property_factory, monkeypatch):
    monkeypatch.setattr("listings.pipeline.FETCH_LIMIT", 10)
    for n in range(45):
        property_factory(seller, title=f"Flat {n}")

    data = api_client.get("/listings/").json()
    assert data["count"] == 45
    assert data["total_pages"] == 3

    last = api_client.get("/listings/", {"page": "3"}).json()
    assert len(last["results"]) == 5
    assert len({row["id"] for row in data["results"]} | {row["id"] for row in last["results"]}) == 25
