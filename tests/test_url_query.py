import json
from urllib.parse import parse_qs, urlencode

import pytest
from django.http import QueryDict

from listings.constants import DEFAULT_MAX_PRICE
from listings.filter_state import FilterState
from listings.url_query import decode_query, encode_query, update_query


def _full_state():
    return FilterState(
        price_min=1_000_000,
        price_max=20_000_000,
        transaction_types={"sale", "rent"},
        category="residential",
        subcategories={"flats", "villas"},
        project_stages={"launch", "ready_to_move"},
        bhk={"2 BHK", "4+ BHK"},
        seller_types={"Builder", "Corporate"},
        property_age={"new", "1-5"},
        builder="Skyline",
        locality="Indiranagar",
        dynamic_filters={"facing": {"east", "north"}, "area_min": "1000", "furnishing": "semi"},
        seller_id="42",
        featured=True,
    )


def test_empty_query_decodes_to_defaults():
    query = decode_query("")
    assert query.state == FilterState()
    assert query.page == 1
    assert query.sort == "newest"


def test_default_state_encodes_to_empty_string():
    assert encode_query(FilterState()) == ""


@pytest.mark.parametrize("page,sort", [(1, "newest"), (3, "price-low"), (7, "featured")])
def test_round_trip_full_state(page, sort):
    state = _full_state()
    decoded = decode_query(encode_query(state, page, sort))
    assert decoded.state == state
    assert decoded.page == page
    assert decoded.sort == sort


def test_round_trip_single_filters():
    for state in (
        FilterState(category="plots"),
        FilterState(price_min=500),
        FilterState(price_max=900_000),
        FilterState(bhk={"1 BHK"}),
        FilterState(featured=True),
        FilterState(dynamic_filters={"amenities": {"gym"}}),
    ):
        assert decode_query(encode_query(state)).state == state


def test_category_all_is_never_encoded():
    encoded = encode_query(FilterState(category="all", bhk={"2 BHK"}))
    assert "category" not in parse_qs(encoded)


def test_parameters_follow_canonical_order():
    state = FilterState(category="residential", featured=True, locality="Whitefield", bhk={"3 BHK"})
    assert encode_query(state, page=2, sort="price-high") == (
        "category=residential&bhk=3%20BHK&locality=Whitefield&page=2&sort=price-high&featured=true"
    )


def test_list_values_are_sorted_and_comma_joined():
    encoded = encode_query(FilterState(bhk={"4+ BHK", "2 BHK"}, transaction_types={"sale", "lease"}))
    assert encoded == "bhk=2%20BHK,4%2B%20BHK&transactionTypes=lease,sale"


def test_price_range_written_as_a_pair_when_not_default():
    params = parse_qs(encode_query(FilterState(price_min=100)))
    assert params["minPrice"] == ["100"]
    assert params["maxPrice"] == [str(DEFAULT_MAX_PRICE)]


def test_malformed_numbers_fall_back_to_defaults():
    query = decode_query("minPrice=abc&maxPrice=-5&page=zero&sort=cheapest")
    assert query.state.price_min == 0
    assert query.state.price_max == DEFAULT_MAX_PRICE
    assert query.page == 1
    assert query.sort == "newest"


@pytest.mark.parametrize("raw", ["0", "-2", "1.5", ""])
def test_page_below_one_or_unparsable_is_page_one(raw):
    assert decode_query(f"page={raw}").page == 1


def test_unknown_members_and_bad_labels_are_dropped():
    query = decode_query(
        "bhk=2%20BHK,huge,3%2B%20BHK"
        "&transactionTypes=buy,rent,barter"
        "&sellerTypes=builder,Alien"
        "&propertyAge=new,ancient"
        "&projectStages=launch,demolished"
    )
    state = query.state
    assert state.bhk == frozenset({"2 BHK", "3+ BHK"})
    assert state.transaction_types == frozenset({"sale", "rent"})
    assert state.seller_types == frozenset({"Builder"})
    assert state.property_age == frozenset({"new"})
    assert state.project_stages == frozenset({"launch"})


def test_buy_alias_is_stored_as_sale():
    assert decode_query("transactionTypes=buy").state.transaction_types == frozenset({"sale"})


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42", '"east"'])
def test_bad_dynamic_filters_become_empty(raw):
    query = decode_query(urlencode({"dynamicFilters": raw, "category": "plots"}))
    assert query.state.dynamic_filters == {}
    assert query.state.category == "plots"


def test_dynamic_filter_entries_with_bad_values_are_dropped():
    raw = json.dumps({"facing": ["east"], "floors": 3, "furnishing": "semi", "mixed": ["a", 1]})
    state = decode_query(urlencode({"dynamicFilters": raw})).state
    assert state.dynamic_filters == {"facing": frozenset({"east"}), "furnishing": "semi"}


def test_leading_question_mark_is_accepted():
    assert decode_query("?category=plots&page=2").page == 2


def test_decodes_django_querydict_and_plain_mapping():
    qd = QueryDict("category=commercial&page=3&featured=true")
    query = decode_query(qd)
    assert query.state.category == "commercial"
    assert query.state.featured is True
    assert query.page == 3

    query = decode_query({"page": ["2"], "sort": "price-low"})
    assert query.page == 2
    assert query.sort == "price-low"


def test_update_query_resets_page_on_filter_change():
    assert update_query("category=residential&page=4", bhk={"2 BHK"}) == "category=residential&bhk=2%20BHK"


def test_update_query_resets_page_on_sort_change():
    assert update_query("page=4&sort=price-low", sort="price-high") == "sort=price-high"


def test_update_query_keeps_explicit_page():
    assert update_query("category=plots&page=4", page=5) == "category=plots&page=5"


def test_update_query_without_changes_keeps_page():
    assert update_query("category=plots&page=3") == "category=plots&page=3"
    assert update_query("category=plots&page=3", category="plots") == "category=plots&page=3"
