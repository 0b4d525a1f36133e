import pytest

from listings.filter_state import FilterState
from listings.refinement import age_bucket, refine, sort_rows


def _ids(rows):
    return [r["id"] for r in rows]


def test_price_low_sorts_ascending():
    rows = [{"price": 100}, {"price": 50}]
    assert [r["price"] for r in sort_rows(rows, "price-low")] == [50, 100]


def test_price_high_is_stable_for_ties():
    rows = [{"id": "a", "price": 100}, {"id": "b", "price": 200}, {"id": "c", "price": 100}]
    assert _ids(sort_rows(rows, "price-high")) == ["b", "a", "c"]


def test_rows_without_price_go_last():
    rows = [{"id": 1}, {"id": 2, "price": "300"}, {"id": 3, "price": 10}]
    assert _ids(sort_rows(rows, "price-low")) == [3, 2, 1]


def test_newest_keeps_fetch_order():
    rows = [{"id": 3, "price": 1}, {"id": 1, "price": 9}, {"id": 2, "price": 5}]
    assert _ids(sort_rows(rows, "newest")) == [3, 1, 2]


def test_featured_first_keeps_relative_order():
    rows = [
        {"id": 1, "is_featured": False},
        {"id": 2, "is_featured": True},
        {"id": 3, "is_featured": False},
        {"id": 4, "isFeatured": True},
    ]
    assert _ids(sort_rows(rows, "featured")) == [2, 4, 1, 3]


def test_age_filter_examples():
    assert _ids(refine([{"id": 1}], FilterState(property_age={"new"}))) == [1]
    assert _ids(refine([{"id": 2, "age_of_property": "3"}], FilterState(property_age={"1-5"}))) == [2]
    assert refine([{"id": 3, "age_of_property": "7"}], FilterState(property_age={"1-5"})) == []


@pytest.mark.parametrize(
    "value,bucket",
    [(None, "new"), ("", "new"), ("abc", "new"), (0, "new"), ("-1", "new"),
     (1, "1-5"), ("5", "1-5"), ("5.5", "5+"), (12, "5+")],
)
def test_age_bucket(value, bucket):
    assert age_bucket(value) == bucket


def test_age_filter_reads_camel_case_rows():
    rows = [{"id": 1, "ageOfProperty": "8"}, {"id": 2, "ageOfProperty": "2"}]
    assert _ids(refine(rows, FilterState(property_age={"5+"}))) == [1]


def test_featured_only():
    rows = [{"id": 1, "is_featured": True}, {"id": 2, "is_featured": False}, {"id": 3}]
    assert _ids(refine(rows, FilterState(featured=True))) == [1]


def test_category_ignores_case_and_plural():
    rows = [
        {"id": 1, "category": "apartments"},
        {"id": 2, "category": "Apartment"},
        {"id": 3, "category": "plot"},
        {"id": 4, "category": {"slug": "apartment"}},
    ]
    assert _ids(refine(rows, FilterState(category="apartment"))) == [1, 2, 4]
    assert _ids(refine(rows, FilterState(category="Apartments"))) == [1, 2, 4]


def test_path_transaction_overrides_url_selection():
    rows = [
        {"id": 1, "transaction_type": "sale"},
        {"id": 2, "transaction_type": "rent"},
        {"id": 3, "transactionType": "Sale"},
    ]
    state = FilterState(transaction_types={"rent"})
    assert _ids(refine(rows, state)) == [2]
    assert _ids(refine(rows, state, transaction="buy")) == [1, 3]


def test_price_bounds():
    rows = [{"id": 1, "price": 500}, {"id": 2, "price": "1500"}, {"id": 3, "price": 3000}, {"id": 4}]
    assert _ids(refine(rows, FilterState(price_min=1000))) == [2, 3]
    assert _ids(refine(rows, FilterState(price_min=1000, price_max=2000))) == [2]


def test_bhk_exact_or_at_least():
    rows = [{"id": n, "bedrooms": n} for n in range(1, 6)] + [{"id": 99}]
    assert _ids(refine(rows, FilterState(bhk={"2 BHK", "4+ BHK"}))) == [2, 4, 5]


def test_seller_type_builder_matches_corporate():
    rows = [
        {"id": 1, "seller_type": "builder"},
        {"id": 2, "seller_type": "Corporate"},
        {"id": 3, "seller_type": "individual"},
        {"id": 4, "seller_type": ""},
    ]
    assert _ids(refine(rows, FilterState(seller_types={"Corporate"}))) == [1, 2]
    assert _ids(refine(rows, FilterState(seller_types={"Builder"}))) == [1, 2]
    assert _ids(refine(rows, FilterState(seller_types={"Individual"}))) == [3]


def test_project_stage_membership():
    rows = [
        {"id": 1, "project_stage": "launch"},
        {"id": 2, "project_stage": "ready_to_move"},
        {"id": 3, "project_stage": ""},
    ]
    assert _ids(refine(rows, FilterState(project_stages={"launch", "pre_launch"}))) == [1]


def test_locality_matches_locality_address_or_city():
    rows = [
        {"id": 1, "locality": "Indiranagar", "address": "", "city": "Bengaluru"},
        {"id": 2, "locality": "", "address": "5 Indiranagar Double Road", "city": "Bengaluru"},
        {"id": 3, "locality": "Bandra", "address": "Hill Road", "city": "Mumbai"},
    ]
    assert _ids(refine(rows, FilterState(locality="indira"))) == [1, 2]
    assert _ids(refine(rows, FilterState(locality="MUMBAI"))) == [3]


def test_dynamic_numeric_bounds():
    rows = [
        {"id": 1, "custom_fields": {"area": 1200}},
        {"id": 2, "custom_fields": {"area": "800"}},
        {"id": 3, "custom_fields": {}},
        {"id": 4},
    ]
    assert _ids(refine(rows, FilterState(dynamic_filters={"area_min": "1000"}))) == [1]
    assert _ids(refine(rows, FilterState(dynamic_filters={"area_max": "1000"}))) == [2]


def test_dynamic_list_membership_and_overlap():
    rows = [
        {"id": 1, "custom_fields": {"facing": "East"}},
        {"id": 2, "custom_fields": {"facing": ["south", "north"]}},
        {"id": 3, "custom_fields": {"facing": "west"}},
        {"id": 4, "custom_fields": {"floors": 2}},
    ]
    state = FilterState(dynamic_filters={"facing": {"east", "north"}})
    assert _ids(refine(rows, state)) == [1, 2]


def test_dynamic_string_is_substring_match():
    rows = [
        {"id": 1, "custom_fields": {"furnishing": "Semi-furnished"}},
        {"id": 2, "custom_fields": {"furnishing": "Unfurnished"}},
    ]
    assert _ids(refine(rows, FilterState(dynamic_filters={"furnishing": "semi"}))) == [1]


def test_filters_combine():
    rows = [
        {"id": 1, "transaction_type": "rent", "bedrooms": 2, "price": 30000, "locality": "Whitefield"},
        {"id": 2, "transaction_type": "rent", "bedrooms": 3, "price": 45000, "locality": "Whitefield"},
        {"id": 3, "transaction_type": "sale", "bedrooms": 2, "price": 30000, "locality": "Whitefield"},
    ]
    state = FilterState(bhk={"2 BHK"}, price_max=40000, locality="white")
    assert _ids(refine(rows, state, transaction="rent")) == [1]


def test_refine_does_not_mutate_input():
    rows = [{"id": 1, "is_featured": False}]
    refine(rows, FilterState(featured=True))
    assert rows == [{"id": 1, "is_featured": False}]
