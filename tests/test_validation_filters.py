# tests/test_validation_filters.py
import pytest

from catalog_sdk.filters import apply_filters
from catalog_sdk.models import ProductDraft, ProductFilters
from catalog_sdk.validation import validate_product

from conftest import valid_draft


def test_valid_draft_has_no_errors():
    assert validate_product(ProductDraft(**valid_draft())) == []


@pytest.mark.parametrize("overrides, field", [
    ({"name": ""}, "name"),
    ({"name": "Short"}, "name"),
    ({"name": "         x"}, "name"),
    ({"price": 0}, "price"),
    ({"price": -3.5}, "price"),
    ({"price": float("nan")}, "price"),
    ({"price": float("inf")}, "price"),
    ({"price": float("-inf")}, "price"),
    ({"description": "too short"}, "description"),
    ({"category": ""}, "category"),
])
def test_invalid_field_is_reported(overrides, field):
    errors = validate_product(ProductDraft(**valid_draft(**overrides)))
    assert [e.field for e in errors] == [field]
    assert errors[0].message


def test_every_bad_field_reported_at_once():
    errors = validate_product(ProductDraft(name="a", price=-1, image="", description="short", category=""))
    assert {e.field for e in errors} == {"name", "price", "description", "category"}


def test_category_and_price_range(fixture_products):
    out = apply_filters(fixture_products, ProductFilters(category="Shoes", min_price=50, max_price=200))
    assert [p.id for p in out] == [1, 2, 4, 5, 7, 8]
    assert all(p.category == "Shoes" and 50 <= p.price <= 200 for p in out)


def test_camel_case_keys_accepted(fixture_products):
    filters = ProductFilters.model_validate({"category": "Shoes", "minPrice": 180, "maxPrice": 200})
    assert [p.id for p in apply_filters(fixture_products, filters)] == [1, 4, 7]


def test_search_matches_name_description_and_category(fixture_products):
    assert [p.id for p in apply_filters(fixture_products, ProductFilters(search_term="ULTRA"))] == [2, 5, 8]
    assert [p.id for p in apply_filters(fixture_products, ProductFilters(search_term="clothes"))] == [3, 6, 9]
    assert [p.id for p in apply_filters(fixture_products, ProductFilters(search_term="cotton"))] == [3, 6, 9]


def test_sort_price_desc_is_stable(fixture_products):
    out = apply_filters(fixture_products, ProductFilters(sort_by="price", sort_order="desc"))
    prices = [p.price for p in out]
    assert prices == sorted(prices, reverse=True)
    # ties keep their original relative order
    assert [p.id for p in out] == [1, 4, 7, 2, 5, 8, 3, 6, 9]


def test_sort_asc_and_unknown_field(fixture_products):
    asc = apply_filters(fixture_products, ProductFilters(sort_by="price"))
    assert [p.id for p in asc] == [3, 6, 9, 2, 5, 8, 1, 4, 7]
    unchanged = apply_filters(fixture_products, ProductFilters(sort_by="colour", sort_order="desc"))
    assert [p.id for p in unchanged] == list(range(1, 10))


def test_offset_and_limit(fixture_products):
    page = apply_filters(fixture_products, ProductFilters(offset=3, limit=4))
    assert [p.id for p in page] == [4, 5, 6, 7]
    assert [p.id for p in apply_filters(fixture_products, ProductFilters(offset=8))] == [9]
    assert apply_filters(fixture_products, ProductFilters(offset=20, limit=5)) == []


def test_no_filters_returns_copy(fixture_products):
    out = apply_filters(fixture_products)
    assert out == fixture_products
    assert out is not fixture_products


def test_query_params_are_snake_case():
    params = ProductFilters.model_validate({"minPrice": 5, "searchTerm": "nike", "limit": 2}).to_query_params()
    assert params == {"min_price": 5.0, "search_term": "nike", "limit": 2}
    assert ProductFilters(sort_by="name", sort_order="desc").to_query_params() == {
        "sort_by": "name", "sort_order": "desc",
    }
