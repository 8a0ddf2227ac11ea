"""Unit tests for the filter pipeline and facet option derivation."""

import pytest

from conftest import FIXINGS, POWER_TOOLS, make_product
from tradecounter.catalogue.filters import (
    ANY,
    FIXINGS_FACETS,
    FilterState,
    apply_filters,
    as_number,
    derive_facet_options,
    facet_fields_for,
    format_facet_value,
)


def _ids(items):
    return [p.id for p in items]


def test_default_state_passes_everything_in_order(products):
    result = apply_filters(products, FilterState())
    assert _ids(result) == [1, 2, 3, 4, 5, 6]


def test_category_and_brand_predicates(products):
    state = FilterState(category_id=1, brand_id=11)
    assert _ids(apply_filters(products, state)) == [1, 2]


def test_free_text_matches_name_sku_and_description_case_insensitively(products):
    assert _ids(apply_filters(products, FilterState(query="  SCREW "))) == [1, 2, 3, 5]
    assert _ids(apply_filters(products, FilterState(query="hd-18"))) == [4]
    assert _ids(apply_filters(products, FilterState(query="nylon plug"))) == [3]


def test_result_is_order_preserving_subset(products):
    state = FilterState(query="s")
    result = apply_filters(products, state)
    positions = [products.index(p) for p in result]
    assert positions == sorted(positions)
    assert all(p in products for p in result)


def test_text_facet_compares_case_insensitively(products):
    state = FilterState(category_id=1, facets={"material": "STEEL"})
    assert _ids(apply_filters(products, state, FIXINGS_FACETS)) == [1, 2]


def test_numeric_facet_compares_as_numbers(products):
    # "10" selected, rows hold 10 (int) and "10.0" (text) -> both are 10
    state = FilterState(category_id=1, facets={"diameter_mm": "10"})
    assert _ids(apply_filters(products, state, FIXINGS_FACETS)) == [1, 3]

    state = FilterState(category_id=1, facets={"length_mm": 70.0})
    assert _ids(apply_filters(products, state, FIXINGS_FACETS)) == [2]


def test_non_numeric_value_never_matches_numeric_selection():
    junk = make_product(9, "Odd Fixing", attributes={"length_mm": "long"})
    state = FilterState(category_id=1, facets={"length_mm": "100"})
    assert apply_filters([junk], state, FIXINGS_FACETS) == []

    garbage_selection = FilterState(category_id=1, facets={"length_mm": "abc"})
    assert apply_filters([junk], garbage_selection, FIXINGS_FACETS) == []


def test_product_without_attributes_fails_when_a_facet_is_set(products):
    state = FilterState(category_id=1, facets={"finish": "zinc"})
    assert _ids(apply_filters(products, state, FIXINGS_FACETS)) == [1, 2]

    state = FilterState(category_id=1, facets={"finish": ANY})
    assert 5 in _ids(apply_filters(products, state, FIXINGS_FACETS))


def test_facets_ignored_for_category_without_facets(products):
    # A stale selection for a field the category does not define filters nothing
    state = FilterState(category_id=2, facets={"material": "steel"})
    assert _ids(apply_filters(products, state, facet_fields_for(POWER_TOOLS))) == [4]


def test_facet_fields_only_for_fixings():
    assert facet_fields_for(FIXINGS) == FIXINGS_FACETS
    assert facet_fields_for(POWER_TOOLS) == ()
    assert facet_fields_for(None) == ()


def test_reset_facets_sets_every_field_to_any():
    state = FilterState(facets={"material": "steel"})
    state.reset_facets(FIXINGS_FACETS)
    assert set(state.facets) == {f.name for f in FIXINGS_FACETS}
    assert all(v == ANY for v in state.facets.values())
    assert state.active_facets() == {}


def test_derive_facet_options(products):
    fixings = [p for p in products if p.category_id == 1]
    options = derive_facet_options(fixings, FIXINGS_FACETS)

    assert options["length_mm"] == [70.0, 100.0, 120.0]
    assert options["diameter_mm"] == [7.5, 10.0]
    assert options["pack_size"] == []
    assert options["head_type"] == ["Countersunk", "Hex"]
    # "Steel" and "steel" are one option
    assert options["material"] == ["Nylon", "Steel"]
    assert options["finish"] == ["Zinc"]


def test_derive_facet_options_skips_junk_numeric_values():
    rows = [
        make_product(1, "A", attributes={"pack_size": "100"}),
        make_product(2, "B", attributes={"pack_size": "box"}),
        make_product(3, "C", attributes={"pack_size": 20}),
    ]
    assert derive_facet_options(rows, FIXINGS_FACETS)["pack_size"] == [20.0, 100.0]


def test_derive_facet_options_without_facets_is_empty(products):
    assert derive_facet_options(products, ()) == {}


@pytest.mark.parametrize("raw, expected", [
    ("10", 10.0),
    (" 10.0 ", 10.0),
    (7, 7.0),
    ("abc", None),
    (None, None),
    (True, None),
    ("nan", None),
])
def test_as_number(raw, expected):
    assert as_number(raw) == expected


def test_format_facet_value():
    assert format_facet_value(10.0) == "10"
    assert format_facet_value(2.5) == "2.5"
    assert format_facet_value("Zinc") == "Zinc"
