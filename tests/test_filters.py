import pytest

from thingstodo.errors import FacetValidationError
from thingstodo.models import ALL, FilterState
from thingstodo.services.filters import (
    DURATION_OPTIONS,
    build_predicate,
    duration_predicate,
    filter_records,
    location_options,
    location_predicate,
    text_predicate,
    validate_facet,
)

from .conftest import make_record


def test_location_predicate_matches_substring(records):
    matches = [r.name for r in records if location_predicate("Bali")(r)]
    assert matches == ["Uluwatu Temple", "Tegallalang Rice Terrace"]


def test_location_predicate_is_case_sensitive():
    record = make_record(1, location="Ubud, Bali")
    assert location_predicate("Bali")(record)
    assert not location_predicate("bali")(record)


def test_all_sentinel_matches_everything(records):
    assert all(location_predicate(ALL)(r) for r in records)
    assert all(duration_predicate(ALL)(r) for r in records)
    assert all(text_predicate("")(r) for r in records)


def test_text_predicate_checks_name_tags_and_location(records):
    assert [r.id for r in records if text_predicate("TEMPLE")(r)] == ["act-1", "act-5"]
    assert [r.id for r in records if text_predicate("food")(r)] == ["act-4"]
    assert [r.id for r in records if text_predicate("lombok")(r)] == ["act-6"]


def test_text_predicate_can_skip_location(records):
    assert not any(text_predicate("lombok", search_location=False)(r) for r in records)


def test_facets_do_not_leak_into_each_other():
    # The duration text mentions a city, which must not satisfy the location facet
    record = make_record(1, location="Central Jakarta", duration="Full day from Bali")
    state = FilterState(selected_location="Bali")
    assert not build_predicate(state)(record)

    state = FilterState(selected_duration="Full day")
    assert build_predicate(state)(record)


def test_combined_predicate_is_logical_and(records):
    states = [
        FilterState(),
        FilterState(search_text="temple"),
        FilterState(search_text="temple", selected_location="Bali"),
        FilterState(selected_location="Jakarta", selected_duration="Full day"),
        FilterState(search_text="x", selected_location="Lombok", selected_duration="3-4 hours"),
    ]
    for state in states:
        predicate = build_predicate(state)
        for record in records:
            expected = (
                text_predicate(state.search_text)(record)
                and location_predicate(state.selected_location)(record)
                and duration_predicate(state.selected_duration)(record)
            )
            assert predicate(record) == expected


def test_filter_records_keeps_source_order(records):
    state = FilterState(selected_duration="1-2 hours")
    assert [r.id for r in filter_records(records, state)] == ["act-2", "act-3"]


def test_location_options_use_city_component(records):
    options = location_options(records)
    assert options[0].value == ALL
    assert options[0].label == "All Locations"
    assert [o.value for o in options[1:]] == ["Bali", "Jakarta", "Lombok", "Yogyakarta"]


def test_duration_options_start_with_sentinel():
    assert DURATION_OPTIONS[0].value == ALL
    assert "Full day" in [o.value for o in DURATION_OPTIONS]


def test_validate_facet(records):
    options = location_options(records)
    assert validate_facet("Jakarta", options) == "Jakarta"
    with pytest.raises(FacetValidationError) as excinfo:
        validate_facet("Atlantis", options, facet="city")
    assert excinfo.value.facet == "city"
    assert excinfo.value.value == "Atlantis"
