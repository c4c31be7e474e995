"""Predicates and facet options used to filter activities.

Every predicate is a plain ``Record -> bool`` callable. Facet predicates match
everything at the ``"all"`` sentinel, so one facet never constrains another.
"""

from collections.abc import Callable, Iterable

from thingstodo.errors import FacetValidationError
from thingstodo.models import ALL, FacetOption, FilterState, Record

Predicate = Callable[[Record], bool]

DURATION_OPTIONS = (
    FacetOption(ALL, "All Durations"),
    FacetOption("1-2 hours", "1-2 hours"),
    FacetOption("2-3 hours", "2-3 hours"),
    FacetOption("3-4 hours", "3-4 hours"),
    FacetOption("Full day", "Full day"),
    FacetOption("Multi-day", "Multi-day"),
)


def _match_all(record: Record) -> bool:
    return True


def text_predicate(text: str, search_location: bool = True) -> Predicate:
    """Case-insensitive substring match on name and tags, and optionally location."""
    needle = text.lower()
    if not needle:
        return _match_all

    def predicate(record: Record) -> bool:
        if needle in record.name.lower() or needle in record.tags.lower():
            return True
        return search_location and needle in record.location.lower()

    return predicate


def location_predicate(value: str) -> Predicate:
    if value == ALL:
        return _match_all
    # Substring so "Ubud, Bali" matches "Bali"
    return lambda record: value in record.location


def duration_predicate(value: str) -> Predicate:
    if value == ALL:
        return _match_all
    return lambda record: value in record.duration


def build_predicate(state: FilterState, search_location: bool = True) -> Predicate:
    """Combine the text, location and duration predicates with logical AND."""
    predicates = (
        text_predicate(state.search_text, search_location),
        location_predicate(state.selected_location),
        duration_predicate(state.selected_duration),
    )
    return lambda record: all(predicate(record) for predicate in predicates)


def filter_records(records: Iterable[Record], state: FilterState, search_location: bool = True) -> tuple[Record, ...]:
    predicate = build_predicate(state, search_location)
    return tuple(record for record in records if predicate(record))


def location_options(records: Iterable[Record]) -> tuple[FacetOption, ...]:
    """"All Locations" followed by the sorted distinct cities of ``records``."""
    cities = sorted({record.city for record in records if record.city})
    return (FacetOption(ALL, "All Locations"), *(FacetOption(city, city) for city in cities))


def validate_facet(value: str, options: Iterable[FacetOption], facet: str = "location") -> str:
    """Return ``value`` if it names one of ``options``.

    Raises:
        FacetValidationError: ``value`` is not a current option.
    """
    if any(option.value == value for option in options):
        return value
    raise FacetValidationError(facet, value)
