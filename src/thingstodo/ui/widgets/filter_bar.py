from collections.abc import Iterable

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Input, Select, Static

from thingstodo.models import FacetOption, FilterState


def _select_options(options: Iterable[FacetOption]) -> list[tuple[str, str]]:
    return [(option.label, option.value) for option in options]


class FilterBar(Static):
    """Search input plus the location and duration facets."""

    class SearchChanged(Message):
        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class LocationChanged(Message):
        def __init__(self, location: str) -> None:
            super().__init__()
            self.location = location

    class DurationChanged(Message):
        def __init__(self, duration: str) -> None:
            super().__init__()
            self.duration = duration

    def __init__(
        self,
        location_options: Iterable[FacetOption],
        duration_options: Iterable[FacetOption],
        state: FilterState | None = None,
        **kwargs,
    ):
        """Initialize the filter bar.

        Args:
            location_options: Choices for the location Select.
            duration_options: Choices for the duration Select.
            state: Filters to show initially, so the widgets start in step with the engine.
        """
        super().__init__(**kwargs)
        self._state = state or FilterState()
        self._location_options = _select_options(location_options)
        self._duration_options = _select_options(duration_options)

    def compose(self) -> ComposeResult:
        state = self._state
        with Vertical(id="filter-bar-container"):
            yield Input(
                value=state.search_text,
                placeholder="Search activities, locations, or tags...",
                id="search-input",
            )
            with Horizontal(id="facet-container"):
                yield Select(
                    self._location_options, allow_blank=False, value=state.selected_location, id="location-select"
                )
                yield Select(
                    self._duration_options, allow_blank=False, value=state.selected_duration, id="duration-select"
                )

    # Event handlers
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            event.stop()
            self.post_message(self.SearchChanged(event.value))

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        if event.value == Select.BLANK:
            return
        if event.select.id == "location-select":
            self.post_message(self.LocationChanged(str(event.value)))
        elif event.select.id == "duration-select":
            self.post_message(self.DurationChanged(str(event.value)))

    # Public methods
    def show_facets(self, location: str, duration: str) -> None:
        """Reflect facet values changed elsewhere (navigation, city list, clear filters)."""
        try:
            self._set_select("#location-select", location)
            self._set_select("#duration-select", duration)
        except Exception:
            # Not composed yet
            pass

    def set_search(self, text: str) -> None:
        """Replace the search text without reporting it back as typed input."""
        search_input = self.query_one("#search-input", Input)
        if search_input.value != text:
            with search_input.prevent(Input.Changed):
                search_input.value = text

    def focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def _set_select(self, selector: str, value: str) -> None:
        select = self.query_one(selector, Select)
        if select.value != value:
            with select.prevent(Select.Changed):
                select.value = value
