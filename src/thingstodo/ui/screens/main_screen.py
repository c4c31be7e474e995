from dataclasses import replace
from urllib.parse import quote_plus

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import Screen
from textual.widgets import Footer

from thingstodo.models import ALL, Snapshot
from thingstodo.services.discovery import DiscoveryEngine
from thingstodo.services.timers import TextualScheduler
from thingstodo.services.url_sync import LocationSynchronizer
from thingstodo.ui.constants import LOCATION_QUERY_PARAM
from thingstodo.ui.modals import ItineraryModal
from thingstodo.ui.utils import format_result_count
from thingstodo.ui.widgets import ActivityList, CityList, FilterBar, LocationBar, TagList, TitleBar
from thingstodo.ui.widgets.tag_list import MAX_TAGS


class MainScreen(Screen):
    """Main screen: filters, city sidebar and the activity list."""

    BINDINGS = [
        Binding("ctrl+f", "focus_search", "Search"),
        Binding("escape", "clear_filters", "Clear Filters"),
        Binding("alt+left", "back", "Back"),
        Binding("alt+right", "forward", "Forward"),
        Binding("ctrl+t", "plan", "Plan Trip"),
        Binding("f2", "focus_list", "Activities", show=False),
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        config = self.app.app_config
        self.engine = DiscoveryEngine(
            self.app.store,
            TextualScheduler(self),
            page_size=config.page_size,
            debounce=config.debounce,
            load_delay=config.load_delay,
            search_location=config.search_location,
            sort_by_rating=config.sort_by_rating,
        )
        self.synchronizer = LocationSynchronizer(self.engine, self.app.navigator, param=LOCATION_QUERY_PARAM)
        self._unsubscribe_engine = None
        self._unsubscribe_navigator = None

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(id="title-bar")
            # Start the widgets on the location the synchronizer will apply at mount
            initial_state = replace(self.engine.state, selected_location=self.synchronizer.initial_location())
            yield FilterBar(
                self.engine.location_options, self.engine.duration_options, state=initial_state, id="filter-bar"
            )
            yield LocationBar(self.app.navigator.url, id="location-bar")
            with Container(id="content-container"):
                with Vertical(id="sidebar"):
                    yield CityList(self.app.store.cities(), id="city-list")
                    yield TagList(self.app.store.top_tags(MAX_TAGS), id="tag-list")
                yield ActivityList(id="activity-list")

            yield Footer(id="main-footer")

    def on_mount(self) -> None:
        """Wire the engine to the widgets and compute the first result."""
        activity_list = self.query_one("#activity-list", ActivityList)
        self.engine.bind_observer(activity_list.observer)
        self._unsubscribe_engine = self.engine.subscribe(self._on_snapshot)
        self._unsubscribe_navigator = self.app.navigator.subscribe(self._on_navigation)

        self.synchronizer.mount()
        self.engine.start()

        load_error = self.app.store.load_error
        if load_error:
            self.query_one("#title-bar", TitleBar).data_error = True
            self.notify(str(load_error), severity="error", timeout=10)

        self.query_one("#filter-bar", FilterBar).focus_search()

    def on_unmount(self) -> None:
        self.synchronizer.unmount()
        if self._unsubscribe_navigator:
            self._unsubscribe_navigator()
        if self._unsubscribe_engine:
            self._unsubscribe_engine()
        self.engine.close()

    # Message handlers
    def on_filter_bar_search_changed(self, message: FilterBar.SearchChanged) -> None:
        self.engine.set_search_text(message.text)

    def on_filter_bar_location_changed(self, message: FilterBar.LocationChanged) -> None:
        self.synchronizer.select(message.location)

    def on_filter_bar_duration_changed(self, message: FilterBar.DurationChanged) -> None:
        self.engine.set_duration(message.duration)

    def on_city_list_city_selected(self, message: CityList.CitySelected) -> None:
        self.synchronizer.select(message.value)

    def on_tag_list_tag_selected(self, message: TagList.TagSelected) -> None:
        self.query_one("#filter-bar", FilterBar).set_search(message.tag)
        self.engine.set_search_text(message.tag)

    def on_activity_list_activity_selected(self, message: ActivityList.ActivitySelected) -> None:
        record = message.record
        maps_url = f"https://www.google.com/maps/search/?api=1&query={quote_plus(f'{record.name} {record.location}')}"
        self.notify(f"{record.description}\n\n{maps_url}", title=record.name, markup=False, timeout=8)

    # Engine and navigation callbacks
    def _on_snapshot(self, snapshot: Snapshot) -> None:
        state = self.engine.state
        activity_list = self.query_one("#activity-list", ActivityList)
        sentinel = activity_list.show_snapshot(snapshot)
        self.engine.attach_sentinel(sentinel)

        location = state.selected_location
        title_bar = self.query_one("#title-bar", TitleBar)
        title_bar.summary = format_result_count(
            len(snapshot.displayed_window), snapshot.filtered_count, None if location == ALL else location
        )
        self.query_one("#filter-bar", FilterBar).show_facets(state.selected_location, state.selected_duration)

    def _on_navigation(self, params: dict[str, str]) -> None:
        self.query_one("#location-bar", LocationBar).update_url(self.app.navigator.url)

    # Actions
    def action_focus_search(self) -> None:
        self.query_one("#filter-bar", FilterBar).focus_search()

    def action_focus_list(self) -> None:
        self.query_one("#activity-list", ActivityList).focus_list()

    def action_clear_filters(self) -> None:
        self.query_one("#filter-bar", FilterBar).set_search("")
        self.synchronizer.select(ALL)
        self.engine.clear_filters()

    def action_back(self) -> None:
        if not self.app.navigator.back():
            self.notify("No earlier location", severity="warning")

    def action_forward(self) -> None:
        if not self.app.navigator.forward():
            self.notify("No later location", severity="warning")

    def action_plan(self) -> None:
        """Open the itinerary planner for the selected location"""
        location = self.engine.state.selected_location
        destination = "" if location == ALL else location

        def on_plan_closed(result) -> None:
            self.call_later(self.action_focus_list)

        self.app.push_screen(ItineraryModal(self.app.planner, destination), on_plan_closed)
