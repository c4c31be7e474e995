from collections.abc import Callable

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, LoadingIndicator, Static

from thingstodo.models import Record, Snapshot
from thingstodo.ui.utils import format_rating, format_record_title, format_tags, truncate

DESCRIPTION_WIDTH = 140


class ActivityItem(ListItem):
    """Individual activity card"""

    def __init__(self, record: Record):
        super().__init__()
        self.record = record

    def compose(self) -> ComposeResult:
        with Vertical(classes="activity-card"):
            with Horizontal(classes="activity-header"):
                yield Label(format_record_title(self.record), classes="activity-name", markup=False)
                yield Label(format_rating(self.record.rating), classes="activity-rating")
            yield Label(truncate(self.record.description, DESCRIPTION_WIDTH), classes="activity-description", markup=False)
            with Horizontal(classes="activity-meta"):
                yield Label(self.record.location, classes="activity-location", markup=False)
                yield Label(self.record.duration, classes="activity-duration", markup=False)
                yield Label(format_tags(self.record.tags), classes="activity-tags", markup=False)


class ListViewportObserver:
    """Report an observed list item once it is highlighted or scrolled into view.

    Visibility is checked after the next refresh, when the item has been laid
    out, and again whenever the list scrolls, resizes or moves its highlight.
    """

    def __init__(self, list_view: ListView):
        self._list_view = list_view
        self._element: ListItem | None = None
        self._callback: Callable[[ListItem], None] | None = None

    def observe(self, element: ListItem, callback: Callable[[ListItem], None]) -> None:
        self._element = element
        self._callback = callback
        self._list_view.call_after_refresh(self.check)

    def disconnect(self) -> None:
        self._element = None
        self._callback = None

    def check(self) -> None:
        element, callback = self._element, self._callback
        if element is None or callback is None or not element.is_attached:
            return
        if self._is_visible(element):
            callback(element)

    def _is_visible(self, element: ListItem) -> bool:
        if element is self._list_view.highlighted_child:
            return True
        viewport_bottom = self._list_view.scroll_offset.y + self._list_view.scrollable_content_region.height
        return element.virtual_region.y < viewport_bottom


class ActivityList(Static):
    """Activity cards revealed page by page as the list scrolls."""

    class ActivitySelected(Message):
        """Message sent when an activity is selected."""

        def __init__(self, record: Record) -> None:
            super().__init__()
            self.record = record

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._window: tuple[Record, ...] = ()
        self._items: list[ActivityItem] = []
        self._list_view = ListView(id="activity-list-view")
        self.observer = ListViewportObserver(self._list_view)

    def compose(self) -> ComposeResult:
        with Vertical(id="activity-list-container"):
            yield self._list_view
            yield LoadingIndicator(id="activity-loading")
            yield Static(
                "No activities found. Try adjusting your filters or search terms (Esc clears all filters).",
                id="activity-empty",
            )
            yield Static("You've seen all activities", id="activity-end")

    def on_mount(self) -> None:
        self.watch(self._list_view, "scroll_y", self._on_list_scrolled, init=False)

    # Event handlers
    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        event.stop()
        self.observer.check()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, ActivityItem):
            self.post_message(self.ActivitySelected(event.item.record))

    def on_resize(self) -> None:
        self.observer.check()

    def _on_list_scrolled(self) -> None:
        self.observer.check()

    # Public methods
    def show_snapshot(self, snapshot: Snapshot) -> ActivityItem | None:
        """Render ``snapshot`` and return the new sentinel (the last card), if any."""
        window = snapshot.displayed_window
        if window != self._window:
            self._update_items(window)

        self._update_status(snapshot)
        return self._items[-1] if self._items else None

    def focus_list(self) -> None:
        """Focus the activity list view"""
        try:
            list_view = self.query_one("#activity-list-view", ListView)
            if len(list_view.children) > 0:
                list_view.focus()
        except Exception:
            super().focus()

    # Private methods
    def _update_items(self, window: tuple[Record, ...]) -> None:
        list_view = self._list_view
        shown = len(self._window)

        if self._window and window[:shown] == self._window:
            # Cursor advanced: keep existing cards and scroll position
            new_items = [ActivityItem(record) for record in window[shown:]]
            self._items.extend(new_items)
        else:
            list_view.clear()
            new_items = [ActivityItem(record) for record in window]
            self._items = list(new_items)

        if new_items:
            list_view.extend(new_items)
        self._window = window

    def _update_status(self, snapshot: Snapshot) -> None:
        try:
            has_items = bool(snapshot.displayed_window)
            self.query_one("#activity-loading", LoadingIndicator).display = snapshot.is_busy
            self.query_one("#activity-empty", Static).display = not snapshot.is_busy and not has_items
            self.query_one("#activity-end", Static).display = (
                not snapshot.is_busy and has_items and not snapshot.has_more
            )
        except Exception:
            pass
