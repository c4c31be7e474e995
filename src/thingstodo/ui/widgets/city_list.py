from textual.app import ComposeResult
from textual.containers import Vertical
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from thingstodo.models import ALL

MAX_CITIES = 8


class CityItem(ListItem):
    """Individual city item widget"""

    def __init__(self, value: str, label: str, count: int):
        super().__init__()
        self._value = value
        self._label = label
        self._count = count

    def compose(self) -> ComposeResult:
        yield Label(self._label, classes="city-name", markup=False)
        yield Label(f"{self._count} activities", classes="city-meta")

    @property
    def value(self) -> str:
        return self._value


class CityList(Static):
    """Left panel listing the most popular cities"""

    class CitySelected(Message):
        """Message sent when a city is selected"""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, cities: list[tuple[str, int]], **kwargs):
        """Initialize the city list.

        Args:
            cities: (city, activity count) pairs, most popular first.
        """
        super().__init__(**kwargs)
        self._cities = cities[:MAX_CITIES]
        self._total = sum(count for _, count in cities)

    def compose(self) -> ComposeResult:
        with Vertical(id="city-list-container"):
            yield Static(f"Cities ({len(self._cities)})", id="city-panel-title")
            yield ListView(
                CityItem(ALL, "All Locations", self._total),
                *(CityItem(city, city, count) for city, count in self._cities),
                id="city-list-view",
            )

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle city selection from ListView"""
        if isinstance(event.item, CityItem):
            event.stop()
            self.post_message(self.CitySelected(event.item.value))
