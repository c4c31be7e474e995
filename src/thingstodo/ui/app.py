"""Main ThingsToDo application."""

from textual.app import App
from textual.binding import Binding

from thingstodo.config import AppConfig
from thingstodo.gateways.llm import ArkGateway
from thingstodo.services.itinerary import ItineraryPlanner
from thingstodo.services.navigation import QueryNavigator
from thingstodo.services.record_store import RecordStore
from thingstodo.ui.screens.main_screen import MainScreen


class ThingsToDoApp(App):
    """ThingsToDo terminal application."""

    TITLE = "ThingsToDo"
    CSS_PATH = "app.tcss"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, app_config: AppConfig, initial_url: str = "/", **kwargs):
        """Initialize the app.

        Args:
            app_config: Validated application configuration.
            initial_url: Starting location, e.g. "/?city=Bali".
        """
        super().__init__(**kwargs)
        self.app_config = app_config

        # One store per session, shared read-only by every screen
        self.store = RecordStore.load(app_config.data_file)
        self.navigator = QueryNavigator(initial_url)
        self.planner = ItineraryPlanner(
            self.store.records,
            ArkGateway(
                api_key=app_config.ark_api_key,
                endpoint=app_config.ark_endpoint,
                model=app_config.ark_model,
                timeout=app_config.request_timeout,
            ),
        )

    def on_mount(self) -> None:
        """Called when app starts."""
        self.theme = self.app_config.theme
        self.push_screen(MainScreen())
