"""Itinerary modal for planning a trip from the loaded activities."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, LoadingIndicator, Select, Static

from thingstodo.services.itinerary import (
    BUDGETS,
    PACE_ACTIVITIES,
    PACE_RANGES,
    ItineraryPlanner,
    ItineraryResult,
    Preferences,
)
from thingstodo.ui.utils import format_rating


# UI Element IDs
class ItineraryModalIDs:
    """Constants for UI element IDs."""

    ITINERARY_MODAL = "itinerary-modal"
    MODAL_TITLE = "modal-title"
    FORM_CONTAINER = "form-container"
    DESTINATION_INPUT = "destination-input"
    DURATION_INPUT = "duration-input"
    TRAVELERS_INPUT = "travelers-input"
    BUDGET_SELECT = "budget-select"
    PACE_SELECT = "pace-select"
    INTERESTS_INPUT = "interests-input"
    RESULTS = "itinerary-results"
    LOADING = "itinerary-loading"
    BUTTON_CONTAINER = "button-container"
    GENERATE_BUTTON = "generate-btn"
    CANCEL_BUTTON = "cancel-btn"


class ItineraryModal(ModalScreen):
    """Modal screen collecting trip preferences and showing the generated plan."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
    ]

    def __init__(self, planner: ItineraryPlanner, destination: str = "") -> None:
        """Initialize the itinerary modal.

        Args:
            planner: Planner bound to the current activity store.
            destination: Initial destination, usually the selected location.
        """
        super().__init__()
        self.planner = planner
        self.destination = destination

    def compose(self) -> ComposeResult:
        """Create the layout for the itinerary modal."""
        with Vertical(id=ItineraryModalIDs.ITINERARY_MODAL):
            yield Static("Plan a Trip", id=ItineraryModalIDs.MODAL_TITLE)

            with Vertical(id=ItineraryModalIDs.FORM_CONTAINER):
                yield Label("Destination:")
                yield Input(value=self.destination, placeholder="e.g. Bali", id=ItineraryModalIDs.DESTINATION_INPUT)
                with Horizontal(classes="form-row"):
                    with Vertical(classes="form-field"):
                        yield Label("Days:")
                        yield Input(value="3", type="integer", id=ItineraryModalIDs.DURATION_INPUT)
                    with Vertical(classes="form-field"):
                        yield Label("Travelers:")
                        yield Input(value="2", type="integer", id=ItineraryModalIDs.TRAVELERS_INPUT)
                with Horizontal(classes="form-row"):
                    with Vertical(classes="form-field"):
                        yield Label("Budget:")
                        yield Select(
                            [(budget.title(), budget) for budget in BUDGETS],
                            allow_blank=False,
                            value="moderate",
                            id=ItineraryModalIDs.BUDGET_SELECT,
                        )
                    with Vertical(classes="form-field"):
                        yield Label("Pace:")
                        yield Select(
                            [(f"{pace.title()} ({PACE_RANGES[pace]}/day)", pace) for pace in PACE_ACTIVITIES],
                            allow_blank=False,
                            value="moderate",
                            id=ItineraryModalIDs.PACE_SELECT,
                        )
                yield Label("Interests (comma separated):")
                yield Input(placeholder="temple, beach, food", id=ItineraryModalIDs.INTERESTS_INPUT)

            yield LoadingIndicator(id=ItineraryModalIDs.LOADING)
            yield VerticalScroll(id=ItineraryModalIDs.RESULTS)

            with Horizontal(id=ItineraryModalIDs.BUTTON_CONTAINER):
                yield Button("Generate", variant="primary", id=ItineraryModalIDs.GENERATE_BUTTON)
                yield Button("Close", variant="default", id=ItineraryModalIDs.CANCEL_BUTTON)

    def on_mount(self) -> None:
        self.query_one(f"#{ItineraryModalIDs.LOADING}", LoadingIndicator).display = False

    def action_dismiss(self) -> None:
        """Dismiss the modal."""
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == ItineraryModalIDs.CANCEL_BUTTON:
            self.action_dismiss()
        elif event.button.id == ItineraryModalIDs.GENERATE_BUTTON:
            self._validate_and_generate()

    def _validate_and_generate(self) -> None:
        """Validate the form and start planning if valid."""
        try:
            prefs = self._read_preferences()
        except ValueError as e:
            self.notify(str(e), severity="error")
            return

        self._generate(prefs)

    def _read_preferences(self) -> Preferences:
        def value_of(element_id: str) -> str:
            return self.query_one(f"#{element_id}", Input).value.strip()

        try:
            duration = int(value_of(ItineraryModalIDs.DURATION_INPUT) or 0)
            travelers = int(value_of(ItineraryModalIDs.TRAVELERS_INPUT) or 0)
        except ValueError:
            raise ValueError("Days and travelers must be whole numbers")

        interests = [item.strip() for item in value_of(ItineraryModalIDs.INTERESTS_INPUT).split(",") if item.strip()]
        return Preferences(
            destination=value_of(ItineraryModalIDs.DESTINATION_INPUT),
            duration=duration,
            travelers=travelers,
            budget=str(self.query_one(f"#{ItineraryModalIDs.BUDGET_SELECT}", Select).value),
            interests=interests,
            pace=str(self.query_one(f"#{ItineraryModalIDs.PACE_SELECT}", Select).value),
        )

    @work(exclusive=True)
    async def _generate(self, prefs: Preferences) -> None:
        """Plan the trip without blocking the UI."""
        loading = self.query_one(f"#{ItineraryModalIDs.LOADING}", LoadingIndicator)
        generate_button = self.query_one(f"#{ItineraryModalIDs.GENERATE_BUTTON}", Button)
        loading.display = True
        generate_button.disabled = True
        try:
            result = await self.planner.plan(prefs)
        finally:
            loading.display = False
            generate_button.disabled = False

        if result.warning:
            self.notify(result.warning, severity="warning", timeout=8)
        await self._show_result(result)

    async def _show_result(self, result: ItineraryResult) -> None:
        results = self.query_one(f"#{ItineraryModalIDs.RESULTS}", VerticalScroll)
        await results.remove_children()

        widgets = []
        for day in result.days:
            widgets.append(
                Label(f"Day {day.day} · {day.date} · {day.theme} ({day.total_duration})", classes="day-title", markup=False)
            )
            if not day.activities:
                widgets.append(Label("  No more activities available for this day", classes="day-empty"))
            for record in day.activities:
                widgets.append(
                    Label(
                        f"  • {record.name} | {record.duration} | {format_rating(record.rating)} | {record.location}",
                        classes="day-activity",
                        markup=False,
                    )
                )

        if not widgets:
            widgets.append(Label("No activities found for this destination", classes="day-empty"))
        await results.mount_all(widgets)
