from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar with the result summary and data status indicator"""

    summary: str = reactive("")
    data_error: bool = reactive(False)

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("ThingsToDo", id="title")
            with Horizontal(id="status-container"):
                yield Static("●", id="data-indicator")
                yield Static("", id="result-summary")

    def watch_summary(self, summary: str) -> None:
        try:
            self.query_one("#result-summary", Static).update(summary)
        except Exception:
            # Not composed yet
            pass

    def watch_data_error(self, data_error: bool) -> None:
        """Turn the indicator red while the activity data failed to load."""
        try:
            self.query_one("#data-indicator", Static).set_class(data_error, "error")
        except Exception:
            pass
