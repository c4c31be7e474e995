"""Location bar widget for displaying the current query location."""

from textual.widgets import Static


class LocationBar(Static):
    """Widget showing the current location, e.g. ``/?city=Bali``."""

    def __init__(self, initial_url: str = "/", **kwargs):
        super().__init__(f"Location: {initial_url}", markup=False, **kwargs)
        self._current_url = initial_url

    def update_url(self, url: str) -> None:
        """Update the current location and display."""
        if url == self._current_url:
            return
        self._current_url = url
        self.update(f"Location: {url}")

    def get_url(self) -> str:
        return self._current_url
