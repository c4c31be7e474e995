from collections.abc import Callable
from typing import Any, Protocol


class ViewportObserver(Protocol):
    """Reports when an observed element becomes visible."""

    def observe(self, element: Any, callback: Callable[[Any], None]) -> None: ...

    def disconnect(self) -> None: ...


class ScrollLoadController:
    """Advance the engine's cursor when the last displayed item comes into view."""

    def __init__(self, engine, observer: ViewportObserver):
        self._engine = engine
        self._observer = observer
        self.sentinel: Any = None

    def attach_sentinel(self, element: Any) -> None:
        """Observe ``element`` instead of the previous sentinel."""
        self._observer.disconnect()
        self.sentinel = element
        if element is not None:
            self._observer.observe(element, self._on_visible)

    def detach(self) -> None:
        self._observer.disconnect()
        self.sentinel = None

    def _on_visible(self, element: Any) -> None:
        # Stale element from a previous render
        if element is not self.sentinel:
            return

        snapshot = self._engine.snapshot()
        if not snapshot.has_more or snapshot.is_busy:
            return

        self._engine.advance()
