from collections.abc import Callable

from loguru import logger

from thingstodo.models import ALL, Record, Snapshot
from thingstodo.services.filters import DURATION_OPTIONS, location_options
from thingstodo.services.load_controller import ScrollLoadController, ViewportObserver
from thingstodo.services.paginator import paginate
from thingstodo.services.pipeline import FilterPipeline
from thingstodo.services.record_store import RecordStore
from thingstodo.services.timers import Scheduler, TimerSlot


class DiscoveryEngine:
    """Search, filter and incrementally reveal the activities of a store.

    Filter changes go through a debounced ``FilterPipeline``. Every settle
    resets the cursor to 1 and clears the window; the window is then
    recomputed after ``load_delay``. ``advance`` reveals one more page the
    same way. While either step is pending the engine is busy and further
    advances are refused.
    """

    def __init__(
        self,
        store: RecordStore,
        scheduler: Scheduler,
        page_size: int = 9,
        debounce: float = 0.3,
        load_delay: float = 0.5,
        search_location: bool = True,
        sort_by_rating: bool = False,
    ):
        self.store = store
        self.page_size = page_size
        self.load_delay = load_delay
        self.location_options = location_options(store)
        self.duration_options = DURATION_OPTIONS

        records = store.by_rating() if sort_by_rating else store.records
        self.pipeline = FilterPipeline(
            records,
            scheduler,
            on_settled=self._on_settled,
            debounce=debounce,
            search_location=search_location,
            on_settling=self._on_settling,
        )
        self._load_timer = TimerSlot(scheduler)
        self._controller: ScrollLoadController | None = None
        self._listeners: list[Callable[[Snapshot], None]] = []

        self.cursor = 1
        self.window: tuple[Record, ...] = ()
        self.has_more = True
        self.is_loading = False

    # Render boundary
    @property
    def state(self):
        return self.pipeline.state

    @property
    def filtered(self) -> tuple[Record, ...]:
        return self.pipeline.filtered

    @property
    def is_busy(self) -> bool:
        return self.pipeline.is_settling or self.is_loading

    def snapshot(self) -> Snapshot:
        return Snapshot(
            displayed_window=self.window,
            filtered_count=len(self.pipeline.filtered),
            total_count=len(self.store),
            has_more=self.has_more,
            is_busy=self.is_busy,
        )

    def subscribe(self, listener: Callable[[Snapshot], None]) -> Callable[[], None]:
        """Register a render callback. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Mutators
    def start(self) -> None:
        """Compute the initial result for the current filters."""
        self.pipeline.refresh()

    def set_search_text(self, text: str) -> None:
        self.pipeline.set_search_text(text)

    def set_location(self, location: str) -> None:
        self.pipeline.set_location(location)

    def set_duration(self, duration: str) -> None:
        self.pipeline.set_duration(duration)

    def clear_filters(self) -> None:
        self.pipeline.set_search_text("")
        self.pipeline.set_location(ALL)
        self.pipeline.set_duration(ALL)

    def bind_observer(self, observer: ViewportObserver) -> ScrollLoadController:
        """Create the scroll load controller for ``observer``."""
        if self._controller:
            self._controller.detach()
        self._controller = ScrollLoadController(self, observer)
        return self._controller

    def attach_sentinel(self, element) -> None:
        if self._controller:
            self._controller.attach_sentinel(element)

    def advance(self) -> bool:
        """Reveal the next page. Returns False when busy or exhausted."""
        if self.is_busy or not self.has_more:
            return False

        self.cursor += 1
        self._schedule_window()
        return True

    def close(self) -> None:
        """Cancel every pending timer and stop observing."""
        self.pipeline.cancel()
        self._load_timer.cancel()
        if self._controller:
            self._controller.detach()
        self._listeners.clear()

    # Private methods
    def _on_settling(self) -> None:
        # A pending window computation belongs to the previous filters
        self._load_timer.cancel()
        self.is_loading = False
        self._notify()

    def _on_settled(self, filtered: tuple[Record, ...]) -> None:
        self.cursor = 1
        self.window = ()
        self.has_more = True
        self._schedule_window()

    def _schedule_window(self) -> None:
        self.is_loading = True
        self._notify()
        self._load_timer.replace(self.load_delay, self._commit_window)

    def _commit_window(self) -> None:
        page = paginate(self.pipeline.filtered, self.cursor, self.page_size)
        self.window = page.window
        self.has_more = page.has_more
        self.is_loading = False
        logger.debug(f"Showing {len(self.window)} of {len(self.pipeline.filtered)} activities (page {self.cursor})")
        self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)
