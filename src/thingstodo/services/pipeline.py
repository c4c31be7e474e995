from collections.abc import Callable, Sequence
from dataclasses import replace

from loguru import logger

from thingstodo.models import FilterState, Record
from thingstodo.services.filters import filter_records
from thingstodo.services.timers import Scheduler, TimerSlot


class FilterPipeline:
    """Debounced recomputation of the filtered result.

    Each setter that changes the filter state moves the pipeline to
    *settling* and restarts a single debounce timer. When the timer fires the
    pipeline is *settled*: the filtered result is recomputed from the latest
    state and handed to ``on_settled``.
    """

    def __init__(
        self,
        records: Sequence[Record],
        scheduler: Scheduler,
        on_settled: Callable[[tuple[Record, ...]], None],
        debounce: float = 0.3,
        search_location: bool = True,
        on_settling: Callable[[], None] | None = None,
    ):
        self._records = records
        self._on_settled = on_settled
        self._on_settling = on_settling
        self._timer = TimerSlot(scheduler)
        self.debounce = debounce
        self.search_location = search_location

        self.state = FilterState()
        self.filtered: tuple[Record, ...] = ()
        self.settle_count = 0

    @property
    def is_settling(self) -> bool:
        return self._timer.pending

    # Setters
    def set_search_text(self, text: str) -> None:
        self._update(search_text=text)

    def set_location(self, location: str) -> None:
        self._update(selected_location=location)

    def set_duration(self, duration: str) -> None:
        self._update(selected_duration=duration)

    def refresh(self) -> None:
        """Schedule a recomputation without changing the state."""
        self._schedule()

    def cancel(self) -> None:
        """Drop any pending recomputation."""
        self._timer.cancel()

    # Private methods
    def _update(self, **changes) -> None:
        new_state = replace(self.state, **changes)
        if new_state == self.state:
            return

        self.state = new_state
        self._schedule()

    def _schedule(self) -> None:
        self._timer.replace(self.debounce, self._settle)
        if self._on_settling:
            self._on_settling()

    def _settle(self) -> None:
        state = self.state
        self.filtered = filter_records(self._records, state, self.search_location)
        self.settle_count += 1
        logger.debug(
            f"Filters settled: text='{state.search_text}' location='{state.selected_location}' "
            f"duration='{state.selected_duration}' -> {len(self.filtered)} activities"
        )
        self._on_settled(self.filtered)
