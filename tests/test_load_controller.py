from thingstodo.models import Snapshot
from thingstodo.services.load_controller import ScrollLoadController

from .test_discovery import FakeObserver


class FakeEngine:
    def __init__(self, has_more=True, is_busy=False):
        self.has_more = has_more
        self.is_busy = is_busy
        self.advances = 0

    def snapshot(self):
        return Snapshot(
            displayed_window=(),
            filtered_count=0,
            total_count=0,
            has_more=self.has_more,
            is_busy=self.is_busy,
        )

    def advance(self):
        self.advances += 1
        return True


def test_visible_sentinel_advances():
    engine, observer = FakeEngine(), FakeObserver()
    controller = ScrollLoadController(engine, observer)
    controller.attach_sentinel("card-9")
    observer.scroll_into_view()
    assert engine.advances == 1


def test_previous_sentinel_is_disconnected_first():
    engine, observer = FakeEngine(), FakeObserver()
    controller = ScrollLoadController(engine, observer)
    controller.attach_sentinel("card-9")
    controller.attach_sentinel("card-18")
    assert observer.disconnects == 2
    assert observer.observed == ["card-9", "card-18"]
    assert controller.sentinel == "card-18"


def test_no_sentinel_means_nothing_observed():
    engine, observer = FakeEngine(), FakeObserver()
    controller = ScrollLoadController(engine, observer)
    controller.attach_sentinel(None)
    assert observer.observed == []
    assert controller.sentinel is None


def test_guards():
    observer = FakeObserver()

    exhausted = FakeEngine(has_more=False)
    ScrollLoadController(exhausted, observer).attach_sentinel("card")
    observer.scroll_into_view()
    assert exhausted.advances == 0

    busy = FakeEngine(is_busy=True)
    ScrollLoadController(busy, observer).attach_sentinel("card")
    observer.scroll_into_view()
    assert busy.advances == 0


def test_stale_element_is_ignored():
    engine, observer = FakeEngine(), FakeObserver()
    controller = ScrollLoadController(engine, observer)
    controller.attach_sentinel("card-9")
    stale_callback = observer.callback
    controller.attach_sentinel("card-18")

    stale_callback("card-9")
    assert engine.advances == 0


def test_detach():
    engine, observer = FakeEngine(), FakeObserver()
    controller = ScrollLoadController(engine, observer)
    controller.attach_sentinel("card-9")
    controller.detach()
    observer.scroll_into_view()
    assert engine.advances == 0
    assert controller.sentinel is None
