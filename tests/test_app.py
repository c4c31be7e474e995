from textual.widgets import Input, Select

from thingstodo.config import AppConfig
from thingstodo.services.discovery import DiscoveryEngine
from thingstodo.ui.app import ThingsToDoApp
from thingstodo.ui.screens.main_screen import MainScreen
from thingstodo.ui.widgets.location_bar import LocationBar
from thingstodo.ui.widgets.tag_list import TagList
from thingstodo.ui.widgets.title_bar import TitleBar


async def _wait_until_settled(pilot, engine, attempts=60):
    for _ in range(attempts):
        await pilot.pause(0.05)
        if engine.pipeline.settle_count and not engine.is_busy:
            return


async def test_app_starts_on_city_from_url(activities_csv, monkeypatch):
    locations = []
    set_location = DiscoveryEngine.set_location

    def recording_set_location(self, location):
        locations.append(location)
        set_location(self, location)

    monkeypatch.setattr(DiscoveryEngine, "set_location", recording_set_location)
    app = ThingsToDoApp(AppConfig(data_file=str(activities_csv)), initial_url="/?city=Bali")

    async with app.run_test() as pilot:
        screen = app.screen
        assert isinstance(screen, MainScreen)
        await _wait_until_settled(pilot, screen.engine)
        await pilot.pause(0.5)

        assert locations == ["Bali"]
        assert screen.engine.state.selected_location == "Bali"
        assert [r.id for r in screen.engine.window] == ["1"]
        assert not screen.engine.is_busy
        assert screen.query_one("#location-select", Select).value == "Bali"
        assert app.navigator.url == "/?city=Bali"
        assert screen.query_one("#location-bar", LocationBar).get_url() == "/?city=Bali"
        assert screen.query_one("#title-bar", TitleBar).summary == "1 of 1 activities in Bali"


async def test_app_runs_with_zero_delays(activities_csv):
    config = AppConfig(data_file=str(activities_csv), debounce_ms=0, load_delay_ms=0)
    app = ThingsToDoApp(config)

    async with app.run_test() as pilot:
        engine = app.screen.engine
        await _wait_until_settled(pilot, engine)

        assert [r.id for r in engine.window] == ["1", "2"]
        assert not engine.has_more


async def test_choosing_a_tag_searches_for_it(activities_csv):
    app = ThingsToDoApp(AppConfig(data_file=str(activities_csv), debounce_ms=10, load_delay_ms=10))

    async with app.run_test() as pilot:
        screen = app.screen
        engine = screen.engine
        await _wait_until_settled(pilot, engine)

        screen.query_one("#tag-list", TagList).post_message(TagList.TagSelected("history"))
        await pilot.pause(0.1)
        await _wait_until_settled(pilot, engine)

        assert engine.state.search_text == "history"
        assert [r.id for r in engine.window] == ["2"]
        assert screen.query_one("#search-input", Input).value == "history"


async def test_app_survives_missing_data(tmp_path):
    app = ThingsToDoApp(AppConfig(data_file=str(tmp_path / "missing.csv")))

    async with app.run_test() as pilot:
        await pilot.pause(0.2)
        assert app.store.load_error is not None
        assert app.screen.query_one("#title-bar", TitleBar).data_error
