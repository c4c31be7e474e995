from loguru import logger

from thingstodo.errors import FacetValidationError
from thingstodo.models import ALL
from thingstodo.services.filters import validate_facet
from thingstodo.services.navigation import QueryNavigator


class LocationSynchronizer:
    """Keep the selected location and a query parameter in step.

    The parameter is validated against the engine's current location options;
    an unknown value falls back to ``"all"``. Updates only flow when the value
    actually differs, so a push made by ``select`` comes back from the
    navigator as a no-op instead of another reset.
    """

    def __init__(self, engine, navigator: QueryNavigator, param: str = "city"):
        self._engine = engine
        self._navigator = navigator
        self.param = param
        self._unsubscribe = None

    @property
    def current(self) -> str:
        return self._engine.state.selected_location

    def initial_location(self) -> str:
        """The location named by the current query parameter, or ``"all"``."""
        return self._resolve(self._navigator.get(self.param))

    def mount(self) -> None:
        """Initialize the location from the query parameter and follow navigation."""
        self._apply(self.initial_location())
        if self._unsubscribe is None:
            self._unsubscribe = self._navigator.subscribe(self._on_navigation)

    def unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def select(self, value: str) -> None:
        """Handle a user-driven location change."""
        value = self._resolve(value)
        if value == self.current:
            return

        self._engine.set_location(value)
        self._navigator.set_param(self.param, None if value == ALL else value)

    def _on_navigation(self, params: dict[str, str]) -> None:
        self._apply(self._resolve(params.get(self.param)))

    def _apply(self, value: str) -> None:
        if value != self.current:
            self._engine.set_location(value)

    def _resolve(self, value: str | None) -> str:
        if not value:
            return ALL
        try:
            return validate_facet(value, self._engine.location_options, facet=self.param)
        except FacetValidationError as e:
            logger.debug(f"{e}, falling back to '{ALL}'")
            return ALL
