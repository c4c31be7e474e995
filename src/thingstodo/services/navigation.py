from collections.abc import Callable
from urllib.parse import parse_qsl, urlencode, urlsplit

Listener = Callable[[dict[str, str]], None]


class QueryNavigator:
    """In-memory browser-style history of ``path?query`` locations.

    ``push`` adds a location and drops any forward entries; ``back`` and
    ``forward`` move through the history. Listeners are called with the new
    query parameters after every location change.
    """

    def __init__(self, initial_url: str = "/"):
        self._history = [self._normalize(initial_url)]
        self._position = 0
        self._listeners: list[Listener] = []

    @staticmethod
    def _normalize(url: str) -> str:
        parts = urlsplit(url)
        path = parts.path or "/"
        query = urlencode(parse_qsl(parts.query))
        return f"{path}?{query}" if query else path

    @property
    def url(self) -> str:
        return self._history[self._position]

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    @property
    def params(self) -> dict[str, str]:
        return dict(parse_qsl(urlsplit(self.url).query))

    def get(self, name: str) -> str | None:
        return self.params.get(name)

    @property
    def can_go_back(self) -> bool:
        return self._position > 0

    @property
    def can_go_forward(self) -> bool:
        return self._position < len(self._history) - 1

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def push(self, params: dict[str, str], path: str | None = None) -> bool:
        """Navigate to ``path`` with ``params``. Returns False if the location is unchanged."""
        query = urlencode(params)
        target = path or self.path
        url = f"{target}?{query}" if query else target
        if url == self.url:
            return False

        del self._history[self._position + 1 :]
        self._history.append(url)
        self._position += 1
        self._notify()
        return True

    def set_param(self, name: str, value: str | None) -> bool:
        """Set or, when ``value`` is None, remove one query parameter."""
        params = self.params
        if value is None:
            params.pop(name, None)
        else:
            params[name] = value
        return self.push(params)

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self._position -= 1
        self._notify()
        return True

    def forward(self) -> bool:
        if not self.can_go_forward:
            return False
        self._position += 1
        self._notify()
        return True

    def _notify(self) -> None:
        params = self.params
        for listener in list(self._listeners):
            listener(params)
