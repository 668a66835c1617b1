# student_registry/client/cache.py
from typing import Any, Dict, Iterable, Sequence, Tuple, Union

from .dispatcher import Dispatcher

KeyPrefix = Union[str, Sequence[Any]]


class QueryCache:
    """
    Read cache above the dispatcher, keyed by the parts of the request path.

    GET results never go stale on their own; writes made through mutate()
    drop the keys they name. Failures are never cached.
    """

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        self._entries: Dict[Tuple[str, ...], Any] = {}

    @staticmethod
    def _key(parts: Iterable[Any]) -> Tuple[str, ...]:
        return tuple(str(part) for part in parts)

    def fetch(self, *key: Any) -> Any:
        cache_key = self._key(key)
        if cache_key not in self._entries:
            self._entries[cache_key] = self.dispatcher.request("GET", "/".join(cache_key))
        return self._entries[cache_key]

    def mutate(self, method: str, url: str, payload: Any = None, invalidate: Iterable[KeyPrefix] = ()) -> Any:
        result = self.dispatcher.request(method, url, payload)
        for prefix in invalidate:
            if isinstance(prefix, str):
                self.invalidate(prefix)
            else:
                self.invalidate(*prefix)
        return result

    def invalidate(self, *prefix: Any) -> None:
        prefix_key = self._key(prefix)
        for key in [k for k in self._entries if k[: len(prefix_key)] == prefix_key]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Any) -> bool:
        parts = (key,) if isinstance(key, str) else key
        return self._key(parts) in self._entries
