# student_registry/client/dispatcher.py
import logging
from typing import Any, Optional

from ..config import Settings, settings
from ..services.record_store import RecordStore
from .routes import ROUTES, match_route
from .transport import HttpTransport

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Uniform (method, path, payload) call contract for desktop and web mode.

    With a local store, matched routes are served in process and return the
    same JSON shapes the HTTP API would. Unmatched paths, and every path when
    no store is attached, go through the HTTP transport unchanged.
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        transport: Optional[HttpTransport] = None,
        routes=ROUTES,
        owns_store: bool = False,
    ):
        self.store = store
        self.transport = transport or HttpTransport(settings.API_BASE_URL)
        self.routes = routes
        self._owns_store = owns_store

    @classmethod
    def from_settings(cls, config: Settings = settings) -> "Dispatcher":
        store = RecordStore(config.DATABASE_URL, wal=config.SQLITE_WAL).open() if config.DESKTOP_MODE else None
        return cls(store=store, transport=HttpTransport(config.API_BASE_URL), owns_store=True)

    @property
    def is_local(self) -> bool:
        return self.store is not None

    def request(self, method: str, url: str, payload: Any = None) -> Any:
        method = method.upper()
        match = match_route(method, url, self.routes)

        body = None
        if match is not None and match.route.body is not None:
            body = match.route.body.model_validate(payload if payload is not None else {})

        if match is not None and self.store is not None:
            logger.debug(f"{method} {url} -> local {match.route.handler.__name__}")
            return match.route.handler(self.store, match, body)

        if body is not None:
            payload = body.model_dump(mode="json", by_alias=True, exclude_unset=True)
        logger.debug(f"{method} {url} -> network")
        return self.transport.request(method, url, payload)

    def close(self) -> None:
        self.transport.close()
        if self._owns_store and self.store is not None:
            self.store.close()

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
