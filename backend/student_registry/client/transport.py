# student_registry/client/transport.py
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class TransportError(Exception):
    """Non-success HTTP status returned by the remote API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class HttpTransport:
    """
    Sends dispatcher requests to the HTTP API.

    The underlying httpx client keeps cookies between calls. There is no
    timeout and no retry: a hang or failure reaches the caller as is.
    """

    def __init__(self, base_url: str = "", client: Optional[httpx.Client] = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=None, follow_redirects=True)

    def request(self, method: str, url: str, payload: Any = None) -> Any:
        kwargs = {}
        if payload is not None:
            kwargs["json"] = payload

        response = self._client.request(method, url, **kwargs)
        if not response.is_success:
            message = response.text or response.reason_phrase
            logger.debug(f"{method} {url} failed with {response.status_code}")
            raise TransportError(response.status_code, message)
        return response.json()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
