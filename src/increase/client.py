from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from increase.config import ClientConfig
from increase.errors import ConfigurationError
from increase.transport import Connection

logger = logging.getLogger(__name__)


class Client:
    """Configuration plus the connection every resource call goes through."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        **overrides: Any,
    ):
        if config is None:
            try:
                config = ClientConfig(**overrides)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid client configuration: {e}") from e
        elif overrides:
            config = config.model_copy(update=overrides)

        self.config = config
        self.connection = Connection(config, transport=transport)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client(base_url={self.config.resolved_base_url!r})"


_default_client: Optional[Client] = None
_default_lock = threading.Lock()


def set_default_client(client: Optional[Client]) -> None:
    """
    Install the process-wide client used when a resource gets none. Call once at startup.

    The client being replaced is closed.
    """
    global _default_client
    with _default_lock:
        previous, _default_client = _default_client, client
    if previous is not None and previous is not client:
        previous.close()


def get_default_client() -> Client:
    global _default_client
    with _default_lock:
        if _default_client is None:
            logger.debug("building default client from environment")
            _default_client = Client()
        return _default_client
