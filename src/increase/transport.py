from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from increase.config import ClientConfig
from increase.errors import ServerError, TransportError

logger = logging.getLogger(__name__)

# Methods whose params travel in the query string; everything else gets a JSON body.
_QUERY_METHODS = {"GET", "DELETE", "HEAD"}


@dataclass(frozen=True)
class Response:
    status_code: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)


class Connection:
    """Thin synchronous HTTP layer over one httpx.Client."""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.BaseTransport] = None):
        self.config = config
        headers = {
            "Accept": "application/json",
            "User-Agent": config.user_agent,
        }
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"

        self._http = httpx.Client(
            base_url=config.resolved_base_url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    def send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Response:
        method = method.upper()
        kwargs: dict[str, Any] = {"headers": dict(headers or {})}
        if params:
            if method in _QUERY_METHODS:
                kwargs["params"] = {k: v for k, v in params.items() if v is not None}
            else:
                kwargs["json"] = dict(params)

        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise TransportError(f"{method} {path} failed: {e}") from e

        logger.debug("%s %s -> %s", method, path, resp.status_code)
        body = _decode_body(resp)
        if resp.status_code >= 400:
            raise ServerError(resp.status_code, body)

        return Response(status_code=resp.status_code, body=body, headers=dict(resp.headers))

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def _decode_body(resp: httpx.Response) -> Any:
    if not resp.content:
        return {}
    try:
        return resp.json()
    except ValueError:
        return resp.text
