from __future__ import annotations

from typing import Any, Optional


class IncreaseError(Exception):
    """Base class for everything this library raises on purpose."""


class DefinitionError(IncreaseError):
    """An endpoint (or resource type) was declared with an invalid shape."""


class ConfigurationError(IncreaseError):
    pass


class TransportError(IncreaseError):
    """The request never produced an HTTP response (DNS, connect, timeout, ...)."""


class DecodeError(IncreaseError):
    pass


class ServerError(IncreaseError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, body: Any = None, message: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message or _describe(status_code, body))


def _describe(status_code: int, body: Any) -> str:
    # API errors look like {"type": ..., "title": ..., "detail": ...}
    if isinstance(body, dict):
        title = body.get("title") or body.get("type")
        detail = body.get("detail")
        if title and detail:
            return f"HTTP {status_code}: {title}: {detail}"
        if title:
            return f"HTTP {status_code}: {title}"
    if isinstance(body, str) and body.strip():
        return f"HTTP {status_code}: {body.strip()[:200]}"
    return f"HTTP {status_code}"
