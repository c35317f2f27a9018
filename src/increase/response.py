from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, Optional

from increase.errors import DecodeError


class ResponseHash(Mapping[str, Any]):
    """
    Read-only view over a decoded response body.

    Keeps a handle on the transport response so callers can still reach
    status and headers.
    """

    def __init__(self, body: Any, response: Any = None):
        self._data = _decode(body)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.response, "status_code", None)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResponseHash):
            return self._data == other._data
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResponseHash({self._data!r})"

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def _decode(body: Any) -> dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, Mapping):
        return dict(body)
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        if not body.strip():
            return {}
        try:
            body = json.loads(body)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Response body is not valid JSON: {e}") from e
        if isinstance(body, dict):
            return body
    raise DecodeError(f"Expected a JSON object, got {type(body).__name__}")
