from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Union

from increase.pagination import PageHandler, Paginator
from increase.response import ResponseHash

CONTENT_TYPE = "Content-Type"
JSON = "application/json"


class Transport(Protocol):
    def send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> Any: ...


def _with_json_content_type(headers: Optional[Mapping[str, str]]) -> dict[str, str]:
    out = dict(headers or {})
    if not any(k.lower() == CONTENT_TYPE.lower() for k in out):
        out[CONTENT_TYPE] = JSON
    return out


class RequestExecutor:
    """Issues single requests through a transport and wraps the decoded body."""

    def __init__(self, connection: Transport):
        self.connection = connection
        self.paginator = Paginator(self)

    def execute(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ResponseHash:
        method = method.upper()
        if method == "POST":
            headers = _with_json_content_type(headers)

        # TransportError / ServerError from the connection propagate as-is
        response = self.connection.send(method, path, params, headers)
        return ResponseHash(response.body, response=response)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        callback: Optional[PageHandler] = None,
    ) -> Union[ResponseHash, None]:
        if callback is not None:
            # a handler means the caller wants pages, even from a plain endpoint
            return self.paginator.for_each_page(method, path, params, headers, callback)
        return self.execute(method, path, params, headers)
