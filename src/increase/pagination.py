from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Optional, Protocol, Union

from increase.response import ResponseHash

logger = logging.getLogger(__name__)

LIMIT_KEY = "limit"
CURSOR_KEY = "cursor"
ALL = "all"

# Above this the server rejects `limit`, so it is only enforced client-side.
MAX_PAGE_SIZE = 100

Page = list
PageHandler = Callable[[Any], None]


@dataclass(frozen=True)
class Unbounded:
    """No limit given: fetch exactly one page."""


@dataclass(frozen=True)
class All:
    """Follow cursors until the server runs out of pages."""


@dataclass(frozen=True)
class Bounded:
    n: int


Limit = Union[Unbounded, All, Bounded]


def parse_limit(params: Optional[Mapping[str, Any]]) -> Limit:
    raw = (params or {}).get(LIMIT_KEY)
    if raw is None:
        return Unbounded()
    if raw == ALL:
        return All()
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"limit must be an int or {ALL!r}, got {raw!r}")
    if raw < 0:
        raise ValueError(f"limit must be >= 0, got {raw}")
    return Bounded(raw)


def _outgoing_params(params: Optional[Mapping[str, Any]], limit: Limit) -> dict[str, Any]:
    out = dict(params or {})
    if isinstance(limit, All) or (isinstance(limit, Bounded) and limit.n > MAX_PAGE_SIZE):
        # let the server pick its default page size
        out = {k: v for k, v in out.items() if k != LIMIT_KEY}
    return out


class Executor(Protocol):
    def execute(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ResponseHash: ...


class Paginator:
    """
    Cursor-following page loop.

    The total delivered across pages never exceeds a finite `limit`; the
    last page is trimmed when the server's page size overshoots it.
    """

    def __init__(self, executor: Executor):
        self.executor = executor

    def _fetch(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
    ) -> Iterator[tuple[Optional[Page], ResponseHash]]:
        limit = parse_limit(params)
        current = _outgoing_params(params, limit)
        count = 0
        pages = 0

        while True:
            res = self.executor.execute(method, path, current, headers)
            pages += 1
            data = res.get("data")
            if data is None:
                # not a list endpoint; hand the whole response over once
                yield None, res
                return

            data = list(data)
            count += len(data)
            if isinstance(limit, Bounded) and count >= limit.n:
                data = data[: limit.n - (count - len(data))]

            cursor = res.get("next_cursor")
            logger.debug(
                "%s %s page=%d items=%d total=%d cursor=%s",
                method, path, pages, len(data), count, cursor is not None,
            )
            yield data, res

            if isinstance(limit, Unbounded):
                return
            if isinstance(limit, Bounded) and count >= limit.n:
                return
            if cursor is None:
                return

            current = {**current, CURSOR_KEY: cursor}

    def iter_pages(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Iterator[Union[Page, ResponseHash]]:
        """Lazily yield each page; a response without `data` is yielded as-is."""
        for data, res in self._fetch(method, path, params, headers):
            yield res if data is None else data

    def collect(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Union[list[Any], ResponseHash]:
        results: list[Any] = []
        for data, res in self._fetch(method, path, params, headers):
            if data is None:
                return res
            results.extend(data)
        return results

    def for_each_page(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        headers: Optional[Mapping[str, str]],
        handler: PageHandler,
    ) -> Optional[ResponseHash]:
        """
        Call `handler` once per page.

        Returns None, except when the endpoint answered without `data`: then
        the handler got the raw response and it is returned as well.
        """
        for data, res in self._fetch(method, path, params, headers):
            if data is None:
                handler(res)
                return res
            handler(data)
        return None

    def paginate(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        callback: Optional[PageHandler] = None,
    ) -> Union[list[Any], ResponseHash, None]:
        if callback is not None:
            return self.for_each_page(method, path, params, headers, callback)
        return self.collect(method, path, params, headers)
