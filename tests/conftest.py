from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import pytest

from increase.client import set_default_client
from increase.transport import Response


@dataclass
class SentRequest:
    method: str
    path: str
    params: Optional[dict]
    headers: Optional[dict]


class FakeConnection:
    """Replays canned bodies in order and records what was sent."""

    def __init__(self, *bodies: Any):
        self.bodies = list(bodies)
        self.calls: list[SentRequest] = []

    def send(self, method, path, params=None, headers=None):
        self.calls.append(
            SentRequest(
                method=method,
                path=path,
                params=dict(params) if params is not None else None,
                headers=dict(headers) if headers is not None else None,
            )
        )
        if not self.bodies:
            raise AssertionError(f"unexpected extra request: {method} {path}")
        return Response(status_code=200, body=self.bodies.pop(0))


class FakeClient:
    def __init__(self, *bodies: Any):
        self.connection = FakeConnection(*bodies)
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture(autouse=True)
def _reset_default_client():
    yield
    set_default_client(None)
