from __future__ import annotations

from typing import Any, Callable

import pytest

from video_task_client.models import Config
from video_task_client.task_client import TaskClient


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("response body is not JSON")
        return self._payload


class FakeHttp:
    """Stands in for requests.Session; replies are queued per (method, path)."""

    def __init__(self) -> None:
        self.replies: dict[tuple[str, str], list[Any]] = {}
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.on_request: Callable[[str, str], None] | None = None

    def reply(self, method: str, path: str, reply: Any) -> None:
        self.replies.setdefault((method, path), []).append(reply)

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._handle("GET", url, kwargs)

    def post(self, url: str, **kwargs: Any) -> FakeResponse:
        return self._handle("POST", url, kwargs)

    def _handle(self, method: str, url: str, kwargs: dict[str, Any]) -> FakeResponse:
        path = url.split("://", 1)[-1].split("/", 1)[-1]
        path = "/" + path
        self.calls.append((method, path, kwargs))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.on_request is not None:
                self.on_request(method, path)
            queue = self.replies.get((method, path))
            if not queue:
                raise AssertionError(f"unexpected request {method} {path}")
            reply = queue.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply
        finally:
            self.in_flight -= 1


class ManualCall:
    def __init__(self, delay_sec: float, callback: Callable[[], None]) -> None:
        self.delay_sec = delay_sec
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Runs armed callbacks only when the test asks, one at a time."""

    def __init__(self) -> None:
        self.calls: list[ManualCall] = []

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> ManualCall:
        call = ManualCall(delay_sec, callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> list[ManualCall]:
        return [call for call in self.calls if not call.cancelled]

    def run_next(self) -> bool:
        pending = self.pending
        if not pending:
            return False
        call = pending[0]
        self.calls.remove(call)
        call.callback()
        return True

    def run_all(self, limit: int = 50) -> int:
        count = 0
        while count < limit and self.run_next():
            count += 1
        return count


@pytest.fixture
def config() -> Config:
    return Config(api_base_url="http://api.test", poll_interval_ms=2000, request_timeout_sec=5)


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def client(config: Config, http: FakeHttp, scheduler: ManualScheduler) -> TaskClient:
    return TaskClient(config, http=http, scheduler=scheduler)
