from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Callable, Protocol

from .errors import TaskClientError
from .models import Task

if TYPE_CHECKING:
    from .task_client import TaskClient


TaskCallback = Callable[["PollingChain", Task], None]
FailureCallback = Callable[["PollingChain", TaskClientError], None]


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> ScheduledCall: ...


class ThreadingScheduler:
    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_sec, callback)
        timer.daemon = True
        timer.start()
        return timer


class CancellationToken:
    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class PollingChain:
    """Status checks for one task, each armed only after the previous one resolved.

    The chain stops on a terminal status, on the first failed poll, or when
    cancelled. Results of a poll that resolves after cancellation are dropped.
    """

    def __init__(
        self,
        client: TaskClient,
        scheduler: Scheduler,
        task_id: str,
        interval_sec: float,
        on_task: TaskCallback,
        on_failure: FailureCallback,
    ) -> None:
        self.client = client
        self.scheduler = scheduler
        self.task_id = task_id
        self.interval_sec = interval_sec
        self.token = CancellationToken()
        self._on_task = on_task
        self._on_failure = on_failure
        self._pending: ScheduledCall | None = None
        self._finished = False
        self.poll_count = 0

    def start(self) -> None:
        self._arm(0.0)

    def cancel(self) -> None:
        self.token.cancel()
        pending = self._pending
        self._pending = None
        if pending is not None:
            pending.cancel()

    @property
    def active(self) -> bool:
        return not (self.token.cancelled or self._finished)

    def _arm(self, delay_sec: float) -> None:
        if self.token.cancelled:
            return
        self._pending = self.scheduler.call_later(delay_sec, self._tick)

    def _tick(self) -> None:
        self._pending = None
        if self.token.cancelled:
            return

        self.poll_count += 1
        try:
            task = self.client.poll_once(self.task_id)
        except TaskClientError as exc:
            self._finished = True
            if not self.token.cancelled:
                self._on_failure(self, exc)
            return

        if self.token.cancelled:
            return
        self._on_task(self, task)

        if task.is_terminal:
            self._finished = True
            return
        self._arm(self.interval_sec)
