from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Callable

from .credentials import package_inline, upload_cookie_file
from .errors import TaskClientError, ValidationError
from .models import Session, Task, TaskEvent, UploadOutcome
from .polling import CancellationToken, PollingChain
from .state_machine import apply_status, mark_failed, start_task
from .task_client import TaskClient
from .url_validator import is_admissible, url_validity


LogCallback = Callable[[str], None]

MAX_LOG_LINES = 200


class SessionController:
    """Owns the Session and turns user intents into task-client calls.

    Every Session change is made under one lock and published as a new frozen
    Session, so readers only ever see complete snapshots.
    """

    def __init__(self, client: TaskClient, log_cb: LogCallback | None = None) -> None:
        self.client = client
        self._log_cb = log_cb
        self._lock = threading.Lock()
        self._session = Session()
        self._chain: PollingChain | None = None
        self._creation: CancellationToken | None = None
        self._logs: list[str] = []

    @property
    def snapshot(self) -> Session:
        return self._session

    @property
    def logs(self) -> list[str]:
        with self._lock:
            return list(self._logs)

    def set_url(self, text: str) -> Session:
        with self._lock:
            self._session = replace(self._session, url=text, url_valid=url_validity(text))
            return self._session

    def set_cookies(self, text: str) -> Session:
        with self._lock:
            self._session = replace(self._session, cookies=text)
            return self._session

    def submit(self) -> bool:
        with self._lock:
            session = self._session
            url = session.url.strip()
            if not url or not is_admissible(url) or session.busy:
                return False

            token = CancellationToken()
            self._creation = token
            self._session = replace(session, task=None, busy=True, history=())
            cookies = package_inline(session.cookies)

        self._log(f"Submitting {url}")
        try:
            task_id = self.client.create_task(url, cookies)
        except TaskClientError as exc:
            with self._lock:
                if token.cancelled:
                    return True
                self._creation = None
                self._session = replace(
                    self._session,
                    task=mark_failed(None, str(exc)),
                    busy=False,
                )
            self._log(f"Task creation failed: {exc}")
            return True

        with self._lock:
            if token.cancelled:
                return True
            self._creation = None
            task = start_task(task_id)
            self._session = replace(
                self._session,
                task=task,
                history=(_event(task),),
            )
            self._chain = self.client.start_polling(task_id, self._on_task, self._on_poll_failure)
        self._log(f"Task {task_id} created")
        return True

    def upload_cookie_file(self, file_name: str, payload: bytes) -> UploadOutcome:
        max_bytes = self.client.config.max_cookie_file_mb * 1024 * 1024
        try:
            upload_cookie_file(self.client, file_name, payload, max_bytes)
        except (ValidationError, TaskClientError) as exc:
            self._log(f"Cookie upload rejected: {exc}")
            return UploadOutcome(ok=False, message=str(exc))

        self._log(f"Cookie file {file_name} uploaded")
        return UploadOutcome(ok=True, message="Cookies uploaded successfully!")

    def reset(self) -> Session:
        with self._lock:
            chain = self._chain
            self._chain = None
            if chain is not None:
                chain.cancel()
            if self._creation is not None:
                self._creation.cancel()
                self._creation = None
            self._session = Session()
        if chain is not None:
            self._log(f"Task {chain.task_id} discarded")
        return self._session

    def _on_task(self, chain: PollingChain, update: Task) -> None:
        with self._lock:
            if chain.token.cancelled or chain is not self._chain:
                return
            current = self._session.task
            if current is None:
                return
            task = apply_status(current, update)
            history = self._session.history
            if task != current:
                history = history + (_event(task),)
            self._session = replace(
                self._session,
                task=task,
                busy=not task.is_terminal,
                history=history,
            )
            if task.is_terminal:
                self._chain = None
            changed = task.status != current.status

        if changed:
            self._log(f"Task {task.task_id}: {task.status}")

    def _on_poll_failure(self, chain: PollingChain, exc: TaskClientError) -> None:
        message = str(exc)
        with self._lock:
            if chain.token.cancelled or chain is not self._chain:
                return
            task = mark_failed(self._session.task, message)
            self._session = replace(
                self._session,
                task=task,
                busy=False,
                history=self._session.history + (_event(task),),
            )
            self._chain = None
        self._log(f"Task {chain.task_id} failed: {message}")

    def _log(self, message: str) -> None:
        ts = datetime.now().strftime("%H:%M:%S")
        with self._lock:
            self._logs.append(f"[{ts}] {message}")
            del self._logs[:-MAX_LOG_LINES]
        if self._log_cb:
            self._log_cb(message)


def _event(task: Task) -> TaskEvent:
    return TaskEvent(observed_at=datetime.now(), status=task.status, progress=task.progress or "")
