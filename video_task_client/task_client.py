from __future__ import annotations

from typing import Any

import requests

from .errors import NetworkError, ServiceRejected
from .models import TASK_STATUSES, Config, Task
from .polling import FailureCallback, PollingChain, Scheduler, TaskCallback, ThreadingScheduler


CONNECT_TIMEOUT_SEC = 10


class TaskClient:
    """Client for the remote processing service: task creation, status polls, cookie upload."""

    def __init__(
        self,
        config: Config,
        http: requests.Session | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.config = config
        self.http = http if http is not None else requests.Session()
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()

    def create_task(self, url: str, cookies: str | None = None) -> str:
        body: dict[str, str] = {"url": url}
        if cookies:
            body["cookies"] = cookies

        try:
            response = self.http.post(self._endpoint("/api/download"), json=body, timeout=self._timeout())
        except requests.RequestException as exc:
            raise NetworkError(
                "Network error occurred. Please check if the backend is running."
            ) from exc

        payload = _read_json(response)
        if not response.ok:
            raise ServiceRejected(
                _detail(payload) or f"Server error: {response.status_code}",
                status_code=response.status_code,
            )

        task_id = payload.get("task_id") if isinstance(payload, dict) else None
        if not isinstance(task_id, str) or not task_id:
            raise ServiceRejected("Server response is missing task_id", status_code=response.status_code)
        return task_id

    def poll_once(self, task_id: str) -> Task:
        try:
            response = self.http.get(self._endpoint(f"/api/status/{task_id}"), timeout=self._timeout())
        except requests.RequestException as exc:
            raise NetworkError("Lost connection to server. Please try again.") from exc

        payload = _read_json(response)
        if not response.ok:
            raise ServiceRejected(
                _detail(payload) or f"Status check failed: {response.status_code}",
                status_code=response.status_code,
            )
        return decode_task(payload, expected_task_id=task_id)

    def upload_cookies(self, file_name: str, data: bytes) -> None:
        files = {"file": (file_name, data, "text/plain")}
        try:
            response = self.http.post(self._endpoint("/api/upload-cookies"), files=files, timeout=self._timeout())
        except requests.RequestException as exc:
            raise NetworkError("Failed to upload cookies. Please check your connection.") from exc

        if not response.ok:
            detail = _detail(_read_json(response))
            raise ServiceRejected(
                f"Failed to upload cookies: {detail or 'Unknown error'}",
                status_code=response.status_code,
            )

    def start_polling(
        self,
        task_id: str,
        on_task: TaskCallback,
        on_failure: FailureCallback,
    ) -> PollingChain:
        chain = PollingChain(
            client=self,
            scheduler=self.scheduler,
            task_id=task_id,
            interval_sec=self.config.poll_interval_ms / 1000,
            on_task=on_task,
            on_failure=on_failure,
        )
        chain.start()
        return chain

    def _endpoint(self, path: str) -> str:
        return f"{self.config.api_base_url}{path}"

    def _timeout(self) -> tuple[int, int]:
        return (min(CONNECT_TIMEOUT_SEC, self.config.request_timeout_sec), self.config.request_timeout_sec)


def decode_task(payload: Any, expected_task_id: str) -> Task:
    if not isinstance(payload, dict):
        raise ServiceRejected("Malformed status response")

    task_id = payload.get("task_id", expected_task_id)
    if task_id != expected_task_id:
        raise ServiceRejected(f"Status response is for another task: {task_id}")

    status = payload.get("status")
    if status not in TASK_STATUSES:
        raise ServiceRejected(f"Unknown task status: {status}")

    progress = _optional_text(payload, "progress")
    error = _optional_text(payload, "error")
    result_url = _optional_text(payload, "cloudinary_url")

    # error only travels with failed, result_url only with completed
    if status == "completed":
        if not result_url:
            raise ServiceRejected("Completed task has no result URL")
        error = None
    elif status == "failed":
        error = error or "Processing failed"
        result_url = None
    else:
        error = None
        result_url = None

    return Task(
        task_id=expected_task_id,
        status=status,
        progress=progress,
        error=error,
        result_url=result_url,
    )


def _optional_text(payload: dict, key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ServiceRejected(f"Malformed status field: {key}")
    return value or None


def _read_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _detail(payload: Any) -> str:
    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str):
            return detail.strip()
    return ""
