from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


TaskStatus = Literal["pending", "downloading", "converting", "uploading", "completed", "failed"]

TASK_STATUSES: tuple[str, ...] = (
    "pending",
    "downloading",
    "converting",
    "uploading",
    "completed",
    "failed",
)
TERMINAL_STATUSES = frozenset({"completed", "failed"})


@dataclass(frozen=True)
class Config:
    api_base_url: str = "http://localhost:10000"
    poll_interval_ms: int = 2000
    request_timeout_sec: int = 15
    max_cookie_file_mb: int = 100


@dataclass(frozen=True)
class Task:
    task_id: str | None
    status: TaskStatus
    progress: str | None = None
    error: str | None = None
    result_url: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass(frozen=True)
class TaskEvent:
    observed_at: datetime
    status: TaskStatus
    progress: str = ""


@dataclass(frozen=True)
class Session:
    url: str = ""
    cookies: str = ""
    # None means "no opinion" (blank input), not invalid
    url_valid: bool | None = None
    task: Task | None = None
    busy: bool = False
    history: tuple[TaskEvent, ...] = ()

    @property
    def can_submit(self) -> bool:
        return bool(self.url.strip()) and self.url_valid is True and not self.busy


@dataclass(frozen=True)
class UploadOutcome:
    ok: bool
    message: str
