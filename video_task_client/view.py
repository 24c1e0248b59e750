from __future__ import annotations

import pandas as pd

from .models import Session, Task


STATUS_COLORS = {
    "pending": "gray",
    "downloading": "blue",
    "converting": "orange",
    "uploading": "violet",
    "completed": "green",
    "failed": "red",
}

COOKIE_HINT_STEPS = [
    'Install a browser extension like "Get cookies.txt LOCALLY"',
    "Visit YouTube and log in",
    "Export cookies for youtube.com",
    'Upload the cookies.txt file under "Advanced options" above',
]


def status_label(status: str) -> str:
    return status[:1].upper() + status[1:]


def status_badge(status: str) -> str:
    color = STATUS_COLORS.get(status, "gray")
    return f":{color}[**{status_label(status)}**]"


def needs_cookie_hint(task: Task | None) -> bool:
    return task is not None and task.status == "failed" and "cookies" in (task.error or "")


def history_table(session: Session) -> pd.DataFrame:
    rows = [
        {
            "time": event.observed_at.strftime("%H:%M:%S"),
            "status": event.status,
            "progress": event.progress,
        }
        for event in session.history
    ]
    return pd.DataFrame(rows, columns=["time", "status", "progress"])
