from __future__ import annotations

from dataclasses import replace

from .models import Task


def start_task(task_id: str) -> Task:
    return Task(task_id=task_id, status="pending")


def apply_status(current: Task, update: Task) -> Task:
    """Take whatever stage the service reports; terminal tasks absorb every update."""
    if current.is_terminal:
        return current
    if update.task_id != current.task_id:
        raise ValueError(f"update for task {update.task_id} applied to task {current.task_id}")
    return update


def mark_failed(current: Task | None, error: str) -> Task:
    if current is None:
        return Task(task_id=None, status="failed", error=error)
    if current.is_terminal:
        return current
    return replace(current, status="failed", error=error, result_url=None)
