import pytest

from video_task_client.models import Task
from video_task_client.state_machine import apply_status, mark_failed, start_task


def test_start_task_is_pending() -> None:
    task = start_task("t1")

    assert task == Task(task_id="t1", status="pending")
    assert not task.is_terminal


def test_any_non_terminal_stage_may_follow_another() -> None:
    task = start_task("t1")
    task = apply_status(task, Task(task_id="t1", status="uploading"))
    task = apply_status(task, Task(task_id="t1", status="downloading", progress="retrying"))

    assert task.status == "downloading"
    assert task.progress == "retrying"


@pytest.mark.parametrize(
    "terminal",
    [
        Task(task_id="t1", status="completed", result_url="https://cdn/x.mp4"),
        Task(task_id="t1", status="failed", error="boom"),
    ],
)
def test_terminal_states_absorb_updates(terminal: Task) -> None:
    assert apply_status(terminal, Task(task_id="t1", status="converting")) == terminal
    assert mark_failed(terminal, "late failure") == terminal


def test_update_for_other_task_is_refused() -> None:
    with pytest.raises(ValueError):
        apply_status(start_task("t1"), Task(task_id="t2", status="converting"))


def test_mark_failed_without_task_has_no_task_id() -> None:
    task = mark_failed(None, "rate limited")

    assert task.task_id is None
    assert task.status == "failed"
    assert task.error == "rate limited"


def test_mark_failed_keeps_task_id_and_progress() -> None:
    running = Task(task_id="t1", status="converting", progress="50%")

    failed = mark_failed(running, "Lost connection to server. Please try again.")

    assert failed.task_id == "t1"
    assert failed.progress == "50%"
    assert failed.error == "Lost connection to server. Please try again."
    assert failed.result_url is None
