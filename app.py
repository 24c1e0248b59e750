from __future__ import annotations

import time

import streamlit as st

from video_task_client.config import load_config, validate_runtime
from video_task_client.controller import SessionController
from video_task_client.task_client import TaskClient
from video_task_client.view import (
    COOKIE_HINT_STEPS,
    history_table,
    needs_cookie_hint,
    status_badge,
)


st.set_page_config(page_title="YouTube Video Downloader", layout="centered")
st.title("YouTube Video Downloader")
st.caption("Download, convert to HEVC and upload to cloud storage")

config = load_config()

if "vt_controller" not in st.session_state:
    st.session_state["vt_controller"] = SessionController(TaskClient(config))
if "vt_uploader_key" not in st.session_state:
    st.session_state["vt_uploader_key"] = 0
if "vt_notice" not in st.session_state:
    st.session_state["vt_notice"] = None

controller: SessionController = st.session_state["vt_controller"]

st.caption(
    "Current config: "
    f"api={config.api_base_url} | "
    f"poll_interval_ms={config.poll_interval_ms} | "
    f"request_timeout_sec={config.request_timeout_sec}"
)

runtime_errors = validate_runtime(config)
if runtime_errors:
    st.error("Configuration check failed:\n- " + "\n- ".join(runtime_errors))


def _on_url_change() -> None:
    controller.set_url(st.session_state["vt_url"])


def _on_cookies_change() -> None:
    controller.set_cookies(st.session_state["vt_cookies"])


def _on_submit() -> None:
    controller.set_url(st.session_state.get("vt_url", ""))
    controller.set_cookies(st.session_state.get("vt_cookies", ""))
    controller.submit()


def _on_reset() -> None:
    controller.reset()
    st.session_state["vt_url"] = ""
    st.session_state["vt_cookies"] = ""
    st.session_state["vt_uploader_key"] += 1
    st.session_state["vt_notice"] = None


def _on_cookie_file() -> None:
    uploaded = st.session_state.get(f"vt_cookie_file_{st.session_state['vt_uploader_key']}")
    if uploaded is None:
        return
    outcome = controller.upload_cookie_file(uploaded.name, uploaded.getvalue())
    st.session_state["vt_notice"] = outcome
    if outcome.ok:
        st.session_state["vt_uploader_key"] += 1


session = controller.snapshot

st.text_input(
    "YouTube video URL",
    key="vt_url",
    placeholder="https://youtube.com/watch?v=... or https://youtu.be/...",
    on_change=_on_url_change,
    disabled=session.busy,
)
if session.url_valid is False:
    st.error("Please enter a valid YouTube URL")

with st.expander("Advanced options", expanded=False):
    st.text_area(
        "Cookies (Base64 encoded)",
        key="vt_cookies",
        placeholder="Optional: Base64 encoded cookies for age-restricted or private videos",
        height=90,
        on_change=_on_cookies_change,
        disabled=session.busy,
    )
    st.file_uploader(
        "Or upload cookies.txt",
        type=["txt"],
        key=f"vt_cookie_file_{st.session_state['vt_uploader_key']}",
        on_change=_on_cookie_file,
    )

notice = st.session_state["vt_notice"]
if notice is not None:
    if notice.ok:
        st.success(notice.message)
    else:
        st.warning(notice.message)

submit_col, reset_col = st.columns([3, 1])
with submit_col:
    st.button(
        "Processing..." if session.busy else "Download & Convert",
        type="primary",
        disabled=not session.can_submit or bool(runtime_errors),
        on_click=_on_submit,
        use_container_width=True,
    )
with reset_col:
    if session.task is not None or session.busy:
        st.button("Reset", on_click=_on_reset, use_container_width=True)

task = session.task
if task is not None:
    st.subheader("Processing status")
    st.markdown(status_badge(task.status))

    if task.progress:
        st.caption(task.progress)

    if task.error:
        st.error(task.error)
        if needs_cookie_hint(task):
            st.info(
                "**Tip:** for age-restricted or geo-blocked videos, export cookies from your browser:\n\n"
                + "\n".join(f"{i}. {step}" for i, step in enumerate(COOKIE_HINT_STEPS, start=1))
            )

    if task.result_url:
        st.success("Download complete! Your video has been processed and uploaded to the cloud.")
        st.link_button("View video", task.result_url)

    if task.task_id:
        st.code(f"Task ID: {task.task_id}")

    if session.history:
        st.dataframe(history_table(session), use_container_width=True, hide_index=True)
elif session.busy:
    st.info("Creating task...")

logs = controller.logs
if logs:
    with st.expander("Log", expanded=False):
        st.code("\n".join(logs))

if session.busy:
    time.sleep(config.poll_interval_ms / 1000)
    st.rerun()
