from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import CookieFileTooLarge, UnsupportedFileType

if TYPE_CHECKING:
    from .task_client import TaskClient


COOKIE_FILE_SUFFIX = ".txt"


def package_inline(text: str) -> str | None:
    cookies = text.strip()
    return cookies or None


def check_cookie_file(file_name: str, size: int, max_bytes: int) -> None:
    if not file_name.lower().endswith(COOKIE_FILE_SUFFIX):
        raise UnsupportedFileType(f"Please upload a {COOKIE_FILE_SUFFIX} file")
    if size > max_bytes:
        raise CookieFileTooLarge(f"Cookie file is larger than {max_bytes // (1024 * 1024)} MB")


def upload_cookie_file(client: TaskClient, file_name: str, payload: bytes, max_bytes: int) -> None:
    check_cookie_file(file_name, len(payload), max_bytes)
    client.upload_cookies(file_name, payload)
