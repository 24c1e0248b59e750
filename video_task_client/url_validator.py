from __future__ import annotations

import re


YOUTUBE_URL_RE = re.compile(
    r"^(https?://)?(www\.)?(youtube\.com/(watch\?v=|embed/|v/)|youtu\.be/)(?P<video_id>[\w-]+)",
    re.ASCII,
)


def is_admissible(candidate: str) -> bool:
    return YOUTUBE_URL_RE.match(candidate.strip()) is not None


def url_validity(candidate: str) -> bool | None:
    """Inline feedback state for a URL field: None while the field is blank."""
    if not candidate.strip():
        return None
    return is_admissible(candidate)


def extract_video_id(candidate: str) -> str | None:
    match = YOUTUBE_URL_RE.match(candidate.strip())
    if match is None:
        return None
    return match.group("video_id")
