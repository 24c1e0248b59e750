from .config import load_config, validate_runtime
from .controller import SessionController
from .credentials import package_inline, upload_cookie_file
from .errors import (
    CookieFileTooLarge,
    NetworkError,
    ServiceRejected,
    TaskClientError,
    UnsupportedFileType,
    ValidationError,
)
from .models import Config, Session, Task, TaskEvent, UploadOutcome
from .polling import CancellationToken, PollingChain, ThreadingScheduler
from .task_client import TaskClient
from .url_validator import extract_video_id, is_admissible, url_validity

__all__ = [
    "CancellationToken",
    "Config",
    "CookieFileTooLarge",
    "NetworkError",
    "PollingChain",
    "ServiceRejected",
    "Session",
    "SessionController",
    "Task",
    "TaskClient",
    "TaskClientError",
    "TaskEvent",
    "ThreadingScheduler",
    "UnsupportedFileType",
    "UploadOutcome",
    "ValidationError",
    "extract_video_id",
    "is_admissible",
    "load_config",
    "package_inline",
    "upload_cookie_file",
    "url_validity",
    "validate_runtime",
]
