from __future__ import annotations


class ValidationError(ValueError):
    pass


class UnsupportedFileType(ValidationError):
    pass


class CookieFileTooLarge(ValidationError):
    pass


class TaskClientError(RuntimeError):
    pass


class NetworkError(TaskClientError):
    pass


class ServiceRejected(TaskClientError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
