"""Error types shared by the AI provider clients."""

from __future__ import annotations

from enum import IntEnum


class ApiError(IntEnum):
    """Failure categories reported by the AI clients."""

    NONE = 0
    CURL_INIT_FAILED = 1
    API_KEY_NOT_SET = 2
    NETWORK_ERROR = 3
    JSON_PARSE_ERROR = 4
    CURL_REQUEST_FAILED = 5
    MALFORMED_RESPONSE = 6
    UNKNOWN = 7


class ApiErrorInfo(Exception):
    """Raised when a request to an AI provider fails."""

    def __init__(self, code: ApiError = ApiError.UNKNOWN, message: str = "") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ApiErrorInfo(code={self.code.name}, message={self.message!r})"