"""
API errors and response envelopes.

Handlers raise ApiError subclasses; the exception handlers in main.py turn
them into plain-text responses. Anything else becomes the 500 envelope:

    {"status_code": 500, "error": {"message": ..., "additional_information": {}}}
"""

from typing import Any, Optional


class ApiError(Exception):
    """Base class for errors that map straight onto an HTTP response."""

    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInput(ApiError):
    """A path, header or body value failed validation."""

    status_code = 400


class NotFound(ApiError):
    """Referenced row is absent or a mutation touched zero rows.

    Most handlers answer 400 here; profile and resume handlers pass 404.
    """

    status_code = 400


class MissingInformation(ApiError):
    """A required request body was not supplied."""

    status_code = 422


class Unauthorized(ApiError):
    status_code = 401


def send_json(status_code: int, payload: Any) -> dict:
    return {"status_code": status_code, "payload": payload}


def send_error(status_code: int, message: str, additional_info: Optional[dict] = None) -> dict:
    return {
        "status_code": status_code,
        "error": {
            "message": message,
            "additional_information": additional_info or {},
        },
    }
