"""
Application errors with HTTP semantics.

Services raise these; `main.create_app` maps them to `{"error": message}`.
"""

from __future__ import annotations

from fastapi import status


class ApiError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalFailure(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
