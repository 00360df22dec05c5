"""Store failures and the HTTP status each one maps to."""
from __future__ import annotations


class StoreError(Exception):
    status_code: int = 500

    def __init__(self, message: str = "Store error"):
        super().__init__(message)
        self.message = message


class NotFoundError(StoreError):
    status_code = 404

    def __init__(self, message: str = "Article not found"):
        super().__init__(message)


class ServiceUnavailableError(StoreError):
    status_code = 503

    def __init__(self, message: str = "Database not available"):
        super().__init__(message)


class ValidationFailure(StoreError):
    status_code = 422


class WriteFailure(StoreError):
    status_code = 500


__all__ = [
    "StoreError",
    "NotFoundError",
    "ServiceUnavailableError",
    "ValidationFailure",
    "WriteFailure",
]
