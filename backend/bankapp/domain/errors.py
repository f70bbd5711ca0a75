"""
Error taxonomy shared by services and the HTTP layer.

NotFoundError is deliberately raised both when a resource does not exist and
when it exists but belongs to another user, so callers cannot probe for ids.
"""
from __future__ import annotations


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(AppError):
    status_code = 400


class InvalidAmountError(BadRequestError):
    pass


class InsufficientFundsError(BadRequestError):
    pass


class UnauthorizedError(AppError):
    status_code = 401


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class InternalError(AppError):
    status_code = 500
