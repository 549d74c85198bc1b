# backend/utils/errors.py
from fastapi import status


class AppError(Exception):
    """Expected failure that is reported to the client as-is."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"statusCode": self.status_code, "error": self.error, "message": self.message}


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"


class InternalError(AppError):
    # The message is for the logs only; clients get a generic one
    public_message = "An unexpected error occurred"

    def to_dict(self) -> dict:
        return {"statusCode": self.status_code, "error": self.error, "message": self.public_message}
