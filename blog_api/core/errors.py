"""Error taxonomy shared by services and routes.

Every error carries a user-facing message and the HTTP status it maps to;
the handlers registered in blog_api.main render them as {"message": ...}.
"""


class AppError(Exception):
    """Base class for errors surfaced to the client."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(AppError):
    """Missing or malformed input, including size limits."""

    status_code = 422


class Unauthorized(AppError):
    """Missing, invalid or expired bearer token, or bad credentials."""

    status_code = 401


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    """Unique value (e.g. email) already taken."""

    status_code = 409


class UploadFailed(AppError):
    """Writing a media file failed."""

    status_code = 500


class DeleteFailed(AppError):
    """Removing a media file failed."""

    status_code = 500
