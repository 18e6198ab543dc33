"""Custom application exceptions.

Every failure surfaced to API callers is one of these kinds. Handlers in
``app.middleware.error_handler`` render them as
``{"error": <class name>, "message": ..., "path": ...}``.
"""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestException(AppException):
    """Missing required field, malformed input or an illegal state change."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class UnauthorizedException(AppException):
    """Missing, invalid or role-mismatched credential."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class ForbiddenException(AppException):
    """Authenticated, but not entitled to act on this particular resource."""

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class ConflictException(AppException):
    """Invariant violation: duplicate claim, duplicate proposal, stale state."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class MediaUploadException(AppException):
    """The external media host rejected or failed an upload."""

    def __init__(self, message: str = "Upload failed"):
        """Initialize with 502 status code."""
        super().__init__(message, status_code=502)
