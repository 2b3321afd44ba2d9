"""Failures the studio reports back to the browser."""


class StudioError(Exception):
    """Base class; ``str(err)`` is shown to the user as-is."""

    status_code = 500


class ValidationError(StudioError):
    status_code = 400


class ImageDecodeError(ValidationError):
    def __init__(self, message="Failed to read file."):
        super().__init__(message)


class GenerationError(StudioError):
    status_code = 502


class AuthenticationError(StudioError):
    status_code = 401

    def __init__(self, message="Please sign in first."):
        super().__init__(message)
