"""Exceptions raised by the short-link layer."""

from typing import Optional


class MadlibLinkError(Exception):
    """Base error carrying a machine-readable ``error`` string and an HTTP status."""

    default_error = "Failed to process request"
    status_code = 500

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.error = error or self.default_error
        self.message = message or self.error
        super().__init__(self.message)


class InvalidShortenRequestError(MadlibLinkError):
    """Shorten request with a bad mode or missing/malformed data."""

    default_error = "Invalid request. Required: mode (play|edit|story) and data object"
    status_code = 400


class ShortCodeExhaustedError(MadlibLinkError):
    """Every generated candidate code collided with an existing record."""

    default_error = "Failed to generate unique short code. Please try again."
    status_code = 500


class CorruptShortLinkError(MadlibLinkError):
    """A stored record exists but cannot be parsed."""

    default_error = "Failed to expand short code"
    status_code = 500


class ShortenerError(MadlibLinkError):
    """The short-link API answered with an unexpected status or body."""

    default_error = "Short-link service error"
    status_code = 502

    def __init__(
        self,
        message: Optional[str] = None,
        error: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message, error)
        self.status = status


class ShortenerUnavailableError(ShortenerError):
    """The short-link API could not be reached."""

    default_error = "Short-link service unavailable"
    status_code = 503


class ShareError(MadlibLinkError):
    """A share action could not produce a link; the message is user-facing."""

    default_error = "Failed to generate link"
    status_code = 400
