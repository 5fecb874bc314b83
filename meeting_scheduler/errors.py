"""Request-level errors raised while decoding inbound meeting requests."""

from __future__ import annotations


class MeetingRequestError(Exception):
    """Base class for requests rejected before the store is touched.

    Attributes:
        status_code: HTTP status the boundary should answer with.
        message: Plain-text explanation returned to the caller.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnsupportedMediaTypeError(MeetingRequestError):
    """Raised when the declared content type is not JSON."""

    status_code = 415

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(
            f"need content-type 'application/json', but got '{content_type}'"
        )


class MalformedBodyError(MeetingRequestError):
    """Raised when the body cannot be decoded into a meeting."""

    status_code = 400
