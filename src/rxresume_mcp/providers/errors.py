"""Exceptions raised by the Reactive Resume HTTP client."""


class RxResumeError(Exception):
    """Base error for anything that goes wrong talking to Reactive Resume."""


class RxResumeAPIError(RxResumeError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"API request failed: {status_code} {reason} - {body}")


class RxResumeConnectionError(RxResumeError):
    """The request never produced an HTTP response."""


class AuthenticationError(RxResumeError):
    """Login was rejected or no usable credentials were supplied."""
