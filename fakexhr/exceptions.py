"""
fakexhr exceptions

Every error raised here is a caller programming error and is raised
synchronously from the call that violated the request lifecycle.
"""

from __future__ import annotations

from typing import Any

# Configuration


class NotConfigured(Exception):
    """Indicates a missing configuration situation"""


# Request side


class InvalidStateError(Exception):
    """Raised when a request operation is called in the wrong ready state,
    e.g. ``set_request_header`` before ``open`` or while a send is in flight.
    """

    def __init__(self, message: str = "INVALID_STATE_ERR"):
        super().__init__(message)


class UnsafeHeaderError(InvalidStateError):
    """Raised when calling code tries to set a request header that browsers
    refuse to let scripts control."""

    def __init__(self, header: str):
        super().__init__(f'Refused to set unsafe header "{header}"')
        self.header = header


# Response side


class ResponseSequenceError(Exception):
    """Base class for out-of-order response delivery"""


class RequestDoneError(ResponseSequenceError):
    """The exchange already reached the DONE state"""

    def __init__(self, message: str = "Request done"):
        super().__init__(message)


class HeadersNotReceivedError(ResponseSequenceError):
    """Body delivery was attempted on an asynchronous request before its
    response headers were received"""

    def __init__(self, message: str = "No headers received"):
        super().__init__(message)


class InvalidBodyError(TypeError):
    """The response body handed to ``respond`` is not a string"""

    def __init__(self, body: Any):
        super().__init__(
            f"Attempted to respond to fake XMLHttpRequest with {body!r}, "
            "which is not a string."
        )
        self.body = body


class RequestAborted(Exception):
    """Used to errback deferreds of requests that were aborted"""

    def __init__(self, xhr: Any = None):
        super().__init__("Request aborted")
        self.xhr = xhr
