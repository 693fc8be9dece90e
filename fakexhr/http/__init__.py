"""
Module containing the HTTP helpers used by fake requests: header containers,
the unsafe header policy and the status text table.
"""

from fakexhr.http.headers import (
    RequestHeaders,
    ResponseHeaders,
    is_set_cookie,
    is_unsafe_header,
)
from fakexhr.http.status import HTTP_STATUS_CODES, status_text

__all__ = [
    "HTTP_STATUS_CODES",
    "RequestHeaders",
    "ResponseHeaders",
    "is_set_cookie",
    "is_unsafe_header",
    "status_text",
]
