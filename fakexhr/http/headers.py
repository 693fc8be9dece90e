from __future__ import annotations

import re
from typing import TYPE_CHECKING

from fakexhr.utils.datatypes import CaseInsensitiveDict

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


# Browsers throw when scripts try to set these, and so do we.
UNSAFE_HEADERS: frozenset[str] = frozenset(
    h.lower()
    for h in (
        "Accept-Charset",
        "Accept-Encoding",
        "Connection",
        "Content-Length",
        "Cookie",
        "Cookie2",
        "Content-Transfer-Encoding",
        "Date",
        "Expect",
        "Host",
        "Keep-Alive",
        "Referer",
        "TE",
        "Trailer",
        "Transfer-Encoding",
        "Upgrade",
        "User-Agent",
        "Via",
    )
)

UNSAFE_HEADER_PREFIX_RE = re.compile(r"^(sec-|proxy-)", re.IGNORECASE)

SET_COOKIE_RE = re.compile(r"^set-cookie2?$", re.IGNORECASE)


def is_unsafe_header(name: str) -> bool:
    """Return ``True`` if scripts are not allowed to set the ``name``
    request header.

    >>> is_unsafe_header("User-Agent")
    True
    >>> is_unsafe_header("sec-fetch-mode")
    True
    >>> is_unsafe_header("X-Requested-With")
    False
    """
    return name.lower() in UNSAFE_HEADERS or bool(UNSAFE_HEADER_PREFIX_RE.match(name))


def is_set_cookie(name: str) -> bool:
    return bool(SET_COOKIE_RE.match(name))


class RequestHeaders(CaseInsensitiveDict):
    """Case insensitive request headers. Adding a value to a header that is
    already present joins both values with a comma."""

    def add(self, name: str, value: str) -> None:
        if name in self and self[name]:
            self[name] = f"{self[name]},{value}"
        else:
            self[name] = value


class ResponseHeaders(CaseInsensitiveDict):
    """Case insensitive response headers, stored as supplied.

    ``Set-Cookie`` and ``Set-Cookie2`` are kept internally but hidden from
    :meth:`visible_items` and :meth:`to_string`.
    """

    def visible_items(self) -> Iterable[tuple[str, str]]:
        return ((k, v) for k, v in self.items() if not is_set_cookie(k))

    def to_string(self) -> str:
        return "".join(f"{k}: {v}\r\n" for k, v in self.visible_items())

    @classmethod
    def from_mapping(cls, headers: Mapping[str, str] | None) -> ResponseHeaders:
        return cls(headers or {})
