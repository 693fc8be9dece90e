"""
A transport that answers fake requests from a table of routes.

Routes are tried in the order they were added. Each one matches on the request
method and URL and provides the ``(status, headers, body)`` triple passed to
:meth:`~fakexhr.xhr.XMLHttpRequest.respond`, either directly or through a
callable that receives the request.
"""

from __future__ import annotations

import logging
from re import Pattern
from typing import TYPE_CHECKING, Any, Union

from w3lib.url import canonicalize_url

from fakexhr.xhr import ReadyState

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    # typing.Self requires Python 3.11
    from typing_extensions import Self

    from fakexhr.settings import BaseSettings
    from fakexhr.xhr import XMLHttpRequest

    ResponseT = tuple[int, Mapping[str, str], str]
    ResponderT = Union[ResponseT, Callable[[XMLHttpRequest], Union[ResponseT, None]]]


logger = logging.getLogger(__name__)


class Route:
    def __init__(
        self,
        method: str | None,
        url: str | Pattern[str],
        response: ResponderT,
    ):
        self.method: str | None = method.upper() if method else None
        self.url: str | Pattern[str] = (
            url if isinstance(url, Pattern) else canonicalize_url(url)
        )
        self.response: ResponderT = response

    def matches(self, xhr: XMLHttpRequest) -> bool:
        if self.method is not None and (xhr.method or "").upper() != self.method:
            return False
        if isinstance(self.url, Pattern):
            return self.url.fullmatch(xhr.url or "") is not None
        return canonicalize_url(xhr.url or "") == self.url

    def __repr__(self) -> str:
        url = self.url.pattern if isinstance(self.url, Pattern) else self.url
        return f"<Route {self.method or '*'} {url}>"


class Router:
    """Transport answering requests from registered routes.

    With ``autorespond`` enabled, requests are answered from inside ``send``.
    Otherwise they wait in :attr:`queue` until :meth:`respond_next` or
    :meth:`respond_all` is called, which lets tests inspect requests in their
    ``OPENED`` state first.
    """

    def __init__(
        self,
        default_response: ResponseT | None = None,
        autorespond: bool = True,
    ):
        self.default_response: tuple[Any, ...] = (
            (404, {}, "") if default_response is None else tuple(default_response)
        )
        self.autorespond: bool = autorespond
        self.routes: list[Route] = []
        self.requests: list[XMLHttpRequest] = []
        self.queue: list[XMLHttpRequest] = []

    @classmethod
    def from_settings(cls, settings: BaseSettings) -> Self:
        return cls(
            default_response=tuple(settings.getlist("ROUTER_DEFAULT_RESPONSE")),
            autorespond=settings.getbool("ROUTER_AUTORESPOND"),
        )

    def add(
        self,
        method: str | None,
        url: str | Pattern[str],
        response: ResponderT,
    ) -> Route:
        """Register a route. ``method`` ``None`` matches any method, a
        string ``url`` is compared after canonicalization and a compiled
        pattern must match the whole URL."""
        route = Route(method, url, response)
        self.routes.append(route)
        return route

    def __call__(self, xhr: XMLHttpRequest) -> None:
        self.requests.append(xhr)
        if self.autorespond:
            self.process(xhr)
        else:
            self.queue.append(xhr)

    def process(self, xhr: XMLHttpRequest) -> None:
        route = self.match(xhr)
        if route is None:
            logger.debug("No route for %(xhr)r", {"xhr": xhr})
            # fresh headers for every response
            response: Any = tuple(
                dict(value) if isinstance(value, dict) else value
                for value in self.default_response
            )
        else:
            logger.debug("%(route)r matched %(xhr)r", {"route": route, "xhr": xhr})
            response = route.response
            if callable(response):
                response = response(xhr)
        if response is None:
            # the route callable will answer later, or never
            return
        xhr.respond(*response)

    def match(self, xhr: XMLHttpRequest) -> Route | None:
        for route in self.routes:
            if route.matches(xhr):
                return route
        return None

    def respond_next(self) -> XMLHttpRequest | None:
        """Answer the oldest queued request that is still waiting for a
        response and return it, or return ``None`` if there is none left.

        Requests that were aborted or already answered by other means are
        dropped from the queue."""
        while self.queue:
            xhr = self.queue.pop(0)
            if xhr.aborted or xhr.ready_state == ReadyState.DONE:
                logger.debug("Skipping finished %(xhr)r", {"xhr": xhr})
                continue
            self.process(xhr)
            return xhr
        return None

    def respond_all(self) -> None:
        while self.respond_next() is not None:
            pass
