"""
This module implements the XMLHttpRequest class, a fake of the browser object
of the same name whose responses are decided by the caller.

A request goes through the usual lifecycle::

    xhr = XMLHttpRequest()
    xhr.open("GET", "/items")
    xhr.send()
    xhr.respond(200, {"Content-Type": "application/json"}, '{"items": []}')

``send`` hands the request to the transport the instance was created with (if
any), which is expected to call :meth:`XMLHttpRequest.respond` or rely on the
caller calling :meth:`XMLHttpRequest.abort`. Everything happens synchronously
inside those calls; the ``is_async`` flag only decides whether intermediate
ready state changes are dispatched as events.
"""

from __future__ import annotations

import logging
import re
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from fakexhr import signals
from fakexhr.events import HANDLER_EVENTS, Event, EventTarget
from fakexhr.exceptions import (
    HeadersNotReceivedError,
    InvalidBodyError,
    InvalidStateError,
    RequestDoneError,
    UnsafeHeaderError,
)
from fakexhr.http.headers import (
    RequestHeaders,
    ResponseHeaders,
    is_set_cookie,
    is_unsafe_header,
)
from fakexhr.http.status import status_text
from fakexhr.utils.xml import is_xml_content_type, parse_xml

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from lxml import etree

    from fakexhr.signalmanager import SignalManager

    TransportT = Callable[["XMLHttpRequest"], Any]


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 10

_BODYLESS_METHOD_RE = re.compile(r"^(get|head)$", re.IGNORECASE)


class ReadyState(IntEnum):
    UNSENT = 0
    OPENED = 1
    HEADERS_RECEIVED = 2
    LOADING = 3
    DONE = 4


class XMLHttpRequest(EventTarget):
    """A single fake request/response exchange.

    :param transport: callable receiving the request when it is sent. It
        decides the outcome and eventually calls :meth:`respond`.
    :param chunk_size: number of body characters appended to
        :attr:`response_text` per ``LOADING`` step.
    :param parse_xml: whether XML-looking bodies are parsed into
        :attr:`response_xml`.
    :param signals: :class:`~fakexhr.signalmanager.SignalManager` used to
        send the signals in :mod:`fakexhr.signals`.
    """

    UNSENT = ReadyState.UNSENT
    OPENED = ReadyState.OPENED
    HEADERS_RECEIVED = ReadyState.HEADERS_RECEIVED
    LOADING = ReadyState.LOADING
    DONE = ReadyState.DONE

    def __init__(
        self,
        transport: TransportT | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        parse_xml: bool = True,
        signals: SignalManager | None = None,
    ):
        super().__init__()
        self.transport: TransportT | None = transport
        self.chunk_size: int = chunk_size
        self.parse_xml: bool = parse_xml
        self.signals: SignalManager | None = signals

        self.ready_state: ReadyState = ReadyState.UNSENT
        self.method: str | None = None
        self.url: str | None = None
        self.is_async: bool = True
        self.username: str | None = None
        self.password: str | None = None
        self.request_headers: RequestHeaders = RequestHeaders()
        self.request_body: Any = None
        self.send_flag: bool = False
        self.error_flag: bool = False
        self.aborted: bool = False

        self.response_headers: ResponseHeaders = ResponseHeaders()
        self.status: int = 0
        self.status_text: str = ""
        self.response_text: str | None = None
        self.response_xml: etree._ElementTree | None = None

        self.onsend: Callable[[XMLHttpRequest], Any] | None = None
        self.onreadystatechange: Callable[[Event], Any] | None = None
        self.onloadstart: Callable[[Event], Any] | None = None
        self.onload: Callable[[Event], Any] | None = None
        self.onabort: Callable[[Event], Any] | None = None
        self.onloadend: Callable[[Event], Any] | None = None
        self.onerror: Callable[[Event], Any] | None = None
        for event_type in HANDLER_EVENTS:
            self._install_handler_attribute(event_type)

    def __repr__(self) -> str:
        state = self.ready_state.name
        return f"<{type(self).__name__} {self.method} {self.url} ({state})>"

    # Request side

    def open(
        self,
        method: str,
        url: str,
        is_async: bool = True,
        username: str | None = None,
        password: str | None = None,
    ) -> None:
        self.method = method
        self.url = url
        self.is_async = is_async if isinstance(is_async, bool) else True
        self.username = username
        self.password = password
        self.response_text = None
        self.response_xml = None
        self.request_headers = RequestHeaders()
        self.request_body = None
        self.send_flag = False
        self.error_flag = False
        self.aborted = False
        self._ready_state_change(ReadyState.OPENED)

    def set_request_header(self, name: str, value: str) -> None:
        self._verify_state()
        if is_unsafe_header(name):
            raise UnsafeHeaderError(name)
        self.request_headers.add(name, value)

    def send(self, body: Any = None) -> None:
        self._verify_state()

        if not _BODYLESS_METHOD_RE.match(self.method or ""):
            content_type = self.request_headers.get("Content-Type")
            if content_type:
                media_type = content_type.split(";")[0]
                self.request_headers["Content-Type"] = f"{media_type};charset=utf-8"
            else:
                self.request_headers["Content-Type"] = "text/plain;charset=utf-8"
            self.request_body = body

        self.error_flag = False
        self.send_flag = self.is_async
        self._ready_state_change(ReadyState.OPENED)

        if callable(self.onsend):
            self.onsend(self)

        self.dispatch_event(Event("loadstart", target=self))
        self._send_signal(signals.request_sent)

        if self.error_flag:
            # aborted by one of the listeners above
            return
        if self.transport is None:
            logger.debug(
                "No transport for %(xhr)r, waiting for a response", {"xhr": self}
            )
            return
        logger.debug(
            "Handing %(xhr)r to %(transport)r",
            {"xhr": self, "transport": self.transport},
        )
        self.transport(self)

    def abort(self) -> None:
        self.aborted = True
        self.response_text = None
        self.error_flag = True
        self.request_headers = RequestHeaders()

        if self.ready_state > ReadyState.UNSENT and self.send_flag:
            self._ready_state_change(ReadyState.DONE)
            self.send_flag = False

        self.ready_state = ReadyState.UNSENT

        event = Event("abort", target=self)
        self.dispatch_event(event)
        if callable(self.onerror):
            self.onerror(event)

        logger.debug("Aborted %(xhr)r", {"xhr": self})
        self._send_signal(signals.request_aborted)

    # Response side

    def get_response_header(self, name: str) -> str | None:
        if self.ready_state < ReadyState.HEADERS_RECEIVED:
            return None
        if is_set_cookie(name):
            return None
        return self.response_headers.get(name)

    def get_all_response_headers(self) -> str:
        if self.ready_state < ReadyState.HEADERS_RECEIVED:
            return ""
        return self.response_headers.to_string()

    def respond(
        self,
        status: int | None = None,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> None:
        """Force a response on to this request.

        This is the entry point transports use to finish an exchange::

            xhr.respond(404, {"Content-Type": "text/plain"}, "Sorry, not found.")

        Headers are recorded first, then the status, then the body is
        delivered in chunks of :attr:`chunk_size` characters. Responses to an
        aborted request are ignored, and an exchange that already reached
        ``DONE`` cannot be responded to again.
        """
        if self.error_flag:
            logger.debug("Ignoring response to aborted %(xhr)r", {"xhr": self})
            return
        if self.ready_state == ReadyState.DONE:
            raise RequestDoneError()

        self._set_response_headers(headers or {})
        if self.error_flag:
            return

        self.status = _normalize_status(status)
        self.status_text = status_text(self.status)

        if not self._set_response_body("" if body is None else body):
            return

        # asynchronous requests already called onload through the load event
        if not self.is_async and callable(self.onload):
            self.onload(Event("load", target=self))

        self._send_signal(signals.response_received)

    def _set_response_headers(self, headers: Mapping[str, str]) -> None:
        self.response_headers = ResponseHeaders.from_mapping(headers)

        if self.is_async:
            self._ready_state_change(ReadyState.HEADERS_RECEIVED)
        else:
            self.ready_state = ReadyState.HEADERS_RECEIVED

    def _set_response_body(self, body: str) -> bool:
        """Deliver ``body`` and return whether this call took the exchange to
        ``DONE``. Delivery stops early, returning ``False``, when a listener
        aborts, reopens or answers the request in the meantime."""
        if self.ready_state == ReadyState.DONE:
            raise RequestDoneError()
        if self.is_async and self.ready_state != ReadyState.HEADERS_RECEIVED:
            raise HeadersNotReceivedError()
        if not isinstance(body, str):
            raise InvalidBodyError(body)

        chunk_size = self.chunk_size
        if not chunk_size or chunk_size < 0:
            chunk_size = DEFAULT_CHUNK_SIZE
        index = 0
        self.response_text = ""

        # at least one LOADING step, even for an empty body
        while True:
            if self.is_async:
                self._ready_state_change(ReadyState.LOADING)
                if not self._still_loading():
                    return False
            self.response_text += body[index : index + chunk_size]
            index += chunk_size
            if index >= len(body):
                break

        content_type = self.get_response_header("Content-Type")
        if self.parse_xml and self.response_text and is_xml_content_type(content_type):
            self.response_xml = parse_xml(self.response_text)

        self.send_flag = False
        if self.is_async:
            self._ready_state_change(ReadyState.DONE)
        else:
            self.ready_state = ReadyState.DONE
        return True

    # Internals

    def _ready_state_change(self, state: ReadyState) -> None:
        self.ready_state = state
        self.dispatch_event(Event("readystatechange", target=self))

        # errored exchanges reach DONE without load/loadend
        if self.ready_state == ReadyState.DONE and not self.error_flag:
            self.dispatch_event(Event("load", target=self))
            self.dispatch_event(Event("loadend", target=self))

    def _still_loading(self) -> bool:
        return not self.error_flag and self.ready_state == ReadyState.LOADING

    def _verify_state(self) -> None:
        if self.ready_state != ReadyState.OPENED:
            raise InvalidStateError()
        if self.send_flag:
            raise InvalidStateError()

    def _send_signal(self, signal: Any) -> None:
        if self.signals is not None:
            self.signals.send_catch_log(signal, xhr=self)


def _normalize_status(status: Any) -> int:
    """
    >>> _normalize_status(None)
    200
    >>> _normalize_status(404)
    404
    >>> _normalize_status("nope")
    200
    """
    if status is None or isinstance(status, bool):
        return 200
    try:
        return int(status)
    except (TypeError, ValueError):
        return 200
