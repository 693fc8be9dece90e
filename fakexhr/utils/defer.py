"""
Helper functions for bridging fake requests and Twisted deferreds
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from twisted.internet.defer import Deferred

from fakexhr.exceptions import RequestAborted

if TYPE_CHECKING:
    from fakexhr.events import Event
    from fakexhr.xhr import XMLHttpRequest


def _synchronous_error(xhr: XMLHttpRequest) -> ValueError:
    return ValueError(
        f"Cannot wait for synchronous {xhr!r}: it dispatches no load event"
    )


def deferred_from_xhr(xhr: XMLHttpRequest) -> Deferred[XMLHttpRequest]:
    """Return a Deferred that fires with ``xhr`` when it dispatches ``load``,
    or fails with :exc:`~fakexhr.exceptions.RequestAborted` when it dispatches
    ``abort``, whichever happens first.

    Only asynchronous requests dispatch ``load``. A request already opened as
    synchronous raises :exc:`ValueError`, and one opened as synchronous later
    fails the Deferred with :exc:`ValueError` when it is sent.

    Nothing is scheduled: the Deferred fires synchronously, from inside the
    ``send``, ``respond`` or ``abort`` call that decides the outcome.
    """
    if xhr.method is not None and not xhr.is_async:
        raise _synchronous_error(xhr)

    d: Deferred[XMLHttpRequest] = Deferred()

    def cleanup() -> None:
        xhr.remove_event_listener("loadstart", on_loadstart)
        xhr.remove_event_listener("load", on_load)
        xhr.remove_event_listener("abort", on_abort)

    def on_loadstart(event: Event) -> None:
        if not xhr.is_async:
            cleanup()
            d.errback(_synchronous_error(xhr))

    def on_load(event: Event) -> None:
        cleanup()
        d.callback(xhr)

    def on_abort(event: Event) -> None:
        cleanup()
        d.errback(RequestAborted(xhr))

    xhr.add_event_listener("loadstart", on_loadstart)
    xhr.add_event_listener("load", on_load)
    xhr.add_event_listener("abort", on_abort)
    return d
