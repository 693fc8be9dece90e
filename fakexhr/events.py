"""
Minimal DOM-style event support for fake requests.

There is no DOM tree, so events never bubble and propagation cannot be
stopped; :meth:`Event.stop_propagation` exists only so that code written for
browsers keeps working.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Callable

    ListenerT = Union[Callable[["Event"], Any], Any]


# Events that also call the matching on<event> attribute of their target
HANDLER_EVENTS: tuple[str, ...] = (
    "loadstart",
    "load",
    "abort",
    "loadend",
    "readystatechange",
)


class Event:
    def __init__(
        self,
        type: str,  # noqa: A002
        bubbles: bool = False,
        cancelable: bool = False,
        target: Any = None,
    ):
        self.type: str = type
        self.bubbles: bool = bubbles
        self.cancelable: bool = cancelable
        self.target: Any = target
        self.default_prevented: bool = False

    def stop_propagation(self) -> None:
        pass

    def prevent_default(self) -> None:
        self.default_prevented = True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.type}>"


class EventTarget:
    """Keeps an ordered list of listeners per event type.

    Listeners are either plain callables, called with the event, or objects
    with a ``handle_event`` method. The same listener may be registered more
    than once and is then called once per registration.
    """

    def __init__(self) -> None:
        self._event_listeners: dict[str, list[ListenerT]] = {}

    def add_event_listener(self, event_type: str, listener: ListenerT) -> None:
        self._event_listeners.setdefault(event_type, []).append(listener)

    def remove_event_listener(self, event_type: str, listener: ListenerT) -> None:
        """Remove the first registration of ``listener`` for ``event_type``.
        Unknown listeners are ignored."""
        listeners = self._event_listeners.get(event_type, [])
        for i, registered in enumerate(listeners):
            if registered is listener:
                del listeners[i]
                return

    def dispatch_event(self, event: Event) -> bool:
        """Call every listener registered for ``event.type``, in registration
        order, and return whether any of them prevented the default action.

        Exceptions raised by listeners are not caught and stop the dispatch.
        """
        for listener in list(self._event_listeners.get(event.type, ())):
            if callable(listener):
                listener(event)
            else:
                listener.handle_event(event)
        return event.default_prevented

    def _install_handler_attribute(self, event_type: str) -> None:
        """Register a listener that forwards ``event_type`` events to the
        ``on<event_type>`` attribute, if it holds a callable when the event
        fires."""

        def forward(event: Event) -> None:
            handler = getattr(self, f"on{event_type}", None)
            if callable(handler):
                handler(event)

        self.add_event_listener(event_type, forward)
