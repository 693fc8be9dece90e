from __future__ import annotations

from typing import Any

from pydispatch import dispatcher

from fakexhr.utils import signal as _signal


class SignalManager:
    """Signals sent on behalf of one sender, usually an
    :class:`~fakexhr.factory.XHRFactory`.

    Every request created by a factory shares its manager, so a receiver
    connected once sees the whole traffic of that factory::

        factory.signals.connect(on_sent, fakexhr.signals.request_sent)
    """

    def __init__(self, sender: Any = dispatcher.Anonymous):
        self.sender: Any = sender

    def connect(self, receiver: Any, signal: Any, **kwargs: Any) -> None:
        """
        Call ``receiver`` every time ``signal`` is sent by this manager.

        Receivers get the keyword arguments they declare, for the signals in
        :mod:`fakexhr.signals` that is ``xhr``. Note that the dispatcher only
        keeps weak references to receivers.
        """
        kwargs.setdefault("sender", self.sender)
        dispatcher.connect(receiver, signal, **kwargs)

    def disconnect(self, receiver: Any, signal: Any, **kwargs: Any) -> None:
        """Undo a previous :meth:`connect` call made with the same arguments."""
        kwargs.setdefault("sender", self.sender)
        dispatcher.disconnect(receiver, signal, **kwargs)

    def send_catch_log(self, signal: Any, **kwargs: Any) -> list[tuple[Any, Any]]:
        """
        Send ``signal`` to the connected receivers and return a list of
        ``(receiver, result)`` pairs.

        A receiver raising an exception does not stop the others: the error
        is logged and its result is a :class:`~twisted.python.failure.Failure`.
        """
        kwargs.setdefault("sender", self.sender)
        return _signal.send_catch_log(signal, **kwargs)

    def disconnect_all(self, signal: Any, **kwargs: Any) -> None:
        """Disconnect every receiver of ``signal`` for this manager's sender."""
        kwargs.setdefault("sender", self.sender)
        _signal.disconnect_all(signal, **kwargs)
