"""Helper functions for sending PyDispatcher signals"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any as TypingAny

from pydispatch.dispatcher import (
    Anonymous,
    Any,
    disconnect,
    getAllReceivers,
    liveReceivers,
)
from pydispatch.robustapply import robustApply
from twisted.python.failure import Failure

logger = logging.getLogger(__name__)


def send_catch_log(
    signal: TypingAny = Any,
    sender: TypingAny = Anonymous,
    *arguments: TypingAny,
    **named: TypingAny,
) -> list[tuple[TypingAny, TypingAny]]:
    """Call every live receiver of ``signal`` and collect their results.

    Exceptions become :class:`~twisted.python.failure.Failure` results. They
    are logged unless their type is listed in the ``dont_log`` keyword.
    """
    dont_log = named.pop("dont_log", ())
    dont_log = tuple(dont_log) if isinstance(dont_log, Sequence) else (dont_log,)
    responses: list[tuple[TypingAny, TypingAny]] = []
    for receiver in liveReceivers(getAllReceivers(sender, signal)):
        result: TypingAny
        try:
            result = robustApply(
                receiver, signal=signal, sender=sender, *arguments, **named
            )
        except dont_log:
            result = Failure()
        except Exception:
            result = Failure()
            logger.error(
                "Error caught on signal handler: %(receiver)s",
                {"receiver": receiver},
                exc_info=True,
            )
        responses.append((receiver, result))
    return responses


def disconnect_all(signal: TypingAny = Any, sender: TypingAny = Any) -> None:
    """Remove every receiver of ``signal`` sent by ``sender``, e.g. between
    tests sharing a factory."""
    for receiver in liveReceivers(getAllReceivers(sender, signal)):
        disconnect(receiver, signal=signal, sender=sender)
