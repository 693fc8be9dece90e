from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fakexhr.exceptions import NotConfigured
from fakexhr.settings import Settings
from fakexhr.signalmanager import SignalManager
from fakexhr.utils.misc import load_object
from fakexhr.xhr import XMLHttpRequest

if TYPE_CHECKING:
    # typing.Self requires Python 3.11
    from typing_extensions import Self

    from fakexhr.xhr import TransportT


logger = logging.getLogger(__name__)


class XHRFactory:
    """Creates :class:`~fakexhr.xhr.XMLHttpRequest` objects already bound to
    a transport, configured from settings and sharing one
    :class:`~fakexhr.signalmanager.SignalManager`.

    Pass an instance wherever code expects the ``XMLHttpRequest``
    constructor::

        factory = XHRFactory(Router())
        xhr = factory()
    """

    def __init__(
        self,
        transport: TransportT | None = None,
        settings: dict[str, Any] | Settings | None = None,
    ):
        if isinstance(settings, dict) or settings is None:
            settings = Settings(settings)
        self.settings: Settings = settings.frozencopy()
        self.transport: TransportT | None = transport
        self.signals: SignalManager = SignalManager(self)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build a factory whose transport is loaded from the
        ``XHR_TRANSPORT`` setting.

        Classes are instantiated, through their ``from_settings`` class method
        when they have one.
        """
        path = settings.get("XHR_TRANSPORT")
        if not path:
            raise NotConfigured("XHR_TRANSPORT setting is not set")
        transport = load_object(path)
        if isinstance(transport, type):
            if hasattr(transport, "from_settings"):
                transport = transport.from_settings(settings)
            else:
                transport = transport()
        logger.debug("Using transport %(transport)r", {"transport": transport})
        return cls(transport, settings)

    def __call__(self) -> XMLHttpRequest:
        return XMLHttpRequest(
            self.transport,
            chunk_size=self.settings.getint("CHUNK_SIZE"),
            parse_xml=self.settings.getbool("XML_PARSING_ENABLED"),
            signals=self.signals,
        )
