"""
fakexhr - a controllable XMLHttpRequest stand-in for tests and request routing
harnesses
"""

import pkgutil

# Declare top-level shortcuts
from fakexhr.events import Event
from fakexhr.factory import XHRFactory
from fakexhr.router import Router
from fakexhr.xhr import ReadyState, XMLHttpRequest

__all__ = [
    "Event",
    "ReadyState",
    "Router",
    "XHRFactory",
    "XMLHttpRequest",
    "__version__",
    "version_info",
]


__version__ = (pkgutil.get_data(__package__, "VERSION") or b"").decode("ascii").strip()
version_info = tuple(int(v) if v.isdigit() else v for v in __version__.split("."))


del pkgutil
