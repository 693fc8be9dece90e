"""This module contains the default values for all settings used by fakexhr.

If you add a setting here remember to:

* add it in alphabetical order, with the exception that enabling flags and
  other high-level settings for a group should come first in their group
* group similar settings without leaving blank lines
"""

__all__ = [
    "CHUNK_SIZE",
    "LOG_DATEFORMAT",
    "LOG_ENABLED",
    "LOG_ENCODING",
    "LOG_FILE",
    "LOG_FILE_APPEND",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "LOG_SHORT_NAMES",
    "ROUTER_AUTORESPOND",
    "ROUTER_DEFAULT_RESPONSE",
    "XHR_TRANSPORT",
    "XML_PARSING_ENABLED",
]

CHUNK_SIZE = 10

LOG_ENABLED = True
LOG_DATEFORMAT = "%Y-%m-%d %H:%M:%S"
LOG_ENCODING = "utf-8"
LOG_FILE = None
LOG_FILE_APPEND = True
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
LOG_LEVEL = "DEBUG"
LOG_SHORT_NAMES = False

ROUTER_AUTORESPOND = True
ROUTER_DEFAULT_RESPONSE = [404, {}, ""]

XHR_TRANSPORT = None

XML_PARSING_ENABLED = True
