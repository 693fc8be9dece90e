"""Helper functions for turning response bodies into XML documents"""

from __future__ import annotations

import logging
import re

from lxml import etree

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE_RE = re.compile(r"(text/xml)|(application/xml)|(\+xml)")


def is_xml_content_type(content_type: str | None) -> bool:
    """Return ``True`` if a body served with ``content_type`` should be parsed
    as XML. A missing content type counts as XML, like browsers do.

    >>> is_xml_content_type(None)
    True
    >>> is_xml_content_type("application/atom+xml; charset=utf-8")
    True
    >>> is_xml_content_type("text/plain")
    False
    """
    return not content_type or bool(XML_CONTENT_TYPE_RE.search(content_type))


def parse_xml(text: str) -> etree._ElementTree | None:
    """Parse ``text`` into an lxml document, or return ``None`` if it is not
    well-formed XML. External entities are never resolved."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        # lxml refuses str input carrying an encoding declaration
        root = etree.fromstring(text.encode("utf-8"), parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.debug("Unable to parse XML response body: %(error)s", {"error": e})
        return None
    return root.getroottree()
