#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/utils/xml_utils.py
"""Safe XML loading for package parts."""

from __future__ import annotations

import logging
from typing import Optional
from xml.etree.ElementTree import Element

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

logger = logging.getLogger(__name__)


def parse_part(markup: str, part_name: str) -> Optional[Element]:
    """Parse a package part, returning None if it is empty or malformed.

    Parameters
    ----------
    markup : str
        XML text of the part
    part_name : str
        Part name used in log messages

    Returns
    -------
    Element or None
        Root element of the part

    """
    if not markup or not markup.strip():
        return None

    try:
        return ET.fromstring(markup)
    except (ET.ParseError, DefusedXmlException) as e:
        logger.warning("Ignoring malformed %s: %s", part_name, e)
        return None


def first_descendant_value(element: Element, tag: str, attribute: str) -> Optional[str]:
    """Return ``attribute`` of the first descendant named ``tag``, if any."""
    for child in element.iter(tag):
        if child is not element:
            return child.get(attribute)
    return None
