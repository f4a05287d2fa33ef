#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/numbering.py
"""Numbering format resolution.

Body paragraphs reference list styles indirectly: a paragraph names a
``w:numId`` and an indent-level (``w:ilvl``); the ``w:num`` with that id
points at a ``w:abstractNum``, whose ``w:lvl`` entries declare the marker
format per indent-level. The references run out of document order, so the
whole table is resolved once before any paragraph is visited.

"""

from __future__ import annotations

import logging
from xml.etree.ElementTree import Element

from qbank.constants import (
    DEFAULT_LIST_FORMAT,
    NUMBERING_PART_NAME,
    W_ABSTRACT_NUM,
    W_ABSTRACT_NUM_ID,
    W_ABSTRACT_NUM_ID_ATTR,
    W_ILVL_ATTR,
    W_LEVEL,
    W_NUM,
    W_NUM_ID_ATTR,
    W_NUMBER_FORMAT,
    W_VAL,
    WORD_NUMBER_FORMATS,
    FormatKeyword,
)
from qbank.utils.xml_utils import parse_part

logger = logging.getLogger(__name__)

NumberingTable = dict[str, dict[str, FormatKeyword]]


def to_format_keyword(word_format: str) -> FormatKeyword:
    """Map a Word ``w:numFmt`` value to a format keyword.

    Formats without a dedicated keyword (roman numerals, ordinals, ...) render
    as decimal.
    """
    return WORD_NUMBER_FORMATS.get(word_format, DEFAULT_LIST_FORMAT)


def _collect_level_formats(abstract_num: Element) -> dict[str, FormatKeyword]:
    formats: dict[str, FormatKeyword] = {}
    for level in abstract_num.iter(W_LEVEL):
        ilvl = level.get(W_ILVL_ATTR)
        number_format = level.find(f".//{W_NUMBER_FORMAT}")
        if not ilvl or number_format is None:
            continue
        value = number_format.get(W_VAL)
        if value:
            formats[ilvl] = to_format_keyword(value)
    return formats


def resolve_numbering_formats(numbering_xml: str) -> NumberingTable:
    """Build the (numbering-id, indent-level) -> format table.

    Parameters
    ----------
    numbering_xml : str
        Markup of ``word/numbering.xml``; may be empty

    Returns
    -------
    NumberingTable
        ``table[num_id][ilvl]`` is the format keyword. Dangling references and
        levels without a declared format are omitted.

    """
    root = parse_part(numbering_xml, NUMBERING_PART_NAME)
    if root is None:
        return {}

    abstract_nums: dict[str, Element] = {}
    for abstract_num in root.iter(W_ABSTRACT_NUM):
        abstract_num_id = abstract_num.get(W_ABSTRACT_NUM_ID_ATTR)
        if abstract_num_id is not None:
            abstract_nums.setdefault(abstract_num_id, abstract_num)

    table: NumberingTable = {}
    for num in root.iter(W_NUM):
        num_id = num.get(W_NUM_ID_ATTR)
        reference = num.find(f".//{W_ABSTRACT_NUM_ID}")
        if not num_id or reference is None:
            continue

        # Known numbering ids are kept even when their abstract definition is missing
        table[num_id] = {}
        abstract_num = abstract_nums.get(reference.get(W_VAL) or "")
        if abstract_num is None:
            logger.debug("Numbering id %s references unknown abstract numbering", num_id)
            continue
        table[num_id] = _collect_level_formats(abstract_num)

    logger.debug("Resolved %d numbering definitions", len(table))
    return table
