#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/classifier.py
"""Paragraph classification.

Each body paragraph is assigned the role it plays in the question bank:
a section, item or sub-field heading, the metadata line, a list item or a
plain paragraph. Page-number fields, table-of-contents fields and the
table-of-contents heading are export artifacts and are dropped here.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from xml.etree.ElementTree import Element

from qbank.ast.nodes import RichText
from qbank.constants import W_FIELD_CHAR, W_ILVL, W_INSTR_TEXT, W_NUM_ID, W_PARAGRAPH_STYLE, W_VAL
from qbank.options.docx import QuestionBankOptions
from qbank.parsers.runs import FormattedText
from qbank.utils.xml_utils import first_descendant_value

logger = logging.getLogger(__name__)

# numId 0 removes numbering inherited from the paragraph style
_NO_NUMBERING_ID = "0"


class ParagraphRole(str, Enum):
    """Role of a paragraph in the question bank structure."""

    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    METADATA = "metadata"
    LIST_ITEM = "list_item"
    PLAIN = "plain"

    @property
    def is_content(self) -> bool:
        """Return True for roles routed through the content builder."""
        return self in (ParagraphRole.LIST_ITEM, ParagraphRole.PLAIN)


@dataclass(frozen=True)
class ParagraphInfo:
    """Classification result for one content-bearing paragraph.

    Parameters
    ----------
    role : ParagraphRole
        Structural role
    style : str or None
        Declared paragraph style id
    text : str
        Trimmed plain text
    rich_text : RichText
        Formatted runs
    ilvl : str or None
        Declared indent-level reference
    num_id : str or None
        Declared numbering-id reference
    level : int
        Nesting level: 0 for everything but list items, indent-level + 1 for list items

    """

    role: ParagraphRole
    style: Optional[str]
    text: str
    rich_text: RichText
    ilvl: Optional[str] = None
    num_id: Optional[str] = None
    level: int = 0


def is_export_artifact(paragraph: Element, text: str, options: QuestionBankOptions) -> bool:
    """Return True for page-number fields, table-of-contents fields and the TOC heading."""
    if paragraph.find(f".//{W_FIELD_CHAR}") is not None:
        return True
    if paragraph.find(f".//{W_INSTR_TEXT}") is not None:
        return True
    return text == options.toc_heading_text


def _parse_indent_level(ilvl: Optional[str]) -> int:
    if not ilvl:
        return 0
    try:
        return max(int(ilvl), 0)
    except ValueError:
        logger.debug("Ignoring non-numeric indent level %r", ilvl)
        return 0


def _role_for_style(style: Optional[str], num_id: Optional[str], options: QuestionBankOptions) -> ParagraphRole:
    if style == options.heading1_style:
        return ParagraphRole.HEADING1
    if style == options.heading2_style:
        return ParagraphRole.HEADING2
    if style == options.heading3_style:
        return ParagraphRole.HEADING3
    if style == options.metadata_style:
        return ParagraphRole.METADATA
    if style in options.list_styles or (num_id and num_id != _NO_NUMBERING_ID):
        return ParagraphRole.LIST_ITEM
    return ParagraphRole.PLAIN


def classify_paragraph(
    paragraph: Element, formatted: FormattedText, options: QuestionBankOptions
) -> Optional[ParagraphInfo]:
    """Classify a body paragraph.

    Parameters
    ----------
    paragraph : Element
        A ``w:p`` element
    formatted : FormattedText
        The paragraph's runs, from :func:`qbank.parsers.runs.format_runs`
    options : QuestionBankOptions
        Style conventions

    Returns
    -------
    ParagraphInfo or None
        None if the paragraph carries no content and must not touch any state

    """
    if not formatted.plain or is_export_artifact(paragraph, formatted.plain, options):
        return None

    style = first_descendant_value(paragraph, W_PARAGRAPH_STYLE, W_VAL)
    ilvl = first_descendant_value(paragraph, W_ILVL, W_VAL)
    num_id = first_descendant_value(paragraph, W_NUM_ID, W_VAL)

    role = _role_for_style(style, num_id, options)
    level = _parse_indent_level(ilvl) + 1 if role is ParagraphRole.LIST_ITEM else 0

    return ParagraphInfo(
        role=role,
        style=style,
        text=formatted.plain,
        rich_text=formatted.rich,
        ilvl=ilvl,
        num_id=num_id,
        level=level,
    )
