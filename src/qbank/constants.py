#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/constants.py
"""Constants and default values for the qbank converter.

This module centralizes the WordprocessingML tokens the converter recognizes
and the default values used by :class:`qbank.options.QuestionBankOptions`.

"""

from __future__ import annotations

from typing import Literal

# ============================================================================
# Package parts
# ============================================================================

DOCUMENT_PART_NAME = "word/document.xml"
NUMBERING_PART_NAME = "word/numbering.xml"

BYTE_ORDER_MARK = "\ufeff"

# ============================================================================
# WordprocessingML tokens
# ============================================================================

WORDPROCESSING_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
WORD_TAG_PREFIX = f"{{{WORDPROCESSING_NS}}}"

W_VAL = f"{WORD_TAG_PREFIX}val"
W_NUM_ID_ATTR = f"{WORD_TAG_PREFIX}numId"
W_ABSTRACT_NUM_ID_ATTR = f"{WORD_TAG_PREFIX}abstractNumId"
W_ILVL_ATTR = f"{WORD_TAG_PREFIX}ilvl"

W_PARAGRAPH = f"{WORD_TAG_PREFIX}p"
W_RUN = f"{WORD_TAG_PREFIX}r"
W_TEXT = f"{WORD_TAG_PREFIX}t"
W_RUN_PROPERTIES = f"{WORD_TAG_PREFIX}rPr"
W_BOLD = f"{WORD_TAG_PREFIX}b"
W_ITALIC = f"{WORD_TAG_PREFIX}i"
W_UNDERLINE = f"{WORD_TAG_PREFIX}u"
W_PARAGRAPH_STYLE = f"{WORD_TAG_PREFIX}pStyle"
W_NUMBERING_PROPERTIES = f"{WORD_TAG_PREFIX}numPr"
W_ILVL = f"{WORD_TAG_PREFIX}ilvl"
W_NUM_ID = f"{WORD_TAG_PREFIX}numId"
W_FIELD_CHAR = f"{WORD_TAG_PREFIX}fldChar"
W_INSTR_TEXT = f"{WORD_TAG_PREFIX}instrText"

W_NUM = f"{WORD_TAG_PREFIX}num"
W_ABSTRACT_NUM = f"{WORD_TAG_PREFIX}abstractNum"
W_ABSTRACT_NUM_ID = f"{WORD_TAG_PREFIX}abstractNumId"
W_LEVEL = f"{WORD_TAG_PREFIX}lvl"
W_NUMBER_FORMAT = f"{WORD_TAG_PREFIX}numFmt"

# Toggle properties switched off explicitly, e.g. <w:b w:val="0"/>
DISABLED_TOGGLE_VALUES = frozenset({"0", "false", "off", "none"})

# ============================================================================
# List formats
# ============================================================================

FormatKeyword = Literal["bullet", "decimal", "upper-alpha", "lower-alpha"]

DEFAULT_LIST_FORMAT: FormatKeyword = "decimal"

WORD_NUMBER_FORMATS: dict[str, FormatKeyword] = {
    "bullet": "bullet",
    "decimal": "decimal",
    "upperLetter": "upper-alpha",
    "lowerLetter": "lower-alpha",
}

# ============================================================================
# Paragraph styles and structure conventions
# ============================================================================

DEFAULT_HEADING1_STYLE = "Heading1"
DEFAULT_HEADING2_STYLE = "Heading2"
DEFAULT_HEADING3_STYLE = "Heading3"
DEFAULT_METADATA_STYLE = "Subtitle"
DEFAULT_LIST_STYLES: tuple[str, ...] = ("ListParagraph",)

DEFAULT_TOC_HEADING_TEXT = "Table of Contents"
DEFAULT_TAG_SEPARATOR = " / "
DEFAULT_CONTENT_KEY = "content"
DEFAULT_DISAMBIGUATION_PREFIX = "_"

# Item keys that exist beside the sub-fields; sub-field names are checked against them
ITEM_TITLE_KEY = "title"
ITEM_ID_KEY = "id"
ITEM_TAGS_KEY = "tags"

# ============================================================================
# Budgets
# ============================================================================

DEFAULT_MAX_PARAGRAPHS: int | None = None  # None means no limit
DEFAULT_TIMEOUT_SECONDS: float | None = None  # None means no limit

# ZIP archive security
DEFAULT_MAX_COMPRESSION_RATIO = 100.0  # Maximum compression ratio (uncompressed/compressed)
DEFAULT_MAX_UNCOMPRESSED_SIZE = 256 * 1024 * 1024  # 256MB maximum uncompressed size
DEFAULT_MAX_ZIP_ENTRIES = 10000  # Maximum number of entries in a ZIP archive

# ============================================================================
# CLI
# ============================================================================

ENV_VAR_PREFIX = "QBANK_"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_JSON_INDENT = 2
