#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/__init__.py
"""Parsers turning DOCX question bank packages into question banks.

- package: unpacking the ``.docx`` container and the raw JSON transport
- numbering: resolving list marker formats from the numbering part
- runs: formatted text of a paragraph
- classifier: the structural role of a paragraph
- metadata: the ``[id]: tag / tag`` line of an item
- docx: the state machine assembling sections, items and sub-fields
"""

from qbank.parsers.base import BaseParser
from qbank.parsers.docx import DocxQuestionBankParser
from qbank.parsers.package import extract_raw_question_bank, raw_from_json, raw_to_json

__all__ = [
    "BaseParser",
    "DocxQuestionBankParser",
    "extract_raw_question_bank",
    "raw_from_json",
    "raw_to_json",
]
