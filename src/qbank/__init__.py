"""qbank - convert exported Word question banks into structured data.

A question bank is authored in Word with a fixed set of conventions: level-1
headings delimit sections, level-2 headings delimit items, a ``Subtitle``
paragraph carries the ``[id]: tag / tag`` metadata of an item, and level-3
headings open named sub-fields such as ``Answer`` or ``Rationale``. qbank
unpacks the ``.docx`` package, reads the body and numbering parts, and builds
an ordered, immutable :class:`~qbank.ast.QuestionBank`.

Requirements
------------
- Python 3.10+
- defusedxml for XML parsing

Examples
--------
Basic usage:

    >>> from qbank import to_question_bank
    >>> bank = to_question_bank("bank.docx")
    >>> item = bank["Cardiology"]["Systolic murmur"]
    >>> item.id, item.tags
    ('42', ('Cardiology', 'Auscultation'))

Extracting the raw pair for upload and parsing it later:

    >>> from qbank import blob_to_raw_question_bank, parse_question_bank
    >>> raw = blob_to_raw_question_bank("bank.docx")
    >>> bank = parse_question_bank(raw)

See Also
--------
qbank.ast : Tree node definitions and serialization
qbank.search : Query and tag filtering

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "qbank requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from qbank.api import (
    blob_to_raw_question_bank,
    blob_to_raw_question_bank_async,
    parse_question_bank,
    to_question_bank,
    to_question_bank_async,
)
from qbank.ast import Item, QuestionBank, RawQuestionBank
from qbank.exceptions import (
    InvalidOptionsError,
    MalformedFileError,
    ParseCancelledError,
    ParseTimeoutError,
    ParsingError,
    QBankError,
)
from qbank.options import BaseParserOptions, QuestionBankOptions
from qbank.progress import ProgressCallback, ProgressEvent
from qbank.search import collect_tags, filter_question_bank
from qbank.utils.cancellation import CancellationToken

__all__ = [
    "__version__",
    "blob_to_raw_question_bank",
    "blob_to_raw_question_bank_async",
    "parse_question_bank",
    "to_question_bank",
    "to_question_bank_async",
    # Output types
    "QuestionBank",
    "Item",
    "RawQuestionBank",
    # Search
    "collect_tags",
    "filter_question_bank",
    # Options and cancellation
    "BaseParserOptions",
    "QuestionBankOptions",
    "CancellationToken",
    # Progress system
    "ProgressCallback",
    "ProgressEvent",
    # Exceptions
    "QBankError",
    "InvalidOptionsError",
    "MalformedFileError",
    "ParsingError",
    "ParseCancelledError",
    "ParseTimeoutError",
]
