#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/base.py
"""Base classes for question bank parsers.

This module defines the abstract base class parsers inherit from. It carries
the options object and the optional progress callback, and offers the shared
helpers for option validation and progress reporting.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from qbank.ast.nodes import QuestionBank, RawQuestionBank
from qbank.exceptions import InvalidOptionsError
from qbank.options.base import BaseParserOptions
from qbank.progress import ProgressCallback, ProgressEvent
from qbank.utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for question bank parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser options
    progress_callback : ProgressCallback or None, default = None
        Optional callback for progress updates during parsing

    Examples
    --------
        >>> class EmptyParser(BaseParser):
        ...     def parse(self, raw, cancel_token=None):
        ...         return QuestionBank()

    """

    def __init__(self, options: BaseParserOptions | None = None, progress_callback: Optional[ProgressCallback] = None):
        self.options: BaseParserOptions | None = options
        self.progress_callback: Optional[ProgressCallback] = progress_callback

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, raw: RawQuestionBank, cancel_token: Optional[CancellationToken] = None) -> QuestionBank:
        """Parse an extracted body/numbering pair into a question bank.

        Parameters
        ----------
        raw : RawQuestionBank
            The ``(document, numbering)`` markup pair
        cancel_token : CancellationToken, optional
            Token checked between paragraphs

        Returns
        -------
        QuestionBank
            The parsed bank; empty if the body is missing or malformed

        Raises
        ------
        ParseCancelledError
            If ``cancel_token`` was triggered
        ParseTimeoutError
            If a paragraph or wall-clock budget was exhausted

        """
        raise NotImplementedError

    def _emit_progress(self, event_type: str, message: str, current: int = 0, total: int = 0, **metadata: Any) -> None:
        """Emit a progress event to the callback if registered.

        A callback that raises is logged and otherwise ignored so it cannot
        interrupt the parse.

        """
        if not self.progress_callback:
            return

        try:
            event = ProgressEvent(
                event_type=event_type,  # type: ignore[arg-type]
                message=message,
                current=current,
                total=total,
                metadata=metadata,
            )
            self.progress_callback(event)
        except Exception as e:
            logger.warning(f"Progress callback raised exception: {e}", exc_info=True)
