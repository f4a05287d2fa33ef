#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/utils/cancellation.py
"""Cancellation tokens and parse budgets.

A parse checks its :class:`ParseBudget` between paragraphs. Cancellation and
exhausted budgets surface as :class:`~qbank.exceptions.ParseCancelledError`
and :class:`~qbank.exceptions.ParseTimeoutError`, never as a partial bank.

"""

from __future__ import annotations

import threading
import time
from typing import Optional

from qbank.exceptions import ParseCancelledError, ParseTimeoutError


class CancellationToken:
    """Thread-safe flag a caller sets to stop a running parse.

    Examples
    --------
    >>> token = CancellationToken()
    >>> future = executor.submit(parse_question_bank, raw, cancel_token=token)
    >>> token.cancel()

    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Return True once cancellation was requested."""
        return self._event.is_set()


class ParseBudget:
    """Paragraph-count and wall-clock limits for one parse.

    Parameters
    ----------
    max_paragraphs : int or None
        Maximum number of paragraphs to consume
    timeout_seconds : float or None
        Wall-clock budget measured from construction
    cancel_token : CancellationToken or None
        Token checked on every paragraph

    """

    def __init__(
        self,
        max_paragraphs: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        self.max_paragraphs = max_paragraphs
        self.timeout_seconds = timeout_seconds
        self.cancel_token = cancel_token
        self.paragraphs_processed = 0
        self._deadline = time.monotonic() + timeout_seconds if timeout_seconds is not None else None

    def check(self) -> None:
        """Account for one paragraph and enforce every limit.

        Raises
        ------
        ParseCancelledError
            If the cancellation token was triggered
        ParseTimeoutError
            If the paragraph limit or the deadline was exceeded

        """
        if self.cancel_token is not None and self.cancel_token.cancelled:
            raise ParseCancelledError("Parse was cancelled", paragraphs_processed=self.paragraphs_processed)

        if self.max_paragraphs is not None and self.paragraphs_processed >= self.max_paragraphs:
            raise ParseTimeoutError(
                f"Document exceeds the paragraph limit of {self.max_paragraphs}",
                limit=self.max_paragraphs,
                paragraphs_processed=self.paragraphs_processed,
            )

        if self._deadline is not None and time.monotonic() > self._deadline:
            raise ParseTimeoutError(
                f"Parse exceeded its budget of {self.timeout_seconds} seconds",
                limit=self.timeout_seconds,  # type: ignore[arg-type]
                paragraphs_processed=self.paragraphs_processed,
            )

        self.paragraphs_processed += 1
