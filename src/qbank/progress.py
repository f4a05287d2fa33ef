#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/progress.py
"""Progress callback system for question bank parsing.

Embedders that parse large banks can follow the pass section by section.

Examples
--------
    >>> from qbank import to_question_bank
    >>> from qbank.progress import ProgressEvent
    >>>
    >>> def on_progress(event: ProgressEvent) -> None:
    ...     print(event)
    >>>
    >>> bank = to_question_bank("bank.docx", progress_callback=on_progress)

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Literal

EventType = Literal["started", "item_done", "finished", "error"]


@dataclass
class ProgressEvent:
    """Progress event emitted during a parse.

    Parameters
    ----------
    event_type : EventType
        - "started": the paragraph pass has begun; ``total`` is the paragraph count
        - "item_done": a section was committed; ``metadata["item_type"]`` is ``"section"``
        - "finished": the pass completed
        - "error": the pass stopped; ``metadata["error"]`` holds the reason
    message : str
        Human-readable description of the event
    current : int, default 0
        Paragraphs processed so far
    total : int, default 0
        Total paragraphs in the body. 0 if unknown.
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: EventType
    message: str
    current: int = 0
    total: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        progress = f"({self.current}/{self.total})" if self.total > 0 else ""
        return f"[{self.event_type.upper()}] {self.message} {progress}".strip()


ProgressCallback = Callable[[ProgressEvent], None]
"""Type alias for progress callback functions.

Callbacks should not raise; an exception raised by a callback is logged and
otherwise ignored.
"""
