#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the qbank parser.

Options are frozen dataclasses; use ``create_updated`` (or
:func:`create_updated_options`) to derive a modified copy.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from qbank.options.base import BaseParserOptions, CloneFrozenMixin
from qbank.options.docx import QuestionBankOptions


def create_updated_options(options: Any, **kwargs: Any) -> Any:
    """Create a new options instance with updated values.

    Parameters
    ----------
    options : Any
        The original options instance (must be a dataclass)
    **kwargs
        Fields to update in the new instance

    Returns
    -------
    Any
        New options instance with updated values

    """
    return replace(options, **kwargs)


__all__ = [
    "BaseParserOptions",
    "CloneFrozenMixin",
    "QuestionBankOptions",
    "create_updated_options",
]
