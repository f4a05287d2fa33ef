"""Base classes for parser options.

This module defines the foundation classes shared by the qbank parser
options.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from qbank.constants import DEFAULT_MAX_PARAGRAPHS, DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Base class for parser options.

    Parameters
    ----------
    max_paragraphs : int or None
        Hard limit on the number of body paragraphs a single parse may consume.
        None disables the limit.
    timeout_seconds : float or None
        Wall-clock budget for a single parse, checked between paragraphs.
        None disables the budget.

    """

    max_paragraphs: int | None = field(
        default=DEFAULT_MAX_PARAGRAPHS,
        metadata={"help": "Maximum number of paragraphs to process (None = unlimited)", "type": int},
    )
    timeout_seconds: float | None = field(
        default=DEFAULT_TIMEOUT_SECONDS,
        metadata={"help": "Wall-clock budget in seconds for one parse (None = unlimited)", "type": float},
    )

    def __post_init__(self) -> None:
        """Validate budget values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_paragraphs is not None and self.max_paragraphs <= 0:
            raise ValueError(f"max_paragraphs must be positive, got {self.max_paragraphs}")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
