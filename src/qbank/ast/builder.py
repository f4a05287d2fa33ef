#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/ast/builder.py
"""Builder for nested content blocks.

:class:`ContentBuilder` is the stack machine that turns a stream of
paragraphs, each tagged with a nesting level and an optional list format,
into one nested :class:`~qbank.ast.nodes.Sequence`. Level 0 holds plain
paragraphs; a list item declared at indent-level ``n`` sits at level ``n + 1``.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from qbank.ast.nodes import Block, List, ListItem, Paragraph, RichText, Sequence
from qbank.constants import DEFAULT_LIST_FORMAT, FormatKeyword

logger = logging.getLogger(__name__)


@dataclass
class _Level:
    """Siblings accumulated at one open nesting level."""

    is_list: bool = False
    format: Optional[FormatKeyword] = None
    blocks: list[Block] = field(default_factory=list)

    def wrap(self) -> Block:
        """Close this level into a single block."""
        if self.is_list:
            return List(format=self.format or DEFAULT_LIST_FORMAT, items=tuple(self.blocks))
        return Sequence(children=tuple(self.blocks))


class ContentBuilder:
    """Stack machine assembling paragraphs into nested blocks.

    The root level (depth 0) is always open; every deeper level sits on the
    stack. A new level inherits the kind and format of its parent until its
    first entry arrives, which lets a jump of more than one nesting level
    produce the intermediate lists.

    Examples
    --------
    >>> builder = ContentBuilder()
    >>> builder.add_list_item((Run("a"),), level=1, format="bullet")
    >>> builder.add_list_item((Run("b"),), level=2, format="bullet")
    >>> builder.add_list_item((Run("c"),), level=1, format="bullet")
    >>> block = builder.flush()

    """

    def __init__(self) -> None:
        self._root = _Level()
        self._stack: list[_Level] = []

    @property
    def depth(self) -> int:
        """Return the number of open levels above the root."""
        return len(self._stack)

    @property
    def is_empty(self) -> bool:
        """Return True if nothing has been added since the last flush."""
        return not self._stack and not self._root.blocks

    def _top(self) -> _Level:
        return self._stack[-1] if self._stack else self._root

    def _push(self) -> None:
        parent = self._top()
        self._stack.append(_Level(is_list=parent.is_list, format=parent.format))

    def _pop(self) -> None:
        level = self._stack.pop()
        if not level.blocks:
            return

        block = level.wrap()
        parent = self._top()
        # A deeper list belongs to the entry it follows
        if parent.blocks and isinstance(parent.blocks[-1], ListItem):
            previous = parent.blocks[-1]
            parent.blocks[-1] = replace(previous, children=previous.children + (block,))
        else:
            parent.blocks.append(block)

    def add_paragraph(self, text: RichText) -> None:
        """Append a plain paragraph at level 0."""
        self._add(Paragraph(text=text), level=0, format=None, is_list=False)

    def add_list_item(self, text: RichText, level: int, format: Optional[FormatKeyword] = None) -> None:
        """Append a list entry.

        Parameters
        ----------
        text : RichText
            Entry text
        level : int
            Nesting level, i.e. the declared indent-level plus one
        format : FormatKeyword or None
            Marker style resolved from the numbering table, if any

        """
        if level < 1:
            logger.debug("Clamping list item level %d to 1", level)
            level = 1
        self._add(ListItem(text=text), level=level, format=format, is_list=True)

    def _add(self, block: Block, level: int, format: Optional[FormatKeyword], is_list: bool) -> None:
        while level > self.depth:
            self._push()

        while level < self.depth:
            self._pop()

        top = self._top()
        # Siblings may not change marker style: close and reopen the level.
        # A level without entries of its own is still taking its parent's format.
        if self._stack and format != top.format and any(isinstance(b, ListItem) for b in top.blocks):
            self._pop()
            self._push()
            top = self._top()

        top.is_list = is_list
        top.format = format
        top.blocks.append(block)

    def flush(self) -> Sequence:
        """Close every open level and return the accumulated content.

        The builder is reset and can be reused for the next sub-field.

        Returns
        -------
        Sequence
            The root block; empty if nothing was added

        """
        while self._stack:
            self._pop()

        result = Sequence(children=tuple(self._root.blocks))
        self._root = _Level()
        return result
