#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/ast/visitors.py
"""Visitor pattern implementation for question bank traversal.

Rendering and search layers walk a parsed bank through these visitors
instead of probing node attributes.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from qbank.ast.nodes import List, ListItem, Paragraph, QuestionBank, Sequence, plain_text


class NodeVisitor(ABC):
    """Abstract base class for block node visitors.

    Examples
    --------
    Count paragraphs in a block:

        >>> class ParagraphCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_paragraph(self, node):
        ...         self.count += 1
        ...     def visit_list_item(self, node):
        ...         self.visit_children(node.children)
        ...     def visit_list(self, node):
        ...         self.visit_children(node.items)
        ...     def visit_sequence(self, node):
        ...         self.visit_children(node.children)

    """

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_sequence(self, node: Sequence) -> Any:
        """Visit a Sequence node."""
        pass

    def visit_question_bank(self, bank: QuestionBank) -> Any:
        """Visit every block of every item in document order."""
        for items in bank.values():
            for item in items.values():
                for key in item.keys():
                    value = item[key]
                    if isinstance(value, (Paragraph, ListItem, List, Sequence)):
                        value.accept(self)

    def visit_children(self, children: tuple[Any, ...]) -> None:
        """Visit each child block in order."""
        for child in children:
            child.accept(self)


class TextCollector(NodeVisitor):
    """Collect the plain text of every paragraph and list entry.

    Examples
    --------
        >>> collector = TextCollector()
        >>> item.fields["Answer"].accept(collector)
        >>> collector.get_text()
        'It is Y.'

    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def visit_paragraph(self, node: Paragraph) -> None:
        self.lines.append(plain_text(node.text))

    def visit_list_item(self, node: ListItem) -> None:
        self.lines.append(plain_text(node.text))
        self.visit_children(node.children)

    def visit_list(self, node: List) -> None:
        self.visit_children(node.items)

    def visit_sequence(self, node: Sequence) -> None:
        self.visit_children(node.children)

    def get_text(self, separator: str = "\n") -> str:
        """Return the collected lines joined by ``separator``."""
        return separator.join(self.lines)


def list_depths(block: Any) -> list[tuple[str, int]]:
    """Return each list entry's text with the number of enclosing lists.

    Parameters
    ----------
    block : Block
        Root block to inspect

    Returns
    -------
    list of (str, int)
        One pair per ListItem in document order

    """

    class _DepthVisitor(NodeVisitor):
        def __init__(self) -> None:
            self.depth = 0
            self.result: list[tuple[str, int]] = []

        def visit_paragraph(self, node: Paragraph) -> None:
            pass

        def visit_list_item(self, node: ListItem) -> None:
            self.result.append((plain_text(node.text), self.depth))
            self.visit_children(node.children)

        def visit_list(self, node: List) -> None:
            self.depth += 1
            self.visit_children(node.items)
            self.depth -= 1

        def visit_sequence(self, node: Sequence) -> None:
            self.visit_children(node.children)

    visitor = _DepthVisitor()
    block.accept(visitor)
    return visitor.result
