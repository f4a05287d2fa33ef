#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/ast/__init__.py
"""Tree representation of a parsed question bank.

The module consists of several components:

- nodes: immutable values for runs, blocks, items and the bank itself
- visitors: Visitor pattern implementation for block traversal
- serialization: JSON serialization and deserialization of banks
- builder: the stack machine assembling nested list content

Examples
--------
    >>> from qbank.ast import Item, QuestionBank, Run
    >>> bank = QuestionBank({"General": {"Q1": Item(title=(Run("Q1"),))}})
    >>> bank.item_count()
    1

"""

from __future__ import annotations

from qbank.ast.builder import ContentBuilder
from qbank.ast.nodes import (
    Block,
    Item,
    List,
    ListItem,
    Node,
    Paragraph,
    QuestionBank,
    RawQuestionBank,
    RichText,
    Run,
    Sequence,
    plain_text,
)
from qbank.ast.serialization import (
    bank_to_dict,
    bank_to_json,
    block_to_dict,
    dict_to_bank,
    dict_to_block,
    json_to_bank,
)
from qbank.ast.visitors import NodeVisitor, TextCollector, list_depths

__all__ = [
    # Nodes
    "Node",
    "Run",
    "RichText",
    "Paragraph",
    "ListItem",
    "List",
    "Sequence",
    "Block",
    "Item",
    "QuestionBank",
    "RawQuestionBank",
    "plain_text",
    # Builder
    "ContentBuilder",
    # Visitors
    "NodeVisitor",
    "TextCollector",
    "list_depths",
    # Serialization
    "bank_to_dict",
    "bank_to_json",
    "block_to_dict",
    "dict_to_bank",
    "dict_to_block",
    "json_to_bank",
]
