#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/ast/nodes.py
"""Node classes for the question bank tree.

This module defines the immutable values produced by a parse. A rendering
layer walks them (directly or through :class:`qbank.ast.visitors.NodeVisitor`),
a search layer matches against item titles and tags, and a progress layer keys
its own store by :attr:`Item.id`.

Node Hierarchy
--------------
Inline content:
    - Run: a span of text sharing one set of bold/italic/underline flags
    - RichText: a tuple of runs

Block-level nodes (the ``Block`` union):
    - Paragraph: a single line of formatted text
    - ListItem: one list entry, optionally followed by nested blocks
    - List: an ordered or bulleted list with a format keyword
    - Sequence: a flat concatenation of sibling blocks

Containers:
    - Item: one question with id, tags, title, content and sub-fields
    - QuestionBank: ordered sections of ordered items

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple, Optional, Union

from qbank.constants import (
    DEFAULT_CONTENT_KEY,
    DEFAULT_LIST_FORMAT,
    ITEM_ID_KEY,
    ITEM_TAGS_KEY,
    ITEM_TITLE_KEY,
    FormatKeyword,
)


class RawQuestionBank(NamedTuple):
    """The two XML parts a question bank is parsed from.

    Parameters
    ----------
    document : str
        Body markup (``word/document.xml``)
    numbering : str
        Numbering definitions markup (``word/numbering.xml``)

    """

    document: str
    numbering: str

    @classmethod
    def empty(cls) -> RawQuestionBank:
        """Return the empty pair used when a package cannot be unpacked."""
        return cls("", "")

    def is_empty(self) -> bool:
        """Return True if the body part is missing."""
        return not self.document


@dataclass(frozen=True)
class Run:
    """Contiguous span of text sharing one set of inline formatting flags.

    Parameters
    ----------
    text : str
        Run text
    bold : bool, default False
    italic : bool, default False
    underline : bool, default False

    """

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False


RichText = tuple[Run, ...]


def plain_text(rich_text: RichText) -> str:
    """Concatenate the text of every run.

    Parameters
    ----------
    rich_text : RichText
        Runs to flatten

    Returns
    -------
    str
        The run texts joined in order

    """
    return "".join(run.text for run in rich_text)


class Node(ABC):
    """Base class for block nodes.

    All block nodes support the visitor pattern for traversal and rendering.

    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@dataclass(frozen=True)
class Paragraph(Node):
    """A single line of formatted text.

    Parameters
    ----------
    text : RichText
        Formatted runs of the paragraph

    """

    text: RichText = ()

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass(frozen=True)
class ListItem(Node):
    """A single list entry.

    Parameters
    ----------
    text : RichText
        Formatted runs of the entry
    children : tuple of Block, default empty
        Nested blocks (typically a deeper List) that follow the entry

    """

    text: RichText = ()
    children: tuple[Block, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass(frozen=True)
class List(Node):
    """A list of blocks sharing one marker style.

    Parameters
    ----------
    format : FormatKeyword, default "decimal"
        Marker style of the list
    items : tuple of Block, default empty
        List entries; usually ListItem nodes, but intermediate levels created
        for a jump in nesting hold nested List nodes directly

    """

    format: FormatKeyword = DEFAULT_LIST_FORMAT
    items: tuple[Block, ...] = ()

    @property
    def ordered(self) -> bool:
        """Return True unless the list is bulleted."""
        return self.format != "bullet"

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass(frozen=True)
class Sequence(Node):
    """A flat ordered concatenation of sibling blocks.

    Parameters
    ----------
    children : tuple of Block, default empty
        Sibling blocks in document order

    """

    children: tuple[Block, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this sequence."""
        return visitor.visit_sequence(self)


Block = Union[Paragraph, ListItem, List, Sequence]


@dataclass(frozen=True)
class Item:
    """One question of the bank.

    Parameters
    ----------
    title : RichText
        The item heading with inline formatting preserved
    id : str or None, default None
        External identifier from the metadata line, used as the progress key
    tags : tuple of str or None, default None
        Section title followed by the metadata line's tags
    content : Block or None, default None
        Content stored under the ``content`` key, collected before the first
        sub-field heading or under an explicit ``content`` heading
    fields : Mapping of str to Block, default empty
        Named sub-fields keyed by their literal heading text, in document order
    content_position : int, default 0
        Number of sub-fields that precede ``content`` in document order

    """

    title: RichText
    id: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    content: Optional[Block] = None
    fields: Mapping[str, Block] = field(default_factory=dict)
    content_position: int = 0

    def __post_init__(self) -> None:
        """Freeze the sub-field mapping."""
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def keys(self) -> list[str]:
        """Return every key addressable on this item.

        Returns
        -------
        list of str
            ``title``, then ``id``/``tags`` when present, then the sub-fields
            with ``content`` at its document position

        """
        keys = [ITEM_TITLE_KEY]
        if self.id is not None:
            keys.append(ITEM_ID_KEY)
        if self.tags is not None:
            keys.append(ITEM_TAGS_KEY)
        field_keys = list(self.fields)
        if self.content is not None:
            field_keys.insert(min(self.content_position, len(field_keys)), DEFAULT_CONTENT_KEY)
        keys.extend(field_keys)
        return keys

    def __contains__(self, key: object) -> bool:
        return key in self.keys()

    def __getitem__(self, key: str) -> Any:
        if key == ITEM_TITLE_KEY:
            return self.title
        if key == ITEM_ID_KEY and self.id is not None:
            return self.id
        if key == ITEM_TAGS_KEY and self.tags is not None:
            return self.tags
        if key == DEFAULT_CONTENT_KEY and self.content is not None:
            return self.content
        return self.fields[key]

    @property
    def plain_title(self) -> str:
        """Return the title without formatting."""
        return plain_text(self.title)


class QuestionBank(Mapping[str, Mapping[str, Item]]):
    """Read-only ordered mapping of section title to ordered items.

    Parameters
    ----------
    sections : Mapping, optional
        Section title -> (item title -> Item). Insertion order is preserved.

    Examples
    --------
        >>> bank = QuestionBank({"General": {"What is X?": Item(title=(Run("What is X?"),))}})
        >>> list(bank["General"])
        ['What is X?']

    """

    __slots__ = ("_sections",)

    def __init__(self, sections: Optional[Mapping[str, Mapping[str, Item]]] = None):
        self._sections: dict[str, Mapping[str, Item]] = {
            title: MappingProxyType(dict(items)) for title, items in (sections or {}).items()
        }

    def __getitem__(self, key: str) -> Mapping[str, Item]:
        return self._sections[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        outline = {title: list(items) for title, items in self._sections.items()}
        return f"QuestionBank({outline!r})"

    def item_count(self) -> int:
        """Return the number of items across all sections."""
        return sum(len(items) for items in self._sections.values())

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing the whole bank."""
        return visitor.visit_question_bank(self)
