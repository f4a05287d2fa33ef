#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/search.py
"""Search and tag filtering over a parsed question bank.

The reader narrows a bank with a free-text query on item keys and a set of
selected tags. Every selected tag must be present on an item for it to
match. Sections are always kept, even when filtering empties them, so the
table of contents stays stable while the reader types.

Examples
--------
    >>> tags = collect_tags(bank)
    >>> narrowed = filter_question_bank(bank, query="murmur", tags=["Cardiology"])
    >>> [key for _, key, _ in iter_items(narrowed)]
    ['Systolic murmur']

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from qbank.ast.nodes import Item, QuestionBank

logger = logging.getLogger(__name__)


def iter_items(bank: QuestionBank) -> Iterator[tuple[str, str, Item]]:
    """Yield ``(section_title, item_key, item)`` in document order."""
    for section_title, items in bank.items():
        for key, item in items.items():
            yield section_title, key, item


def collect_tags(bank: QuestionBank) -> list[str]:
    """Return every tag used in ``bank``, without duplicates, in first-seen order.

    Parameters
    ----------
    bank : QuestionBank
        Parsed bank

    Returns
    -------
    list of str
        Unique tags; section titles come first for each item since they seed
        the tag list

    """
    seen: dict[str, None] = {}
    for _, _, item in iter_items(bank):
        for tag in item.tags or ():
            seen.setdefault(tag, None)
    return list(seen)


def item_matches(key: str, item: Item, query: str = "", tags: Iterable[str] = ()) -> bool:
    """Return True if ``key`` contains ``query`` and ``item`` carries every tag.

    The query match is a case-insensitive substring test against the item key.
    An item without a metadata line carries no tags.
    """
    if query.lower() not in key.lower():
        return False
    item_tags = item.tags or ()
    return all(tag in item_tags for tag in tags)


def filter_question_bank(bank: QuestionBank, query: Optional[str] = None, tags: Iterable[str] = ()) -> QuestionBank:
    """Narrow ``bank`` to the items matching a query and a tag selection.

    Parameters
    ----------
    bank : QuestionBank
        Parsed bank
    query : str, optional
        Case-insensitive substring to look for in item keys
    tags : iterable of str, default empty
        Tags an item must all carry

    Returns
    -------
    QuestionBank
        ``bank`` itself when there is neither a query nor a tag; otherwise a
        new bank with the same sections, each holding only its matching items

    """
    selected = list(tags)
    if not query and not selected:
        return bank

    query = query or ""
    narrowed = {
        section_title: {key: item for key, item in items.items() if item_matches(key, item, query, selected)}
        for section_title, items in bank.items()
    }

    logger.debug(
        "Filter query=%r tags=%r kept %d of %d items",
        query,
        selected,
        sum(len(items) for items in narrowed.values()),
        bank.item_count(),
    )
    return QuestionBank(narrowed)
