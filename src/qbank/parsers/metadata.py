#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/metadata.py
"""Item metadata extraction.

The line following an item heading may carry the item's identifier and its
tags in the form ``[42]: Arrhythmia / ECG``. The identifier is the progress
key of the item; the tags feed the tag filter, seeded with the section title.

"""

from __future__ import annotations

import re
from typing import NamedTuple, Optional

from qbank.constants import DEFAULT_TAG_SEPARATOR

ID_PATTERN = re.compile(r"^\[([^\[\]]+)\]")

# Characters around the identifier that precede the tags: "[", "]", ":", " "
_PREFIX_PADDING = len("[]: ")


class ItemMetadata(NamedTuple):
    """Identifier and tags parsed from a metadata line."""

    id: str
    tags: tuple[str, ...]


def extract_metadata(
    text: str, section_title: str, separator: str = DEFAULT_TAG_SEPARATOR
) -> Optional[ItemMetadata]:
    """Parse an ``[id]: tag / tag`` metadata line.

    Parameters
    ----------
    text : str
        Plain text of the metadata paragraph
    section_title : str
        Title of the enclosing section, always the first tag
    separator : str, default " / "
        Separator between tags

    Returns
    -------
    ItemMetadata or None
        None if the line does not start with a bracketed identifier

    Examples
    --------
    >>> extract_metadata("[42]: Arrhythmia / ECG", "Cardiology")
    ItemMetadata(id='42', tags=('Cardiology', 'Arrhythmia', 'ECG'))

    """
    match = ID_PATTERN.match(text)
    if not match:
        return None

    item_id = match.group(1)
    tags = [section_title]
    for tag in text[len(item_id) + _PREFIX_PADDING :].split(separator):
        if tag and tag not in tags:
            tags.append(tag)

    return ItemMetadata(id=item_id, tags=tuple(tags))
