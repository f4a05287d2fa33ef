#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/ast/serialization.py
"""JSON serialization and deserialization for question banks.

A parsed bank is handed to rendering and storage layers that may live in
another process. The JSON form preserves section order, item order, sub-field
order, inline formatting and list formats, so a bank read back compares equal
to the bank that was written.

Examples
--------
Serialize a bank to JSON:

    >>> from qbank.ast.serialization import bank_to_json, json_to_bank
    >>> json_str = bank_to_json(bank, indent=2)

Deserialize it again:

    >>> json_to_bank(json_str) == bank
    True

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

from qbank.ast.nodes import Block, Item, List, ListItem, Paragraph, QuestionBank, RichText, Run, Sequence

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _serialize_rich_text(text: RichText) -> list[dict[str, Any]]:
    return [
        {"node_type": "Run", "text": run.text, "bold": run.bold, "italic": run.italic, "underline": run.underline}
        for run in text
    ]


def _serialize_paragraph(node: Paragraph) -> dict[str, Any]:
    return {"node_type": "Paragraph", "text": _serialize_rich_text(node.text)}


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    return {
        "node_type": "ListItem",
        "text": _serialize_rich_text(node.text),
        "children": [block_to_dict(child) for child in node.children],
    }


def _serialize_list(node: List) -> dict[str, Any]:
    return {
        "node_type": "List",
        "format": node.format,
        "ordered": node.ordered,
        "items": [block_to_dict(child) for child in node.items],
    }


def _serialize_sequence(node: Sequence) -> dict[str, Any]:
    return {"node_type": "Sequence", "children": [block_to_dict(child) for child in node.children]}


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Paragraph: _serialize_paragraph,
    ListItem: _serialize_list_item,
    List: _serialize_list,
    Sequence: _serialize_sequence,
}


def block_to_dict(node: Block) -> dict[str, Any]:
    """Convert a block node to a dictionary representation.

    Raises
    ------
    ValueError
        If ``node`` is not a known block type

    Examples
    --------
    >>> block_to_dict(Paragraph(text=(Run("Hello"),)))
    {'node_type': 'Paragraph', 'text': [{'node_type': 'Run', 'text': 'Hello', 'bold': False, 'italic': False, 'underline': False}]}

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def item_to_dict(item: Item) -> dict[str, Any]:
    """Convert an item to a dictionary representation."""
    return {
        "node_type": "Item",
        "title": _serialize_rich_text(item.title),
        "id": item.id,
        "tags": list(item.tags) if item.tags is not None else None,
        "content": block_to_dict(item.content) if item.content is not None else None,
        "fields": {name: block_to_dict(block) for name, block in item.fields.items()},
        "content_position": item.content_position,
    }


def bank_to_dict(bank: QuestionBank) -> dict[str, Any]:
    """Convert a question bank to a dictionary representation.

    Parameters
    ----------
    bank : QuestionBank
        The bank to convert

    Returns
    -------
    dict
        ``{"node_type": "QuestionBank", "sections": {title: {key: item}}}``

    """
    return {
        "node_type": "QuestionBank",
        "sections": {
            title: {key: item_to_dict(item) for key, item in items.items()} for title, items in bank.items()
        },
    }


def _deserialize_rich_text(data: list[dict[str, Any]]) -> RichText:
    return tuple(
        Run(
            text=run["text"],
            bold=run.get("bold", False),
            italic=run.get("italic", False),
            underline=run.get("underline", False),
        )
        for run in data
    )


def _deserialize_blocks(data: list[dict[str, Any]], strict_mode: bool) -> tuple[Block, ...]:
    blocks = (dict_to_block(child, strict_mode=strict_mode) for child in data)
    return tuple(block for block in blocks if block is not None)


def _deserialize_paragraph(data: dict[str, Any], strict_mode: bool) -> Paragraph:
    return Paragraph(text=_deserialize_rich_text(data.get("text", [])))


def _deserialize_list_item(data: dict[str, Any], strict_mode: bool) -> ListItem:
    return ListItem(
        text=_deserialize_rich_text(data.get("text", [])),
        children=_deserialize_blocks(data.get("children", []), strict_mode),
    )


def _deserialize_list(data: dict[str, Any], strict_mode: bool) -> List:
    return List(format=data["format"], items=_deserialize_blocks(data.get("items", []), strict_mode))


def _deserialize_sequence(data: dict[str, Any], strict_mode: bool) -> Sequence:
    return Sequence(children=_deserialize_blocks(data.get("children", []), strict_mode))


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any], bool], Block]] = {
    "Paragraph": _deserialize_paragraph,
    "ListItem": _deserialize_list_item,
    "List": _deserialize_list,
    "Sequence": _deserialize_sequence,
}


def dict_to_block(data: dict[str, Any], strict_mode: bool = True) -> Optional[Block]:
    """Convert a dictionary representation back to a block node.

    Parameters
    ----------
    data : dict
        Dictionary representation of a block
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types.
        If False, log a warning and return None so the block is skipped.

    Raises
    ------
    ValueError
        If the dictionary has no known ``node_type`` and strict_mode is True

    """
    node_type = data.get("node_type")
    deserializer = _DESERIALIZATION_DISPATCH.get(node_type or "")
    if not deserializer:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type}")
        logger.warning(f"Unknown node type '{node_type}', skipping")
        return None

    return deserializer(data, strict_mode)


def dict_to_item(data: dict[str, Any], strict_mode: bool = True) -> Item:
    """Convert a dictionary representation back to an item."""
    content = data.get("content")
    fields = {}
    for name, block_data in data.get("fields", {}).items():
        block = dict_to_block(block_data, strict_mode=strict_mode)
        if block is not None:
            fields[name] = block

    tags = data.get("tags")
    return Item(
        title=_deserialize_rich_text(data.get("title", [])),
        id=data.get("id"),
        tags=tuple(tags) if tags is not None else None,
        content=dict_to_block(content, strict_mode=strict_mode) if content is not None else None,
        fields=fields,
        content_position=data.get("content_position", 0),
    )


def dict_to_bank(data: dict[str, Any], strict_mode: bool = True) -> QuestionBank:
    """Convert a dictionary representation back to a question bank.

    Raises
    ------
    ValueError
        If ``data`` is not a QuestionBank dictionary

    """
    if data.get("node_type") != "QuestionBank":
        raise ValueError(f"Expected node_type 'QuestionBank', got {data.get('node_type')!r}")

    return QuestionBank(
        {
            title: {key: dict_to_item(item, strict_mode=strict_mode) for key, item in items.items()}
            for title, items in data.get("sections", {}).items()
        }
    )


def bank_to_json(bank: QuestionBank, indent: int | None = None) -> str:
    """Serialize a question bank to a JSON string with schema versioning.

    Parameters
    ----------
    bank : QuestionBank
        The bank to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        ``{"schema_version": 1, "node_type": "QuestionBank", ...}``

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **bank_to_dict(bank)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_bank(json_str: str, validate_schema: bool = True, strict_mode: bool = True) -> QuestionBank:
    """Deserialize a JSON string to a question bank.

    Parameters
    ----------
    json_str : str
        JSON produced by :func:`bank_to_json`
    validate_schema : bool, default True
        If True, reject schema versions other than the supported one.
        JSON without a schema_version is read as version 1.
    strict_mode : bool, default True
        If True, raise ValueError on unknown node types

    Raises
    ------
    ValueError
        If the JSON has an unsupported schema version or unknown node types
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    schema_version = data.pop("schema_version", SCHEMA_VERSION)

    if validate_schema:
        if not isinstance(schema_version, int):
            raise ValueError(f"Schema version must be an integer, got {type(schema_version).__name__}")
        if schema_version != SCHEMA_VERSION:
            raise ValueError(
                f"Unsupported schema version: {schema_version}. "
                f"This version of qbank supports schema version {SCHEMA_VERSION} only."
            )

    return dict_to_bank(data, strict_mode=strict_mode)
