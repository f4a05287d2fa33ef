#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for DOCX question bank parsing.

The defaults describe the house conventions of the exported question bank:
Word's built-in heading styles delimit sections, items and sub-fields, the
``Subtitle`` style carries the ``[id]: tag / tag`` metadata line, and
``List Paragraph`` marks list items.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from qbank.constants import (
    DEFAULT_DISAMBIGUATION_PREFIX,
    DEFAULT_HEADING1_STYLE,
    DEFAULT_HEADING2_STYLE,
    DEFAULT_HEADING3_STYLE,
    DEFAULT_LIST_STYLES,
    DEFAULT_MAX_COMPRESSION_RATIO,
    DEFAULT_MAX_UNCOMPRESSED_SIZE,
    DEFAULT_MAX_ZIP_ENTRIES,
    DEFAULT_METADATA_STYLE,
    DEFAULT_TAG_SEPARATOR,
    DEFAULT_TOC_HEADING_TEXT,
)
from qbank.options.base import BaseParserOptions


# src/qbank/options/docx.py
@dataclass(frozen=True)
class QuestionBankOptions(BaseParserOptions):
    """Configuration options for DOCX-to-question-bank conversion.

    Parameters
    ----------
    heading1_style : str, default "Heading1"
        Paragraph style id that opens a section.
    heading2_style : str, default "Heading2"
        Paragraph style id that opens an item.
    heading3_style : str, default "Heading3"
        Paragraph style id that opens a named sub-field.
    metadata_style : str, default "Subtitle"
        Paragraph style id of the ``[id]: tag / tag`` metadata line.
    list_styles : tuple of str, default ("ListParagraph",)
        Paragraph style ids treated as list items.
    toc_heading_text : str, default "Table of Contents"
        Paragraph text that is dropped as a table-of-contents artifact.
    tag_separator : str, default " / "
        Separator between tags on the metadata line.
    disambiguation_prefix : str, default "_"
        Prefix prepended to a duplicate key until it no longer collides.
    max_compression_ratio : float, default 100.0
        Zip-bomb guard applied while unpacking.
    max_uncompressed_size : int, default 256MB
        Maximum total uncompressed size of the package.
    max_zip_entries : int, default 10000
        Maximum number of entries in the package.

    Examples
    --------
        >>> options = QuestionBankOptions(metadata_style="IntenseQuote", max_paragraphs=50_000)

    """

    heading1_style: str = field(
        default=DEFAULT_HEADING1_STYLE, metadata={"help": "Style id of section headings"}
    )
    heading2_style: str = field(default=DEFAULT_HEADING2_STYLE, metadata={"help": "Style id of item headings"})
    heading3_style: str = field(
        default=DEFAULT_HEADING3_STYLE, metadata={"help": "Style id of sub-field headings"}
    )
    metadata_style: str = field(
        default=DEFAULT_METADATA_STYLE, metadata={"help": "Style id of the [id]: tags metadata line"}
    )
    list_styles: tuple[str, ...] = field(
        default=DEFAULT_LIST_STYLES, metadata={"help": "Style ids treated as list items"}
    )
    toc_heading_text: str = field(
        default=DEFAULT_TOC_HEADING_TEXT, metadata={"help": "Table of contents heading text to skip"}
    )
    tag_separator: str = field(default=DEFAULT_TAG_SEPARATOR, metadata={"help": "Separator between tags"})
    disambiguation_prefix: str = field(
        default=DEFAULT_DISAMBIGUATION_PREFIX, metadata={"help": "Prefix used to disambiguate duplicate keys"}
    )
    max_compression_ratio: float = field(
        default=DEFAULT_MAX_COMPRESSION_RATIO,
        metadata={"help": "Maximum allowed zip compression ratio", "type": float},
    )
    max_uncompressed_size: int = field(
        default=DEFAULT_MAX_UNCOMPRESSED_SIZE,
        metadata={"help": "Maximum total uncompressed package size in bytes", "type": int},
    )
    max_zip_entries: int = field(
        default=DEFAULT_MAX_ZIP_ENTRIES, metadata={"help": "Maximum number of package entries", "type": int}
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        super().__post_init__()

        if not self.disambiguation_prefix:
            raise ValueError("disambiguation_prefix must not be empty")
        if not self.tag_separator:
            raise ValueError("tag_separator must not be empty")

        styles = [self.heading1_style, self.heading2_style, self.heading3_style, self.metadata_style]
        if len(set(styles)) != len(styles):
            raise ValueError(f"heading and metadata styles must be distinct, got {styles}")

        if self.max_compression_ratio <= 0:
            raise ValueError(f"max_compression_ratio must be positive, got {self.max_compression_ratio}")
        if self.max_uncompressed_size <= 0:
            raise ValueError(f"max_uncompressed_size must be positive, got {self.max_uncompressed_size}")
        if self.max_zip_entries <= 0:
            raise ValueError(f"max_zip_entries must be positive, got {self.max_zip_entries}")
