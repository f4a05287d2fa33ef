#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/docx.py
"""DOCX question bank parser.

This module turns the body and numbering markup of an exported question bank
into a :class:`~qbank.ast.nodes.QuestionBank`. Paragraphs are consumed in
document order by a small state machine:

- a level-1 heading opens a section
- a level-2 heading opens an item in the current section
- the metadata line fills the current item's id and tags
- a level-3 heading opens a named sub-field of the current item
- any other paragraph is content of the current sub-field; content seen
  before the first sub-field heading goes to the implicit ``content`` key

Closing a heading closes everything beneath it, and the end of the document
closes everything that is still open.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional
from xml.etree.ElementTree import Element

from qbank.ast.builder import ContentBuilder
from qbank.ast.nodes import Block, Item, QuestionBank, RawQuestionBank, RichText
from qbank.constants import (
    DEFAULT_CONTENT_KEY,
    DOCUMENT_PART_NAME,
    ITEM_ID_KEY,
    ITEM_TAGS_KEY,
    ITEM_TITLE_KEY,
    W_PARAGRAPH,
)
from qbank.exceptions import ParsingError
from qbank.options.docx import QuestionBankOptions
from qbank.parsers.base import BaseParser
from qbank.parsers.classifier import ParagraphInfo, ParagraphRole, classify_paragraph
from qbank.parsers.metadata import extract_metadata
from qbank.parsers.numbering import NumberingTable, resolve_numbering_formats
from qbank.parsers.package import strip_byte_order_mark
from qbank.parsers.runs import format_runs
from qbank.progress import ProgressCallback
from qbank.utils.cancellation import CancellationToken, ParseBudget
from qbank.utils.xml_utils import parse_part

logger = logging.getLogger(__name__)


def disambiguate(key: str, taken: object, prefix: str) -> str:
    """Prepend ``prefix`` to ``key`` until it is not contained in ``taken``.

    Examples
    --------
    >>> disambiguate("Q1", {"Q1", "_Q1"}, "_")
    '__Q1'

    """
    while key in taken:  # type: ignore[operator]
        key = prefix + key
    return key


@dataclass
class _ItemDraft:
    """Mutable item under construction.

    ``fields`` holds every stored block in document order, ``content``
    included, until :meth:`to_item` splits it out.
    """

    title: RichText
    id: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    fields: dict[str, Block] = field(default_factory=dict)

    def __contains__(self, key: object) -> bool:
        if key == ITEM_TITLE_KEY:
            return True
        if key == ITEM_ID_KEY and self.id is not None:
            return True
        if key == ITEM_TAGS_KEY and self.tags is not None:
            return True
        return key in self.fields

    def store(self, key: str, block: Block) -> None:
        # Last write wins when a sub-field and the metadata line share a key
        if key == ITEM_ID_KEY:
            self.id = None
        elif key == ITEM_TAGS_KEY:
            self.tags = None
        self.fields[key] = block

    def to_item(self) -> Item:
        names = list(self.fields)
        fields = dict(self.fields)
        content = fields.pop(DEFAULT_CONTENT_KEY, None)
        position = names.index(DEFAULT_CONTENT_KEY) if content is not None else 0
        return Item(
            title=self.title,
            id=self.id,
            tags=self.tags,
            content=content,
            fields=fields,
            content_position=position,
        )


@dataclass
class _ParseState:
    """Everything one parse mutates; discarded when the parse returns."""

    sections: dict[str, dict[str, _ItemDraft]] = field(default_factory=dict)
    heading1: Optional[str] = None
    heading2: Optional[str] = None
    heading3: Optional[str] = None
    previous_role: Optional[ParagraphRole] = None
    builder: ContentBuilder = field(default_factory=ContentBuilder)

    @property
    def current_item(self) -> Optional[_ItemDraft]:
        if self.heading1 is None or self.heading2 is None:
            return None
        return self.sections[self.heading1][self.heading2]

    def to_question_bank(self) -> QuestionBank:
        return QuestionBank(
            {
                title: {key: draft.to_item() for key, draft in items.items()}
                for title, items in self.sections.items()
            }
        )


class DocxQuestionBankParser(BaseParser):
    """Parse WordprocessingML markup into a question bank.

    Parameters
    ----------
    options : QuestionBankOptions or None, default = None
        Style conventions and budgets
    progress_callback : ProgressCallback or None, default = None
        Receives ``started``, ``item_done`` (one per section), ``finished``
        and ``error`` events

    Examples
    --------
        >>> parser = DocxQuestionBankParser()
        >>> bank = parser.parse(extract_raw_question_bank("bank.docx"))
        >>> list(bank)
        ['Cardiology', 'Neurology']

    """

    def __init__(self, options: QuestionBankOptions | None = None, progress_callback: ProgressCallback | None = None):
        BaseParser._validate_options_type(options, QuestionBankOptions, "docx")
        options = options or QuestionBankOptions()
        super().__init__(options, progress_callback)
        self.options: QuestionBankOptions = options

    def parse(self, raw: RawQuestionBank, cancel_token: Optional[CancellationToken] = None) -> QuestionBank:
        """Parse an extracted ``(document, numbering)`` pair.

        Parameters
        ----------
        raw : RawQuestionBank
            Body and numbering markup
        cancel_token : CancellationToken, optional
            Token checked between paragraphs

        Returns
        -------
        QuestionBank
            Sections in document order. Empty when the body is missing or
            not well-formed XML.

        Raises
        ------
        ParseCancelledError
            If ``cancel_token`` was triggered
        ParseTimeoutError
            If ``max_paragraphs`` or ``timeout_seconds`` was exceeded

        """
        root = parse_part(strip_byte_order_mark(raw.document or ""), DOCUMENT_PART_NAME)
        if root is None:
            logger.debug("Question bank body is empty or malformed; returning an empty bank")
            return QuestionBank()

        numbering = resolve_numbering_formats(raw.numbering or "")
        paragraphs = list(root.iter(W_PARAGRAPH))
        total = len(paragraphs)

        budget = ParseBudget(
            max_paragraphs=self.options.max_paragraphs,
            timeout_seconds=self.options.timeout_seconds,
            cancel_token=cancel_token,
        )
        state = _ParseState()

        self._emit_progress("started", "Parsing question bank", current=0, total=total)

        try:
            for paragraph in paragraphs:
                budget.check()
                self._process_paragraph(paragraph, state, numbering, budget, total)
        except ParsingError as e:
            self._emit_progress(
                "error", e.message, current=budget.paragraphs_processed, total=total, error=e.message
            )
            raise

        self._finalize_heading1(state, budget, total)

        bank = state.to_question_bank()
        logger.debug("Parsed %d sections with %d items", len(bank), bank.item_count())
        self._emit_progress("finished", "Question bank parsed", current=total, total=total)
        return bank

    def _process_paragraph(
        self, paragraph: Element, state: _ParseState, numbering: NumberingTable, budget: ParseBudget, total: int
    ) -> None:
        info = classify_paragraph(paragraph, format_runs(paragraph), self.options)
        if info is None:
            return

        if info.role is ParagraphRole.METADATA:
            self._apply_metadata(info, state)
        elif info.role is ParagraphRole.HEADING1:
            self._open_section(info, state, budget, total)
        elif info.role is ParagraphRole.HEADING2:
            self._open_item(info, state)
        elif info.role is ParagraphRole.HEADING3:
            self._open_field(info.text, state)
        else:
            self._add_content(info, state, numbering)

        state.previous_role = info.role

    def _open_section(self, info: ParagraphInfo, state: _ParseState, budget: ParseBudget, total: int) -> None:
        self._finalize_heading1(state, budget, total)

        title = disambiguate(info.text, state.sections, self.options.disambiguation_prefix)
        state.heading1 = title
        state.sections[title] = {}

    def _open_item(self, info: ParagraphInfo, state: _ParseState) -> None:
        if state.heading1 is None:
            logger.debug("Ignoring item heading %r outside any section", info.text)
            return

        if state.previous_role is not ParagraphRole.HEADING1:
            self._finalize_heading3(state)

        items = state.sections[state.heading1]
        key = disambiguate(info.text, items, self.options.disambiguation_prefix)
        state.heading2 = key
        items[key] = _ItemDraft(title=info.rich_text)

    def _open_field(self, text: str, state: _ParseState) -> None:
        item = state.current_item
        if item is None:
            logger.debug("Ignoring sub-field heading %r outside any item", text)
            return

        if state.previous_role not in (ParagraphRole.HEADING1, ParagraphRole.HEADING2):
            self._finalize_heading3(state)

        state.heading3 = disambiguate(text, item, self.options.disambiguation_prefix)

    def _apply_metadata(self, info: ParagraphInfo, state: _ParseState) -> None:
        item = state.current_item
        if item is None or state.heading1 is None:
            logger.debug("Ignoring metadata line %r outside any item", info.text)
            return

        metadata = extract_metadata(info.text, state.heading1, self.options.tag_separator)
        if metadata is None:
            logger.debug("Metadata line %r has no [id] prefix", info.text)
            return

        # The metadata values replace sub-fields that happen to share their keys
        for key in (ITEM_ID_KEY, ITEM_TAGS_KEY):
            if item.fields.pop(key, None) is not None:
                logger.debug("Metadata replaced sub-field %r of item %r", key, state.heading2)

        item.id = metadata.id
        item.tags = metadata.tags

    def _add_content(self, info: ParagraphInfo, state: _ParseState, numbering: NumberingTable) -> None:
        if state.heading3 is None:
            self._open_field(DEFAULT_CONTENT_KEY, state)
        if state.heading3 is None:
            logger.debug("Dropping content %r outside any item", info.text)
            return

        if info.role is ParagraphRole.LIST_ITEM:
            list_format = None
            if info.ilvl and info.num_id:
                list_format = numbering.get(info.num_id, {}).get(info.ilvl)
            state.builder.add_list_item(info.rich_text, level=info.level, format=list_format)
        else:
            state.builder.add_paragraph(info.rich_text)

    def _finalize_heading3(self, state: _ParseState) -> None:
        block = state.builder.flush()
        item = state.current_item
        if item is not None and state.heading3 is not None:
            item.store(state.heading3, block)
        state.heading3 = None

    def _finalize_heading2(self, state: _ParseState) -> None:
        self._finalize_heading3(state)
        state.heading2 = None

    def _finalize_heading1(self, state: _ParseState, budget: ParseBudget, total: int) -> None:
        self._finalize_heading2(state)
        if state.heading1 is not None:
            self._emit_progress(
                "item_done",
                f"Section {state.heading1}",
                current=budget.paragraphs_processed,
                total=total,
                item_type="section",
                section=state.heading1,
                items=len(state.sections[state.heading1]),
            )
        state.heading1 = None
