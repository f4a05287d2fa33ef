"""The major exported API functions for question bank conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/qbank/api.py
import asyncio
import logging
from typing import Any, Optional

from qbank.ast.nodes import QuestionBank, RawQuestionBank
from qbank.options.docx import QuestionBankOptions
from qbank.parsers.docx import DocxQuestionBankParser
from qbank.parsers.package import PackageInput, extract_raw_question_bank, extract_raw_question_bank_async
from qbank.progress import ProgressCallback
from qbank.utils.cancellation import CancellationToken

logger = logging.getLogger(__name__)


def _resolve_options(parser_options: Optional[QuestionBankOptions], **kwargs: Any) -> Optional[QuestionBankOptions]:
    """Merge keyword overrides into ``parser_options``."""
    if kwargs and parser_options:
        return parser_options.create_updated(**kwargs)
    if kwargs:
        return QuestionBankOptions(**kwargs)
    return parser_options


def blob_to_raw_question_bank(
    source: PackageInput, *, parser_options: Optional[QuestionBankOptions] = None
) -> RawQuestionBank:
    """Extract the ``(document, numbering)`` pair from a DOCX package.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Package bytes, a binary stream or a path to a ``.docx`` file
    parser_options : QuestionBankOptions, optional
        Supplies the zip-safety limits

    Returns
    -------
    RawQuestionBank
        The extracted pair. A package that cannot be read yields ``("", "")``.

    Examples
    --------
        >>> raw = blob_to_raw_question_bank("bank.docx")
        >>> raw.document.startswith("<?xml")
        True

    """
    return extract_raw_question_bank(source, parser_options)


async def blob_to_raw_question_bank_async(
    source: PackageInput, *, parser_options: Optional[QuestionBankOptions] = None
) -> RawQuestionBank:
    """Asynchronous variant of :func:`blob_to_raw_question_bank`."""
    return await extract_raw_question_bank_async(source, parser_options)


def parse_question_bank(
    raw: RawQuestionBank,
    *,
    parser_options: Optional[QuestionBankOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> QuestionBank:
    """Parse an extracted pair into a question bank.

    Parameters
    ----------
    raw : RawQuestionBank
        Body and numbering markup
    parser_options : QuestionBankOptions, optional
        Style conventions and budgets
    progress_callback : ProgressCallback, optional
        Receives progress events while the body is consumed
    cancel_token : CancellationToken, optional
        Token checked between paragraphs
    kwargs : Any
        Individual options that override settings in parser_options

    Returns
    -------
    QuestionBank
        Parsed bank; empty for an empty or malformed body

    Raises
    ------
    ParseCancelledError
        If ``cancel_token`` was triggered
    ParseTimeoutError
        If a paragraph or wall-clock budget was exhausted
    InvalidOptionsError
        If ``parser_options`` is not a QuestionBankOptions

    """
    options = _resolve_options(parser_options, **kwargs)
    parser = DocxQuestionBankParser(options=options, progress_callback=progress_callback)
    return parser.parse(raw, cancel_token=cancel_token)


def to_question_bank(
    source: PackageInput,
    *,
    parser_options: Optional[QuestionBankOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> QuestionBank:
    """Convert a DOCX package straight to a question bank.

    Parameters are those of :func:`blob_to_raw_question_bank` and
    :func:`parse_question_bank`.

    Examples
    --------
        >>> bank = to_question_bank("bank.docx", max_paragraphs=50_000)
        >>> for section, items in bank.items():
        ...     print(section, len(items))

    """
    options = _resolve_options(parser_options, **kwargs)
    raw = blob_to_raw_question_bank(source, parser_options=options)
    if raw.is_empty():
        logger.info("Package produced no body markup; returning an empty question bank")
    return parse_question_bank(
        raw, parser_options=options, progress_callback=progress_callback, cancel_token=cancel_token
    )


async def to_question_bank_async(
    source: PackageInput,
    *,
    parser_options: Optional[QuestionBankOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> QuestionBank:
    """Asynchronous variant of :func:`to_question_bank`.

    Unpacking and parsing run in a worker thread. Cancelling the awaiting task
    does not stop that thread; pass ``cancel_token`` and cancel it as well.
    """
    return await asyncio.to_thread(
        to_question_bank,
        source,
        parser_options=parser_options,
        progress_callback=progress_callback,
        cancel_token=cancel_token,
        **kwargs,
    )
