#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/package.py
"""Container unpacking for exported question bank documents.

A question bank travels as a DOCX package. Only two parts matter: the body
(``word/document.xml``) and the numbering definitions
(``word/numbering.xml``). This module extracts them as text, and converts
between the extracted pair and the JSON array the content service stores
(``[document, numbering]``).

Unpacking never raises for bad input: a corrupt or encrypted archive, a
missing body part or an undecodable part all degrade to the empty pair,
which parses to an empty question bank.

"""

from __future__ import annotations

import asyncio
import io
import json
import logging
import zipfile
import zlib
from pathlib import Path
from typing import IO, Optional, Union

from qbank.ast.nodes import RawQuestionBank
from qbank.constants import BYTE_ORDER_MARK, DOCUMENT_PART_NAME, NUMBERING_PART_NAME
from qbank.exceptions import MalformedFileError, ZipFileSecurityError
from qbank.options.docx import QuestionBankOptions
from qbank.utils.security import validate_zip_archive

logger = logging.getLogger(__name__)

PackageInput = Union[str, Path, IO[bytes], bytes, bytearray]


def strip_byte_order_mark(text: str) -> str:
    """Remove a single leading U+FEFF from ``text``."""
    if text.startswith(BYTE_ORDER_MARK):
        return text[len(BYTE_ORDER_MARK) :]
    return text


def _open_package(blob: PackageInput) -> zipfile.ZipFile:
    if isinstance(blob, (bytes, bytearray)):
        return zipfile.ZipFile(io.BytesIO(bytes(blob)))
    if isinstance(blob, (str, Path)):
        return zipfile.ZipFile(Path(blob))
    return zipfile.ZipFile(blob)


def _read_part(archive: zipfile.ZipFile, name: str) -> str:
    try:
        data = archive.read(name)
    except KeyError as e:
        raise MalformedFileError(f"Package has no part named {name}", original_error=e) from e
    return data.decode("utf-8")


def extract_raw_question_bank(
    blob: PackageInput, options: Optional[QuestionBankOptions] = None
) -> RawQuestionBank:
    """Extract the body and numbering markup from a DOCX package.

    Parameters
    ----------
    blob : bytes, IO[bytes], str or Path
        The package bytes, a binary stream, or a path to a ``.docx`` file
    options : QuestionBankOptions, optional
        Supplies the zip-safety limits

    Returns
    -------
    RawQuestionBank
        ``(document, numbering)``, with any byte-order mark stripped from the
        body. A package without numbering definitions yields an empty
        numbering string; any other failure yields the empty pair

    """
    options = options or QuestionBankOptions()

    try:
        with _open_package(blob) as archive:
            validate_zip_archive(
                archive,
                max_compression_ratio=options.max_compression_ratio,
                max_uncompressed_size=options.max_uncompressed_size,
                max_entries=options.max_zip_entries,
            )
            document = _read_part(archive, DOCUMENT_PART_NAME)
            if NUMBERING_PART_NAME in archive.namelist():
                numbering = _read_part(archive, NUMBERING_PART_NAME)
            else:
                logger.debug("Package has no numbering part; lists will use the default format")
                numbering = ""
    except (
        zipfile.BadZipFile,
        zlib.error,
        EOFError,
        OSError,
        RuntimeError,
        NotImplementedError,
        UnicodeDecodeError,
        MalformedFileError,
        ZipFileSecurityError,
    ) as e:
        logger.warning("Could not unpack question bank package: %s", e)
        return RawQuestionBank.empty()

    return RawQuestionBank(strip_byte_order_mark(document), numbering)


async def extract_raw_question_bank_async(
    blob: PackageInput, options: Optional[QuestionBankOptions] = None
) -> RawQuestionBank:
    """Asynchronous variant of :func:`extract_raw_question_bank`.

    Decompression runs in a worker thread so the event loop stays responsive.
    """
    return await asyncio.to_thread(extract_raw_question_bank, blob, options)


def raw_to_json(raw: RawQuestionBank) -> str:
    """Serialize a raw pair as the ``[document, numbering]`` JSON array."""
    return json.dumps([raw.document, raw.numbering])


def raw_from_json(payload: Union[str, bytes]) -> RawQuestionBank:
    """Parse the ``[document, numbering]`` JSON array.

    Parameters
    ----------
    payload : str or bytes
        JSON text

    Returns
    -------
    RawQuestionBank
        The decoded pair, with any byte-order mark stripped from the body

    Raises
    ------
    MalformedFileError
        If the payload is not a JSON array of two strings

    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedFileError(f"Raw question bank is not valid JSON: {e}", original_error=e) from e

    if not isinstance(data, list) or len(data) != 2 or not all(isinstance(part, str) for part in data):
        raise MalformedFileError("Raw question bank must be a JSON array of two strings")

    return RawQuestionBank(strip_byte_order_mark(data[0]), data[1])
