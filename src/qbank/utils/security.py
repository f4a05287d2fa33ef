#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/utils/security.py
"""Security checks for uploaded document packages."""

from __future__ import annotations

import logging
import zipfile
from pathlib import PurePosixPath

from qbank.constants import DEFAULT_MAX_COMPRESSION_RATIO, DEFAULT_MAX_UNCOMPRESSED_SIZE, DEFAULT_MAX_ZIP_ENTRIES
from qbank.exceptions import ZipFileSecurityError

logger = logging.getLogger(__name__)


def validate_zip_archive(
    archive: zipfile.ZipFile,
    max_compression_ratio: float = DEFAULT_MAX_COMPRESSION_RATIO,
    max_uncompressed_size: int = DEFAULT_MAX_UNCOMPRESSED_SIZE,
    max_entries: int = DEFAULT_MAX_ZIP_ENTRIES,
) -> None:
    """Validate an opened ZIP archive before any part is decompressed.

    Parameters
    ----------
    archive : zipfile.ZipFile
        The opened package
    max_compression_ratio : float, default 100.0
        Maximum allowed compression ratio (uncompressed/compressed)
    max_uncompressed_size : int
        Maximum total uncompressed size in bytes
    max_entries : int, default 10000
        Maximum number of entries in the archive

    Raises
    ------
    ZipFileSecurityError
        If the archive fails security validation

    Examples
    --------
    >>> with zipfile.ZipFile("bank.docx") as zf:
    ...     validate_zip_archive(zf)

    """
    entries = archive.infolist()

    if len(entries) > max_entries:
        raise ZipFileSecurityError(f"ZIP archive contains too many entries: {len(entries)} > {max_entries}")

    total_uncompressed = 0
    total_compressed = 0

    for entry in entries:
        name_norm = entry.filename.replace("\\", "/")

        if ":" in name_norm and len(name_norm) >= 2 and name_norm[1] == ":":
            raise ZipFileSecurityError(f"ZIP archive contains Windows absolute path: {entry.filename}")

        if any(part == ".." for part in PurePosixPath(name_norm).parts) or name_norm.startswith("/"):
            raise ZipFileSecurityError(f"ZIP archive contains suspicious path: {entry.filename}")

        total_uncompressed += entry.file_size
        total_compressed += entry.compress_size

        if total_uncompressed > max_uncompressed_size:
            raise ZipFileSecurityError(
                f"ZIP archive uncompressed size too large: "
                f"{total_uncompressed / (1024 * 1024):.1f}MB > "
                f"{max_uncompressed_size / (1024 * 1024):.1f}MB"
            )

    if total_compressed > 0:
        compression_ratio = total_uncompressed / total_compressed
        if compression_ratio > max_compression_ratio:
            raise ZipFileSecurityError(f"ZIP archive has suspicious compression ratio: {compression_ratio:.1f}:1")

    logger.debug("ZIP archive passed validation: %d entries, %d bytes uncompressed", len(entries), total_uncompressed)
