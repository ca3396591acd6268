"""
FileReader: loads file text with BOM-based encoding detection.

Failures are returned as `FileError` values rather than raised, so one bad
file never stops a run.
"""

from __future__ import annotations

import codecs
import logging
from typing import Protocol

from repoquill.models import FileContent, FileEntry, FileError

logger = logging.getLogger(__name__)

# Longer BOMs first: the UTF-32 LE BOM starts with the UTF-16 LE BOM.
_BOMS: list[tuple[bytes, str]] = [
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
]

FALLBACK_ENCODING = "latin-1"


class ContentLoader(Protocol):
    def load(self, entry: FileEntry) -> FileContent | FileError: ...


def detect_encoding(head: bytes) -> tuple[str, int]:
    """Return the encoding implied by a BOM and the BOM length, defaulting to UTF-8."""
    for bom, encoding in _BOMS:
        if head.startswith(bom):
            return encoding, len(bom)
    return "utf-8", 0


def decode_text(data: bytes) -> str:
    encoding, bom_length = detect_encoding(data[:4])
    body = data[bom_length:]
    try:
        return body.decode(encoding)
    except UnicodeDecodeError:
        return body.decode(FALLBACK_ENCODING)


class FileReader:
    """Reads entries from disk. Each call is independent and holds no state."""

    def load(self, entry: FileEntry) -> FileContent | FileError:
        try:
            with open(entry.absolute_path, "rb") as f:
                data = f.read()
            return FileContent(entry, decode_text(data))
        except FileNotFoundError:
            return self._failure(entry, "File not found")
        except PermissionError:
            return self._failure(entry, "Access denied")
        except OSError as e:
            return self._failure(entry, f"IO error: {e.strerror or e}")
        except Exception as e:
            return self._failure(entry, f"Unexpected error: {e}")

    def _failure(self, entry: FileEntry, message: str) -> FileError:
        logger.debug("Failed to load %s: %s", entry.relative_path, message)
        return FileError(entry.relative_path, message)
