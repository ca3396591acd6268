"""
Binary file detection: a fast extension check, then a null-byte probe.

The extension check is trusted on its own. A text file named `notes.exe` is
treated as binary without its content ever being read.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        # Executables and libraries
        ".exe", ".dll", ".so", ".dylib", ".bin", ".obj", ".o", ".a", ".lib",
        # Images
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff", ".tif",
        ".psd", ".raw", ".heic", ".heif",
        # Audio
        ".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma", ".m4a",
        # Video
        ".mp4", ".avi", ".mov", ".mkv", ".wmv", ".flv", ".webm", ".m4v",
        # Archives
        ".zip", ".tar", ".gz", ".7z", ".rar", ".bz2", ".xz", ".zst",
        # Binary document formats
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        # Fonts
        ".woff", ".woff2", ".ttf", ".otf", ".eot",
        # Compiled/bytecode
        ".pyc", ".pyo", ".class", ".pdb", ".nupkg", ".snupkg",
        # Databases
        ".db", ".sqlite", ".sqlite3", ".mdb",
        # Other
        ".iso", ".dmg", ".pkg", ".deb", ".rpm",
        ".jar", ".war", ".ear",
        ".node", ".wasm",
    }
)  # fmt: skip

PROBE_SIZE = 8192
"""Number of leading bytes inspected for a null byte."""


def has_binary_extension(path: str) -> bool:
    extension = os.path.splitext(path)[1].lower()
    return bool(extension) and extension in BINARY_EXTENSIONS


def contains_null_bytes(path: str) -> bool:
    """
    Check the first `PROBE_SIZE` bytes for a null byte. Read errors count as
    "not binary"; the loader reports the real error later.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(PROBE_SIZE)
    except OSError as e:
        logger.debug("Binary probe could not read %s: %s", path, e)
        return False
    return b"\x00" in head


def is_binary(path: str) -> bool:
    return has_binary_extension(path) or contains_null_bytes(path)
