"""
Comment stripping for common source file types.

The comment style is chosen by file extension. These are regex heuristics, not
parsers: comment markers inside string literals may occasionally be removed
(C-style, SQL, Lua) or kept (hash comments after an unbalanced quote).
Files with unknown extensions pass through unchanged.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable

from repoquill.models import FileContent

# `/* ... */`, across lines.
_BLOCK_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
# `// ...` to end of line, but not the `//` in `http://`.
_LINE_COMMENT_RE = re.compile(r"(?<!:)//.*$", re.MULTILINE)
_XML_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_DASH_COMMENT_RE = re.compile(r"--.*$", re.MULTILINE)
_LUA_BLOCK_COMMENT_RE = re.compile(r"--\[\[[\s\S]*?\]\]")


def strip_c_style_comments(text: str) -> str:
    text = _BLOCK_COMMENT_RE.sub("", text)
    return _LINE_COMMENT_RE.sub("", text)


def strip_hash_comments(text: str) -> str:
    """
    Remove `#` comments line by line. A shebang on the first line is kept, and
    a `#` preceded by an odd number of either quote character is assumed to be
    inside a string.
    """
    lines = text.split("\n")
    result: list[str] = []
    for i, line in enumerate(lines):
        if i == 0 and line.lstrip().startswith("#!"):
            result.append(line)
            continue
        index = line.find("#")
        if index >= 0:
            before = line[:index]
            if before.count("'") % 2 == 0 and before.count('"') % 2 == 0:
                line = before
        result.append(line)
    return "\n".join(result)


def strip_xml_comments(text: str) -> str:
    return _XML_COMMENT_RE.sub("", text)


def strip_sql_comments(text: str) -> str:
    text = _BLOCK_COMMENT_RE.sub("", text)
    return _DASH_COMMENT_RE.sub("", text)


def strip_lua_comments(text: str) -> str:
    text = _LUA_BLOCK_COMMENT_RE.sub("", text)
    return _DASH_COMMENT_RE.sub("", text)


def strip_css_comments(text: str) -> str:
    return _BLOCK_COMMENT_RE.sub("", text)


_C_STYLE = {
    ".cs", ".java", ".js", ".ts", ".tsx", ".jsx",
    ".c", ".cpp", ".cc", ".cxx", ".h", ".hpp",
    ".go", ".swift", ".kt", ".kts", ".scala",
    ".rs", ".m", ".mm",
}  # fmt: skip
_HASH = {
    ".py", ".rb", ".pl", ".pm", ".sh", ".bash",
    ".zsh", ".fish", ".ps1", ".psm1", ".r",
    ".yaml", ".yml", ".toml", ".conf", ".ini",
    ".dockerfile", ".makefile", ".mk",
}  # fmt: skip
_XML = {
    ".html", ".htm", ".xml", ".xaml", ".axaml",
    ".svg", ".xsl", ".xslt", ".xsd", ".wsdl",
    ".csproj", ".fsproj", ".vbproj", ".props", ".targets",
}  # fmt: skip
_CSS = {".css", ".scss", ".sass", ".less"}

STRIPPERS: dict[str, Callable[[str], str]] = {
    **{ext: strip_c_style_comments for ext in _C_STYLE},
    **{ext: strip_hash_comments for ext in _HASH},
    **{ext: strip_xml_comments for ext in _XML},
    **{ext: strip_css_comments for ext in _CSS},
    ".sql": strip_sql_comments,
    ".lua": strip_lua_comments,
}


def strip_comments(text: str, path: str) -> str:
    """Strip comments from `text` according to the extension of `path`."""
    extension = os.path.splitext(path)[1].lower()
    stripper = STRIPPERS.get(extension)
    return stripper(text) if stripper else text


class CommentStripper:
    def apply(self, content: FileContent) -> FileContent:
        return content.with_content(strip_comments(content.content, content.entry.relative_path))
