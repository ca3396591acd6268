"""
File discovery: glob matching, gitignore rule merging, and the directory scanner.

Usage::

    from repoquill.discovery import FileScanner

    for entry in FileScanner().discover("path/to/repo"):
        print(entry.relative_path)
"""

from repoquill.discovery.globbing import matches, matches_any
from repoquill.discovery.ignore_rules import IgnoreRule, IgnoreRuleSet, build_ignore_rules
from repoquill.discovery.scanner import FileScanner

__all__ = [
    "FileScanner",
    "IgnoreRule",
    "IgnoreRuleSet",
    "build_ignore_rules",
    "matches",
    "matches_any",
]
