"""
QuillEngine: runs discovery, classification, loading, transformation and
formatting in sequence.

Per-file load failures are collected into the result and the run carries on.
Cancellation is checked between items in every phase; a cancelled run raises
`OperationCancelledError` and produces no output.
"""

from __future__ import annotations

import logging

from repoquill.cancellation import CancellationToken
from repoquill.classification import PatternClassifier
from repoquill.discovery import FileScanner
from repoquill.formatting import OutputFormatter, create_formatter
from repoquill.loading import ContentLoader, FileReader
from repoquill.models import FileContent, FileEntry, FileError, FileState, QuillConfig, QuillResult
from repoquill.progress import UNKNOWN, ProgressPhase, ProgressReport, ProgressSink
from repoquill.transforms import build_transforms

logger = logging.getLogger(__name__)


class _Reporter:
    """Forwards progress to an optional sink."""

    def __init__(self, sink: ProgressSink | None) -> None:
        self._sink: ProgressSink | None = sink

    def __call__(self, phase: ProgressPhase, current: str, processed: int, total: int) -> None:
        if self._sink is not None:
            self._sink(ProgressReport(phase, current, processed, total))


class QuillEngine:
    """
    The discovery, classification and loading components can be swapped out,
    which is mainly useful in tests. The formatter is chosen from the config
    unless one is given explicitly.
    """

    def __init__(
        self,
        scanner: FileScanner | None = None,
        classifier: PatternClassifier | None = None,
        loader: ContentLoader | None = None,
        formatter: OutputFormatter | None = None,
    ) -> None:
        self._scanner: FileScanner = scanner or FileScanner()
        self._classifier: PatternClassifier = classifier or PatternClassifier()
        self._loader: ContentLoader = loader or FileReader()
        self._formatter: OutputFormatter | None = formatter

    def scan(
        self,
        config: QuillConfig,
        progress: ProgressSink | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> list[FileEntry]:
        """
        Run only discovery and classification. Returns the non-excluded
        entries sorted by relative path.
        """
        return self._scan(config, _Reporter(progress), cancel_token or CancellationToken())

    def execute(
        self,
        config: QuillConfig,
        progress: ProgressSink | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> QuillResult:
        """
        Run the full pipeline and return the formatted output with counts, the
        sorted entry list and any per-file errors.
        """
        token = cancel_token or CancellationToken()
        report = _Reporter(progress)

        included = self._scan(config, report, token)
        full_files = [e for e in included if e.state == FileState.full]

        contents, errors = self._load(full_files, report, token)
        contents = self._transform(config, contents, report, token)

        token.raise_if_cancelled()
        report(ProgressPhase.formatting, "", 0, 1)
        formatter = self._formatter or create_formatter(config.output_format)
        output = formatter.format(included, contents)
        report(ProgressPhase.formatting, "", 1, 1)

        return QuillResult(
            output=output,
            total_files=len(included),
            full_files=len(full_files),
            tree_only_files=len(included) - len(full_files),
            total_size_bytes=sum(e.size_bytes for e in included),
            files=included,
            errors=errors,
        )

    def _scan(
        self, config: QuillConfig, report: _Reporter, token: CancellationToken
    ) -> list[FileEntry]:
        logger.debug("Discovering files under %s", config.root_path)
        report(ProgressPhase.discovering, "", 0, UNKNOWN)
        discovered: list[FileEntry] = []
        for entry in self._scanner.discover(config.root_path, config.respect_gitignore, token):
            discovered.append(entry)
            report(ProgressPhase.discovering, entry.relative_path, len(discovered), UNKNOWN)

        total = len(discovered)
        logger.debug("Classifying %d files", total)
        report(ProgressPhase.classifying, "", 0, total)
        classified: list[FileEntry] = []
        for i, entry in enumerate(discovered, start=1):
            token.raise_if_cancelled()
            result = self._classifier.classify(entry, config)
            classified.append(result)
            report(ProgressPhase.classifying, result.relative_path, i, total)

        # Ordinal sort by relative path, independent of discovery order.
        return sorted(
            (e for e in classified if e.state != FileState.excluded),
            key=lambda e: e.relative_path,
        )

    def _load(
        self, entries: list[FileEntry], report: _Reporter, token: CancellationToken
    ) -> tuple[list[FileContent], list[FileError]]:
        contents: list[FileContent] = []
        errors: list[FileError] = []
        total = len(entries)
        logger.debug("Loading %d files", total)
        report(ProgressPhase.loading, "", 0, total)
        for i, entry in enumerate(entries, start=1):
            token.raise_if_cancelled()
            report(ProgressPhase.loading, entry.relative_path, i, total)
            loaded = self._loader.load(entry)
            if isinstance(loaded, FileError):
                logger.warning("Could not load %s: %s", loaded.file_path, loaded.message)
                errors.append(loaded)
            else:
                contents.append(loaded)
        return contents, errors

    def _transform(
        self,
        config: QuillConfig,
        contents: list[FileContent],
        report: _Reporter,
        token: CancellationToken,
    ) -> list[FileContent]:
        transforms = build_transforms(config)
        if not transforms:
            return contents

        total = len(contents)
        logger.debug("Applying %d transforms to %d files", len(transforms), total)
        report(ProgressPhase.transforming, "", 0, total)
        transformed: list[FileContent] = []
        for i, content in enumerate(contents, start=1):
            token.raise_if_cancelled()
            report(ProgressPhase.transforming, content.entry.relative_path, i, total)
            for transform in transforms:
                content = transform.apply(content)
            transformed.append(content)
        return transformed
