# src/mdqa_kit/pipeline.py

"""Corpus build: load, segment and extract each file, then index once.

Documents are independent until indexing, so per-file work runs in a
thread pool. Results are joined in discovery order before the single
IndexBuilder step.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from time import monotonic

from .config import ExtractionConfig
from .errors import DocumentReadError, StructuralWarning
from .extraction.extractor import QAExtractor
from .extraction.models import QAEntry
from .indexing.builder import IndexBuilder
from .indexing.index import Index
from .loading.loader import DocumentLoader
from .loading.models import Document
from .observability import names
from .observability.base import MetricsHook, NoOpMetricsHook
from .parsers.markdown_parser import MarkdownParser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentResult:
    path: Path
    entries: tuple[QAEntry, ...]
    warnings: tuple[StructuralWarning, ...]


def extract_document(
    document: Document,
    config: ExtractionConfig | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> DocumentResult:
    """Segment and extract one document with its own parser and extractor."""
    parsed = MarkdownParser(metrics_hook=metrics_hook).parse(document)
    extracted = QAExtractor(config=config, metrics_hook=metrics_hook).extract(parsed)
    return DocumentResult(
        path=document.path,
        entries=extracted.entries,
        warnings=parsed.warnings + extracted.warnings,
    )


def _process_path(
    loader: DocumentLoader,
    path: Path,
    config: ExtractionConfig,
    metrics_hook: MetricsHook,
) -> DocumentResult:
    try:
        document = loader.load(path)
    except DocumentReadError as exc:
        if not config.skip_unreadable:
            raise
        logger.warning("Skipping unreadable document %s: %s", path, exc.reason)
        return DocumentResult(
            path=path,
            entries=(),
            warnings=(
                StructuralWarning(
                    path=loader.relative_path(path),
                    line=0,
                    kind="unreadable_document",
                    message=str(exc),
                ),
            ),
        )
    return extract_document(document, config=config, metrics_hook=metrics_hook)


def build_index(
    root_dir: str | Path,
    *,
    config: ExtractionConfig | None = None,
    max_workers: int | None = None,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Index:
    """
    Build an Index from every Markdown file under `root_dir`.

    Structural problems end up in `Index.diagnostics`. Only a duplicate
    identifier (or an unreadable file with `skip_unreadable=False`) aborts.

    Args:
        root_dir: Directory searched recursively.
        config: Extraction settings; defaults when omitted.
        max_workers: Thread pool size. 1 processes files inline.
        metrics_hook: Hook for recording metrics.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    start = monotonic()
    config = config or ExtractionConfig()
    loader = DocumentLoader(root_dir, config=config, metrics_hook=metrics_hook)
    paths = loader.discover()

    if max_workers == 1 or len(paths) <= 1:
        results = [_process_path(loader, p, config, metrics_hook) for p in paths]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                pool.submit(_process_path, loader, p, config, metrics_hook)
                for p in paths
            ]
            # Barrier: every document finishes before indexing starts
            results = [future.result() for future in futures]

    entries = [entry for result in results for entry in result.entries]
    diagnostics = [warning for result in results for warning in result.warnings]

    index = IndexBuilder(config=config, metrics_hook=metrics_hook).build(
        entries, diagnostics=diagnostics
    )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.PIPELINE_DURATION, elapsed_ms)
    logger.info(
        "Built index from %d documents under %s: %d entries, %d warnings",
        len(paths),
        root_dir,
        len(index),
        len(diagnostics),
    )
    return index


class IndexHolder:
    """
    Caller-owned reference to the current Index.

    `rebuild` builds a complete new index first and only then swaps it in,
    so `current` never exposes a partial build. A failed rebuild leaves the
    previous index in place.
    """

    def __init__(
        self,
        root_dir: str | Path,
        *,
        config: ExtractionConfig | None = None,
        max_workers: int | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.root_dir = Path(root_dir)
        self.config = config or ExtractionConfig()
        self.max_workers = max_workers
        self.metrics_hook = metrics_hook
        self._index: Index | None = None
        self._lock = threading.Lock()
        self._rebuild_lock = threading.Lock()

    @property
    def current(self) -> Index:
        with self._lock:
            index = self._index
        if index is None:
            return self.rebuild()
        return index

    def rebuild(self) -> Index:
        with self._rebuild_lock:
            index = build_index(
                self.root_dir,
                config=self.config,
                max_workers=self.max_workers,
                metrics_hook=self.metrics_hook,
            )
            with self._lock:
                self._index = index
        return index
