# indexing/builder.py

import logging
from collections.abc import Iterable
from time import monotonic

from mdqa_kit.config import ExtractionConfig
from mdqa_kit.errors import DuplicateIdentifierError, StructuralWarning
from mdqa_kit.extraction.models import QAEntry
from mdqa_kit.observability import names
from mdqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .index import Index
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class IndexBuilder:
    """
    Builds an Index from the complete, ordered entry list of a corpus.

    - Every follow-up is indexed as an entry of its own
    - Postings come from the entry's own question, short answer and code
    - Any repeated identifier aborts the build
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.config = config or ExtractionConfig()
        self.metrics_hook = metrics_hook

    def build(
        self,
        entries: Iterable[QAEntry],
        diagnostics: Iterable[StructuralWarning] = (),
    ) -> Index:
        start = monotonic()
        lookup: dict[str, QAEntry] = {}
        postings: dict[str, set[str]] = {}
        roots: list[str] = []

        for root in entries:
            roots.append(root.id)
            for entry in root.walk():
                if entry.id in lookup:
                    logger.error("Duplicate entry identifier: %s", entry.id)
                    raise DuplicateIdentifierError(entry.id)
                lookup[entry.id] = entry
                for token in set(self._tokens(entry)):
                    postings.setdefault(token, set()).add(entry.id)

        index = Index(
            entries=lookup,
            postings={term: frozenset(ids) for term, ids in postings.items()},
            roots=roots,
            diagnostics=diagnostics,
            min_token_length=self.config.min_token_length,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.INDEX_BUILD_DURATION, elapsed_ms)
        self.metrics_hook.record_gauge(names.INDEX_ENTRIES, len(lookup))
        self.metrics_hook.record_gauge(names.INDEX_TERMS, len(postings))
        logger.info("Indexed %d entries, %d terms", len(lookup), len(postings))
        return index

    def _tokens(self, entry: QAEntry) -> list[str]:
        parts = [entry.question, entry.short_answer]
        parts.extend(block.text for block in entry.code_blocks)
        if self.config.index_body:
            parts.append(entry.body)
        return tokenize("\n".join(parts), self.config.min_token_length)
