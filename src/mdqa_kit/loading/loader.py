# src/mdqa_kit/loading/loader.py

import logging
from collections.abc import Iterator
from pathlib import Path

from mdqa_kit.config import ExtractionConfig
from mdqa_kit.errors import DocumentReadError
from mdqa_kit.observability import names
from mdqa_kit.observability.base import MetricsHook, NoOpMetricsHook

from .models import Document

logger = logging.getLogger(__name__)


class DocumentLoader:
    """
    Reads Markdown files under a root directory.

    - Iterating yields one Document per file, lazily
    - Iteration is restartable: every `iter()` walks the tree again
    - Read failures raise DocumentReadError; the caller decides what to skip
    """

    def __init__(
        self,
        root_dir: str | Path,
        config: ExtractionConfig | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.root_dir = Path(root_dir)
        self.config = config or ExtractionConfig()
        self.metrics_hook = metrics_hook
        if not self.root_dir.is_dir():
            raise ValueError(f"Root directory '{self.root_dir}' does not exist")

    def __iter__(self) -> Iterator[Document]:
        for path in self.discover():
            yield self.load(path)

    def discover(self) -> list[Path]:
        extensions = {ext.lower() for ext in self.config.extensions}
        paths = sorted(
            p
            for p in self.root_dir.rglob("*")
            if p.is_file() and p.suffix.lower() in extensions
        )
        logger.info("Discovered %d documents under %s", len(paths), self.root_dir)
        self.metrics_hook.increment(names.DOCUMENTS_DISCOVERED, len(paths))
        return paths

    def load(self, path: str | Path) -> Document:
        path = Path(path)
        try:
            text = path.read_text(encoding=self.config.encoding)
        except UnicodeDecodeError as exc:
            self.metrics_hook.increment(names.DOCUMENTS_FAILED)
            raise DocumentReadError(path, f"not valid {self.config.encoding}") from exc
        except OSError as exc:
            self.metrics_hook.increment(names.DOCUMENTS_FAILED)
            raise DocumentReadError(path, exc.strerror or str(exc)) from exc

        self.metrics_hook.increment(names.DOCUMENTS_LOADED)
        logger.debug("Loaded %s (%d chars)", path, len(text))
        return Document(
            path=path,
            relative_path=self.relative_path(path),
            text=text,
        )

    def relative_path(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root_dir.resolve()).as_posix()
        except ValueError:
            # Outside the root: fall back to the path as given
            return path.as_posix()
