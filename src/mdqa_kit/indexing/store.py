# indexing/store.py

import json
import logging
import os
import tempfile
from pathlib import Path

from .index import Index

logger = logging.getLogger(__name__)


def dumps_index(index: Index) -> str:
    """Deterministic JSON text for an index."""
    return json.dumps(index.to_dict(), ensure_ascii=False, sort_keys=True, indent=2)


def save_index(index: Index, path: str | Path) -> Path:
    """
    Write the index as UTF-8 JSON.

    Written to a temporary file first and moved into place, so readers of
    `path` see either the old or the new index.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dumps_index(index))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.info("Saved index with %d entries to %s", len(index), path)
    return path


def load_index(path: str | Path) -> Index:
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    index = Index.from_dict(data)
    logger.info("Loaded index with %d entries from %s", len(index), path)
    return index
