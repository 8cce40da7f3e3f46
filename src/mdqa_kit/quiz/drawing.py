# quiz/drawing.py

import logging
import random
from collections.abc import Iterable

from mdqa_kit.indexing.index import Index

from .models import Flashcard

logger = logging.getLogger(__name__)


def draw_quiz(
    index: Index,
    count: int,
    *,
    seed: int | None = None,
    terms: Iterable[str] | None = None,
    include_follow_ups: bool = True,
) -> list[Flashcard]:
    """
    Pick up to `count` flashcards from entries that have a short answer.

    Same index and seed give the same cards in the same order. `terms`
    restricts the pool to `index.query(terms)`.
    """
    if count < 1:
        raise ValueError("count must be >= 1")

    if include_follow_ups:
        candidates = list(index)
    else:
        candidates = index.top_level()
    if terms is not None:
        matching = index.query(terms)
        candidates = [entry for entry in candidates if entry.id in matching]

    # Sorting makes the draw independent of build order
    pool = sorted(
        (entry for entry in candidates if entry.short_answer), key=lambda e: e.id
    )
    rng = random.Random(seed)
    chosen = rng.sample(pool, min(count, len(pool)))
    logger.debug("Drew %d of %d candidate cards", len(chosen), len(pool))
    return [Flashcard.from_entry(entry) for entry in chosen]
