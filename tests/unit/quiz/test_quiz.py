from dataclasses import replace

import pytest

from mdqa_kit.extraction import QAEntry
from mdqa_kit.indexing import Index, IndexBuilder
from mdqa_kit.quiz import Flashcard, draw_quiz


@pytest.fixture
def index(sample_entries: list[QAEntry]) -> Index:
    return IndexBuilder().build(sample_entries)


def test_same_seed_gives_same_cards(index: Index) -> None:
    assert draw_quiz(index, 3, seed=7) == draw_quiz(index, 3, seed=7)


def test_count_is_capped_by_pool(index: Index) -> None:
    cards = draw_quiz(index, 50, seed=1)

    assert len(cards) == 4
    assert len({c.entry_id for c in cards}) == 4


def test_top_level_only(index: Index) -> None:
    cards = draw_quiz(index, 10, seed=1, include_follow_ups=False)

    assert {c.entry_id for c in cards} == {"locks.md#1", "locks.md#2", "plans.md#1"}


def test_terms_restrict_pool(index: Index) -> None:
    cards = draw_quiz(index, 10, seed=1, terms=["nolock"])

    assert {c.entry_id for c in cards} == {"locks.md#1", "locks.md#1.1"}


def test_entries_without_answer_are_skipped(sample_entries: list[QAEntry]) -> None:
    entries = [replace(sample_entries[1], short_answer=""), sample_entries[2]]
    cards = draw_quiz(IndexBuilder().build(entries), 10, seed=1)

    assert [c.entry_id for c in cards] == ["plans.md#1"]


def test_flashcard_carries_answer_and_code(index: Index) -> None:
    card = Flashcard.from_entry(index.lookup("plans.md#1"))

    assert card.question == "Что такое parameter sniffing?"
    assert card.answer == "План строится под первые параметры"
    assert card.code == ("EXEC dbo.GetOrders @CustomerId = 42 WITH RECOMPILE;",)


def test_rejects_non_positive_count(index: Index) -> None:
    with pytest.raises(ValueError, match="count must be >= 1"):
        draw_quiz(index, 0)
