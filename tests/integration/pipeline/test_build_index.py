from pathlib import Path

import pytest

from mdqa_kit import (
    DocumentReadError,
    ExtractionConfig,
    Index,
    IndexHolder,
    InMemoryMetricsHook,
    build_index,
    draw_quiz,
    load_index,
    save_index,
)
from mdqa_kit.indexing import dumps_index
from mdqa_kit.observability import names

ONE_QUESTION_MD = "## Вопрос 1: Одинаковый заголовок?\n\n> **Ответ**: Да.\n"

# --- Corpus-level tests ---


def test_indexes_every_markdown_file(corpus_index: Index) -> None:
    assert corpus_index.roots == (
        "broken.md#1",
        "locks.md#1",
        "plans/sniffing.md#1",
        "twins/a.md#1",
        "twins/b.md#1",
    )
    assert len(corpus_index) == 8


def test_identical_headings_in_different_files_do_not_collide(
    corpus_index: Index,
) -> None:
    a = corpus_index.lookup("twins/a.md#1")
    b = corpus_index.lookup("twins/b.md#1")

    assert a.question == b.question
    assert a.id != b.id


def test_heading_inside_fence_does_not_split_tree(corpus_index: Index) -> None:
    entry = corpus_index.lookup("locks.md#1")

    assert entry.section_path == ("Блокировки", "Вопрос 1: Что такое NOLOCK?")
    assert all(e.question != "Title" for e in corpus_index)


def test_follow_ups_are_nested_and_indexed(corpus_index: Index) -> None:
    entry = corpus_index.lookup("locks.md#1")

    assert [f.id for f in entry.follow_ups] == [
        "locks.md#1.1",
        "locks.md#1.2",
        "locks.md#1.3",
    ]
    assert corpus_index.lookup("locks.md#1.3").question == "Бывают ли дубликаты строк?"


def test_unterminated_fence_is_a_warning(corpus_index: Index) -> None:
    assert [(w.path, w.kind) for w in corpus_index.diagnostics] == [
        ("broken.md", "unterminated_fence")
    ]
    entry = corpus_index.lookup("broken.md#1")
    assert entry.code_blocks[0].text == "SELECT COUNT(*) FROM dbo.Sales"


# --- Query tests ---


def test_query_across_files(corpus_index: Index) -> None:
    assert corpus_index.query(["dbo"]) == {
        "broken.md#1",
        "locks.md#1",
        "plans/sniffing.md#1",
    }
    assert corpus_index.query(["columnstore"]) == {"broken.md#1"}


def test_query_unknown_term_is_empty(corpus_index: Index) -> None:
    assert corpus_index.query(["hekaton"]) == set()


def test_quiz_from_corpus(corpus_index: Index) -> None:
    cards = draw_quiz(corpus_index, 3, seed=11)

    assert len(cards) == 3
    assert all(card.answer for card in cards)


# --- Determinism tests ---


def test_rebuild_is_byte_identical(corpus_dir: Path, corpus_index: Index) -> None:
    assert dumps_index(build_index(corpus_dir)) == dumps_index(corpus_index)


def test_parallel_and_serial_builds_match(corpus_dir: Path) -> None:
    serial = build_index(corpus_dir, max_workers=1)
    parallel = build_index(corpus_dir, max_workers=4)

    assert dumps_index(serial) == dumps_index(parallel)
    assert serial.diagnostics == parallel.diagnostics


def test_persisted_index_round_trip(tmp_path: Path, corpus_index: Index) -> None:
    path = save_index(corpus_index, tmp_path / "index.json")

    assert dumps_index(load_index(path)) == dumps_index(corpus_index)


def test_records_pipeline_metrics(corpus_dir: Path) -> None:
    hook = InMemoryMetricsHook()
    build_index(corpus_dir, metrics_hook=hook)

    assert hook.counters[names.DOCUMENTS_DISCOVERED] == 5
    assert hook.counters[names.DOCUMENTS_LOADED] == 5
    assert hook.counters[names.ENTRIES_EXTRACTED] == 8
    assert hook.gauges[names.INDEX_ENTRIES] == 8
    assert len(hook.latencies[names.PIPELINE_DURATION]) == 1


# --- Failure handling ---


def test_unreadable_file_becomes_warning(tmp_path: Path, corpus_writer) -> None:
    corpus_writer(tmp_path)
    (tmp_path / "bad.md").write_bytes(b"## \xff\xfe")

    index = build_index(tmp_path)

    assert len(index.roots) == 5
    unreadable = [w for w in index.diagnostics if w.kind == "unreadable_document"]
    assert [w.path for w in unreadable] == ["bad.md"]


def test_unreadable_file_aborts_when_not_skipped(tmp_path: Path) -> None:
    (tmp_path / "bad.md").write_bytes(b"## \xff\xfe")

    with pytest.raises(DocumentReadError):
        build_index(tmp_path, config=ExtractionConfig(skip_unreadable=False))


def test_empty_directory_gives_empty_index(tmp_path: Path) -> None:
    index = build_index(tmp_path)

    assert len(index) == 0
    assert index.query(["anything"]) == set()


def test_rejects_invalid_worker_count(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="max_workers must be >= 1"):
        build_index(tmp_path, max_workers=0)


# --- IndexHolder ---


def test_holder_swaps_only_complete_index(tmp_path: Path) -> None:
    (tmp_path / "one.md").write_text(ONE_QUESTION_MD, encoding="utf-8")
    holder = IndexHolder(tmp_path, config=ExtractionConfig(skip_unreadable=False))

    first = holder.current
    assert first.roots == ("one.md#1",)

    (tmp_path / "two.md").write_text(ONE_QUESTION_MD, encoding="utf-8")
    second = holder.rebuild()

    assert holder.current is second
    assert second.roots == ("one.md#1", "two.md#1")
    assert first.roots == ("one.md#1",)


def test_failed_rebuild_keeps_previous_index(tmp_path: Path) -> None:
    (tmp_path / "one.md").write_text(ONE_QUESTION_MD, encoding="utf-8")
    holder = IndexHolder(tmp_path, config=ExtractionConfig(skip_unreadable=False))
    before = holder.rebuild()

    (tmp_path / "bad.md").write_bytes(b"\xff")
    with pytest.raises(DocumentReadError):
        holder.rebuild()

    assert holder.current is before
