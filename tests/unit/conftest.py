import pytest

from mdqa_kit.extraction import CodeBlock, Language, QAEntry


def _make_entry(
    entry_id: str,
    question: str,
    short_answer: str = "",
    code: tuple[str, ...] = (),
    follow_ups: tuple[QAEntry, ...] = (),
    body: str = "",
) -> QAEntry:
    return QAEntry(
        id=entry_id,
        question=question,
        short_answer=short_answer,
        code_blocks=tuple(
            CodeBlock(language=Language.SQL, text=text, ordinal=i, info="sql")
            for i, text in enumerate(code)
        ),
        follow_ups=follow_ups,
        source_path=entry_id.split("#")[0],
        section_index=1,
        body=body,
    )


@pytest.fixture
def sample_entries() -> list[QAEntry]:
    nolock = _make_entry(
        "locks.md#1",
        "Что такое NOLOCK?",
        "Хинт READ UNCOMMITTED",
        code=("SELECT * FROM dbo.Orders WITH (NOLOCK);",),
        follow_ups=(
            _make_entry("locks.md#1.1", "Может ли NOLOCK заблокировать?", "Да, Sch-S"),
        ),
    )
    deadlock = _make_entry(
        "locks.md#2",
        "Что такое deadlock?",
        "Циклическое ожидание блокировок",
        body="Жертва выбирается по DEADLOCK_PRIORITY.",
    )
    sniffing = _make_entry(
        "plans.md#1",
        "Что такое parameter sniffing?",
        "План строится под первые параметры",
        code=("EXEC dbo.GetOrders @CustomerId = 42 WITH RECOMPILE;",),
    )
    return [nolock, deadlock, sniffing]
