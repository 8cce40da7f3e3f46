from pathlib import Path

import pytest

from mdqa_kit import Index, build_index

LOCKS_MD = """# Блокировки

```text
# Title
```

## Вопрос 1: Что такое NOLOCK?

> **Ответ**: Табличный хинт, равный READ UNCOMMITTED.

```sql
SELECT * FROM dbo.Orders WITH (NOLOCK);
```

### Каверзные вопросы

1. **Может ли NOLOCK заблокировать?** Да, он берёт Sch-S.
2. **Читает ли NOLOCK грязные данные?** Да.
3. Бывают ли дубликаты строк? Да, при page split.
"""

SNIFFING_MD = """## Вопрос 1: Что такое parameter sniffing?

> **Ответ**: Оптимизатор строит план под первые значения параметров.

```sql
EXEC dbo.GetOrders @CustomerId = 42;
```
"""

BROKEN_MD = """## Вопрос 1: Что такое columnstore?

> **Ответ**: Колоночное хранение.

```sql
SELECT COUNT(*) FROM dbo.Sales
"""

TWIN_MD = """## Вопрос 1: Одинаковый заголовок?

> **Ответ**: Да.
"""


def write_corpus(root: Path) -> Path:
    """Creates a deterministic five-file corpus plus one non-Markdown file."""
    (root / "plans").mkdir()
    (root / "twins").mkdir()
    (root / "locks.md").write_text(LOCKS_MD, encoding="utf-8")
    (root / "plans" / "sniffing.md").write_text(SNIFFING_MD, encoding="utf-8")
    (root / "broken.md").write_text(BROKEN_MD, encoding="utf-8")
    (root / "twins" / "a.md").write_text(TWIN_MD, encoding="utf-8")
    (root / "twins" / "b.md").write_text(TWIN_MD, encoding="utf-8")
    (root / "README.txt").write_text("not part of the corpus", encoding="utf-8")
    return root


@pytest.fixture(scope="module")
def corpus_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Create the corpus once per module."""
    return write_corpus(tmp_path_factory.mktemp("corpus"))


@pytest.fixture(scope="module")
def corpus_index(corpus_dir: Path) -> Index:
    """Build the corpus index once, reuse across tests."""
    return build_index(corpus_dir)


@pytest.fixture
def corpus_writer():
    """Expose write_corpus to tests that need a fresh, mutable corpus."""
    return write_corpus
