import pytest

from mdqa_kit.extraction.classifier import Language, classify_language


@pytest.mark.parametrize(
    ("info", "expected"),
    [
        ("sql", Language.SQL),
        ("SQL", Language.SQL),
        ("tsql", Language.SQL),
        ("t-sql", Language.SQL),
        ("csharp", Language.CSHARP),
        ("c#", Language.CSHARP),
        ("cs", Language.CSHARP),
        ("text", Language.TEXT),
        ("plaintext", Language.TEXT),
        ("xml", Language.XML),
        ("{.sql}", Language.SQL),
        ("sql title=\"query.sql\"", Language.SQL),
    ],
)
def test_known_languages(info: str, expected: Language) -> None:
    assert classify_language(info) is expected


@pytest.mark.parametrize("info", ["", "   ", None, "python", "mermaid", "{}"])
def test_unknown_or_empty_is_unspecified(info: str | None) -> None:
    assert classify_language(info) is Language.UNSPECIFIED


def test_language_values_are_plain_strings() -> None:
    assert Language.CSHARP == "csharp"
    assert {lang.value for lang in Language} == {
        "sql",
        "csharp",
        "text",
        "xml",
        "unspecified",
    }
