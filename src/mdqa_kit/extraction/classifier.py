# extraction/classifier.py

from enum import Enum


class Language(str, Enum):
    """Closed set of code block languages."""

    SQL = "sql"
    CSHARP = "csharp"
    TEXT = "text"
    XML = "xml"
    UNSPECIFIED = "unspecified"


_ALIASES: dict[str, Language] = {
    "sql": Language.SQL,
    "tsql": Language.SQL,
    "t-sql": Language.SQL,
    "mssql": Language.SQL,
    "sqlserver": Language.SQL,
    "csharp": Language.CSHARP,
    "c#": Language.CSHARP,
    "cs": Language.CSHARP,
    "text": Language.TEXT,
    "txt": Language.TEXT,
    "plain": Language.TEXT,
    "plaintext": Language.TEXT,
    "console": Language.TEXT,
    "output": Language.TEXT,
    "xml": Language.XML,
    "xsd": Language.XML,
    "xaml": Language.XML,
    "showplan": Language.XML,
}


def classify_language(info: str | None) -> Language:
    """Map a raw fence info string ("sql", "{.csharp}", "") to a Language.

    Total: unknown or empty input gives Language.UNSPECIFIED.
    """
    if not info:
        return Language.UNSPECIFIED
    words = info.split()
    if not words:
        return Language.UNSPECIFIED
    tag = words[0].strip("{}").lstrip(".").lower()
    return _ALIASES.get(tag, Language.UNSPECIFIED)
