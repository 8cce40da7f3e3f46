# extraction/patterns.py

"""Heuristic predicates for the interview-notes Q&A convention.

Each recogniser is a small pure function so it can be tested and replaced
on its own. All of them take an optional ExtractionConfig; the defaults
cover Russian and English notes.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from mdqa_kit.config import ExtractionConfig

_DEFAULT_CONFIG = ExtractionConfig()

QUOTE_PREFIX_PATTERN = re.compile(r"^[ \t]*(?:>[ \t]?)+")
EMPHASIS_PATTERN = re.compile(r"(\*\*|__)(.+?)\1")
ITEM_NUMBERING_PATTERN = re.compile(r"^\s*\d+[.)]\s+")
NUMBERED_ITEM_PATTERN = re.compile(r"^ {0,3}\d+[.)][ \t]+(\S.*)$")
LEADING_BOLD_PATTERN = re.compile(r"^(\*\*|__)(.+?)\1[ \t]*[:.\-—–]*[ \t]*(.*)$", re.DOTALL)


@dataclass(frozen=True)
class NumberedItem:
    question: str
    answer: str


@lru_cache(maxsize=32)
def _question_pattern(markers: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(m) for m in sorted(markers, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternation})\s*(?:№|#)?\s*\d+", re.IGNORECASE)


@lru_cache(maxsize=32)
def _answer_label_pattern(labels: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(label) for label in sorted(labels, key=len, reverse=True))
    return re.compile(
        # optional icon, opening emphasis, label, optional "(...)", closing emphasis
        rf"^[^\w*_]*(\*\*|__|\*|_)[ \t]*(?:{alternation})(?:[ \t]*\([^)\n]*\))?"
        rf"[ \t]*[:.]?[ \t]*\1[ \t]*[:.\-—–]*[ \t]*",
        re.IGNORECASE,
    )


def is_question_heading(text: str, config: ExtractionConfig | None = None) -> bool:
    """"Вопрос 3: ...", "Question 12", or any heading ending with '?'."""
    config = config or _DEFAULT_CONFIG
    if _question_pattern(tuple(config.question_markers)).search(text):
        return True
    return text.rstrip(" \t*_`").endswith(("?", "？"))


def is_follow_up_heading(text: str, config: ExtractionConfig | None = None) -> bool:
    """Heading of a "tricky follow-up questions" block."""
    config = config or _DEFAULT_CONFIG
    folded = text.casefold()
    return any(marker.casefold() in folded for marker in config.follow_up_markers)


def unquote(text: str) -> str:
    """Remove blockquote markers from every line."""
    return "\n".join(QUOTE_PREFIX_PATTERN.sub("", line) for line in text.splitlines())


def is_quoted(text: str) -> bool:
    lines = [line for line in text.splitlines() if line.strip()]
    return bool(lines) and all(QUOTE_PREFIX_PATTERN.match(line) for line in lines)


def is_emphasized(text: str) -> bool:
    return text.lstrip().startswith(("*", "_"))


def is_short_answer_marker(paragraph: str, config: ExtractionConfig | None = None) -> bool:
    """Paragraph opens with an emphasised answer label, e.g. "> **Ответ**: ..."."""
    config = config or _DEFAULT_CONFIG
    pattern = _answer_label_pattern(tuple(config.answer_labels))
    return pattern.match(unquote(paragraph).lstrip()) is not None


def strip_short_answer(paragraph: str, config: ExtractionConfig | None = None) -> str:
    """Answer text of a marker paragraph, without quotes and label.

    Returns "" when the paragraph holds only the label.
    """
    config = config or _DEFAULT_CONFIG
    pattern = _answer_label_pattern(tuple(config.answer_labels))
    text = pattern.sub("", unquote(paragraph).lstrip(), count=1)
    return "\n".join(line.strip() for line in text.splitlines()).strip()


def clean_question(text: str) -> str:
    """Heading or item text as plain question text."""
    text = ITEM_NUMBERING_PATTERN.sub("", text)
    text = EMPHASIS_PATTERN.sub(r"\2", text)
    return text.strip(" \t*_")


def has_numbered_item(text: str) -> bool:
    """True when any line opens a `1.` or `1)` list item.

    An ordered list may interrupt a paragraph, so the list can start below
    an intro line of the same block.
    """
    return any(NUMBERED_ITEM_PATTERN.match(line) for line in text.splitlines())


def parse_numbered_items(text: str) -> list[NumberedItem]:
    """
    Split list items into question/answer pairs.

    - Continuation lines belong to the preceding item
    - A leading bold span is the question; otherwise the text up to the
      first '?', otherwise the whole first line
    - Lines before the first item are ignored
    """
    raw_items: list[list[str]] = []
    for line in text.splitlines():
        match = NUMBERED_ITEM_PATTERN.match(line)
        if match:
            raw_items.append([match.group(1)])
        elif raw_items:
            raw_items[-1].append(line.strip())

    items = []
    for lines in raw_items:
        first, rest = lines[0], [line for line in lines[1:] if line]
        bold = LEADING_BOLD_PATTERN.match(first)
        if bold:
            question = bold.group(2)
            answer_lines = [bold.group(3)] + rest
        elif "?" in first:
            cut = first.index("?") + 1
            question = first[:cut]
            answer_lines = [first[cut:]] + rest
        else:
            question = first
            answer_lines = rest

        answer = "\n".join(line.strip() for line in answer_lines if line.strip())
        items.append(NumberedItem(question=clean_question(question), answer=answer))
    return items
