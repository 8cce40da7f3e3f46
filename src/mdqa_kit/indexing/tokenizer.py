# indexing/tokenizer.py

import re

# Unicode letters and digits; underscore and punctuation separate tokens
TOKEN_PATTERN = re.compile(r"[^\W_]+")


def tokenize(text: str, min_length: int = 2) -> list[str]:
    """Lower-cased alphanumeric tokens, in order, shorter ones dropped."""
    if min_length < 1:
        raise ValueError("min_length must be >= 1")
    return [
        token
        for token in (match.group().lower() for match in TOKEN_PATTERN.finditer(text))
        if len(token) >= min_length
    ]
