"""
Text canonicalization shared by every matching stage.
"""

import re

_STRIP_CHARS = re.compile(r"[?.,!'\"]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lower-case, drop ``? . , ! ' "``, collapse whitespace, trim."""
    if not text:
        return ""
    text = _STRIP_CHARS.sub("", text.lower())
    return _WHITESPACE.sub(" ", text).strip()


def contains_phrase(normalized_text: str, phrase: str) -> bool:
    """True if ``phrase`` appears in ``normalized_text`` on token boundaries."""
    phrase = normalize(phrase)
    if not phrase or not normalized_text:
        return False
    return f" {phrase} " in f" {normalized_text} "
