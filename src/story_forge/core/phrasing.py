"""Small English phrasing helpers shared by generators and assemblers."""

from __future__ import annotations

_SILENT_H_PREFIXES = ("hour", "honest", "honor", "honour", "heir")
_CONSONANT_SOUND_PREFIXES = (
    "university",
    "european",
    "one",
    "once",
    "unique",
    "uniform",
    "union",
    "united",
    "usual",
    "user",
    "utopia",
    "eulogy",
)
_TERMINAL = (".", "!", "?")


def article(phrase: str) -> str:
    """Return `a` or `an` for the first word of `phrase`."""
    word = phrase.strip().lower()
    if not word:
        return "a"
    if word.startswith(_SILENT_H_PREFIXES):
        return "an"
    if word.startswith(_CONSONANT_SOUND_PREFIXES):
        return "a"
    return "an" if word[0] in "aeiou" else "a"


def with_article(phrase: str) -> str:
    phrase = phrase.strip()
    return f"{article(phrase)} {phrase}"


def capitalize(text: str) -> str:
    """Uppercase the first character only, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def as_sentence(text: str) -> str:
    """Capitalize and ensure terminal punctuation."""
    text = capitalize(text.strip())
    if not text:
        return text
    if text.rstrip("\"'").endswith(_TERMINAL):
        return text
    return f"{text}."
