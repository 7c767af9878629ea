"""Pronoun template resolution.

Two modes share the same pronoun data:

* explicit tokens: ``{subject}``, ``{object}``, ``{possessive}``,
  ``{possessive_alone}``, ``{reflexive}``, ``{is}`` and ``{has}`` are parsed into
  `Placeholder` segments and resolved by a total function over `PronounSlot`;
* generic default: text written with they/them/their (and contractions) is
  rewritten word by word for a singular identity, fixing verb agreement.

Both modes are pure functions of the text and the pronoun set.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from story_forge.core.phrasing import capitalize
from story_forge.domain.models import PronounSet


class PronounSlot(Enum):
    SUBJECT = "subject"
    OBJECT = "object"
    POSSESSIVE = "possessive"
    POSSESSIVE_ALONE = "possessive_alone"
    REFLEXIVE = "reflexive"
    COPULA = "is"
    AUXILIARY = "has"


_SLOT_RESOLVERS: dict[PronounSlot, Callable[[PronounSet], str]] = {
    PronounSlot.SUBJECT: lambda pronouns: pronouns.subject,
    PronounSlot.OBJECT: lambda pronouns: pronouns.object,
    PronounSlot.POSSESSIVE: lambda pronouns: pronouns.possessive,
    PronounSlot.POSSESSIVE_ALONE: lambda pronouns: pronouns.possessive_alone,
    PronounSlot.REFLEXIVE: lambda pronouns: pronouns.reflexive,
    PronounSlot.COPULA: lambda pronouns: "are" if pronouns.is_plural else "is",
    PronounSlot.AUXILIARY: lambda pronouns: "have" if pronouns.is_plural else "has",
}
if set(_SLOT_RESOLVERS) != set(PronounSlot):
    raise RuntimeError("Every PronounSlot needs a resolver.")

_TOKEN_SLOTS: dict[str, PronounSlot] = {
    "subject": PronounSlot.SUBJECT,
    "object": PronounSlot.OBJECT,
    "possessive": PronounSlot.POSSESSIVE,
    "possessive_alone": PronounSlot.POSSESSIVE_ALONE,
    "possessivealone": PronounSlot.POSSESSIVE_ALONE,
    "reflexive": PronounSlot.REFLEXIVE,
    "is": PronounSlot.COPULA,
    "has": PronounSlot.AUXILIARY,
}

_TOKEN = re.compile(r"\{([A-Za-z][A-Za-z0-9_]*)\}")
_LEFTOVER = re.compile(r"\{[^{}\s]*\}|\bundefined\b|\bNone\b|\bnull\b")


@dataclass(frozen=True)
class Placeholder:
    """A pronoun slot marker parsed out of a template."""

    slot: PronounSlot
    capitalized: bool = False


@dataclass(frozen=True)
class NamedReference:
    """A `{name}` marker filled from a caller-supplied mapping."""

    key: str
    raw: str
    capitalized: bool = False


Segment = str | Placeholder | NamedReference


def _classify(name: str, raw: str) -> Placeholder | NamedReference:
    capitalized = name[0].isupper()
    slot = _TOKEN_SLOTS.get(name.lower())
    if slot is not None:
        return Placeholder(slot=slot, capitalized=capitalized)
    return NamedReference(key=name[0].lower() + name[1:], raw=raw, capitalized=capitalized)


@lru_cache(maxsize=4096)
def parse_template(text: str) -> tuple[Segment, ...]:
    """Split a template into literal text and tagged markers."""
    segments: list[Segment] = []
    position = 0
    for match in _TOKEN.finditer(text):
        if match.start() > position:
            segments.append(text[position : match.start()])
        segments.append(_classify(match.group(1), match.group(0)))
        position = match.end()
    if position < len(text):
        segments.append(text[position:])
    return tuple(segments)


def resolve_slot(slot: PronounSlot, pronouns: PronounSet) -> str:
    return _SLOT_RESOLVERS[slot](pronouns)


def render_segments(
    segments: tuple[Segment, ...],
    pronouns: PronounSet,
    names: Mapping[str, str] | None = None,
) -> str:
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, Placeholder):
            word = resolve_slot(segment.slot, pronouns)
            parts.append(capitalize(word) if segment.capitalized else word)
        elif isinstance(segment, NamedReference):
            value = (names or {}).get(segment.key)
            if value is None:
                # Left visible for the generation audit.
                parts.append(segment.raw)
            else:
                parts.append(capitalize(value) if segment.capitalized else value)
        else:
            parts.append(segment)
    return "".join(parts)


def render_template(
    text: str,
    pronouns: PronounSet,
    names: Mapping[str, str] | None = None,
) -> str:
    """Resolve explicit pronoun tokens and named references in `text`."""
    return render_segments(parse_template(text), pronouns, names)


_ADVERBS = (
    "never", "always", "still", "finally", "just", "only", "suddenly", "really",
    "also", "even", "barely", "slowly", "secretly", "immediately", "accidentally",
    "nearly", "already", "truly", "actually", "ever", "soon", "desperately",
    "quietly", "reluctantly", "instantly", "constantly", "somehow", "often",
    "rarely", "simply", "eventually", "repeatedly", "obsessively", "completely",
    "genuinely", "openly", "frantically", "no longer", "once again", "now",
    "once", "twice", "then", "later", "again", "first", "instead",
)
# Verbs that happen to end in -ly; every other -ly word is an adverb.
_LY_VERBS = ("apply", "reply", "rely", "supply", "fly", "ally", "bully", "comply", "imply", "rally", "tally")
_UNCHANGED_VERBS = frozenset(
    {
        "can", "cannot", "could", "will", "would", "should", "must", "might", "may",
        "shall", "had", "did", "was", "is", "has", "does",
        "lost", "found", "made", "took", "got", "saw", "knew", "thought", "felt",
        "left", "became", "came", "went", "fell", "gave", "told", "said", "kept",
        "met", "ran", "won", "chose", "broke", "hid", "built", "heard", "held",
        "brought", "caught", "fought", "stood", "understood", "forgot", "spent",
        "sent", "paid", "swore", "wrote", "began", "drew", "grew", "threw",
    }
)
_IRREGULAR_THIRD_PERSON = {
    "are": "is",
    "were": "was",
    "have": "has",
    "do": "does",
    "go": "goes",
    "aren't": "isn't",
    "weren't": "wasn't",
    "haven't": "hasn't",
    "don't": "doesn't",
}
_CONTRACTION_SUFFIXES = {"re": "s", "ve": "s", "ll": "ll", "d": "d"}

_SUBJECT_VERB = re.compile(
    r"\b(they)\b(?!['’])(\s+)((?:(?:"
    + "|".join(re.escape(adverb) for adverb in sorted(_ADVERBS, key=len, reverse=True))
    + r"|[A-Za-z]+ly\b"
    + "".join(rf"(?<!\b{verb})" for verb in _LY_VERBS)
    + r")\s+)*)([A-Za-z]+(?:['’][a-z]+)?)",
    re.IGNORECASE,
)
_DEFAULT_WORDS = re.compile(
    r"\b(they['’](?:re|ve|ll|d)|themselves|themself|theirs|their|them|they)\b",
    re.IGNORECASE,
)


def _match_case(original: str, replacement: str) -> str:
    if len(original) > 1 and original.isupper():
        return replacement.upper()
    if original[:1].isupper():
        return capitalize(replacement)
    return replacement


def third_person(verb: str) -> str:
    """Conjugate a base-form verb for a singular subject."""
    lower = verb.lower().replace("’", "'")
    if lower in _IRREGULAR_THIRD_PERSON:
        return _match_case(verb, _IRREGULAR_THIRD_PERSON[lower])
    if lower in _UNCHANGED_VERBS or "'" in lower:
        return verb
    if lower.endswith("ed") and not lower.endswith("eed"):
        return verb
    if lower.endswith(("s", "sh", "ch", "x", "z", "o")):
        result = lower + "es"
    elif len(lower) > 1 and lower.endswith("y") and lower[-2] not in "aeiou":
        result = lower[:-1] + "ies"
    else:
        result = lower + "s"
    return _match_case(verb, result)


def _agree_verbs(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        subject, space, adverbs, verb = match.groups()
        return f"{subject}{space}{adverbs}{third_person(verb)}"

    return _SUBJECT_VERB.sub(replace, text)


def _default_word(word: str, pronouns: PronounSet) -> str:
    lower = word.lower().replace("’", "'")
    if lower.startswith("they'"):
        apostrophe = word[4]
        suffix = _CONTRACTION_SUFFIXES[lower[5:]]
        replacement = f"{pronouns.subject}{apostrophe}{suffix}"
    elif lower in ("themselves", "themself"):
        replacement = pronouns.reflexive
    elif lower == "theirs":
        replacement = pronouns.possessive_alone
    elif lower == "their":
        replacement = pronouns.possessive
    elif lower == "them":
        replacement = pronouns.object
    else:
        replacement = pronouns.subject
    return _match_case(word, replacement)


def resolve_default_pronouns(text: str, pronouns: PronounSet) -> str:
    """Rewrite default they/them wording for the given pronoun set."""
    if pronouns.is_plural:
        return text
    agreed = _agree_verbs(text)
    return _DEFAULT_WORDS.sub(lambda match: _default_word(match.group(0), pronouns), agreed)


def resolve_text(
    text: str,
    pronouns: PronounSet,
    names: Mapping[str, str] | None = None,
) -> str:
    """Resolve default wording first, then explicit tokens and named references.

    Named values are inserted last so their own wording is never rewritten.
    """
    return render_template(resolve_default_pronouns(text, pronouns), pronouns, names)


def find_placeholders(text: str) -> list[str]:
    """Return leftover placeholder tokens (or undefined-like words) in `text`."""
    return _LEFTOVER.findall(text)
