"""Audit generated story text for unresolved placeholders and malformed sentences."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from story_forge.core.phrasing import as_sentence
from story_forge.core.template_resolver import find_placeholders

SENTENCE_FIELDS: frozenset[str] = frozenset({"logline"})
_SENTENCE_PREFIXES: tuple[str, ...] = ("beat_",)


@dataclass(frozen=True)
class AuditFinding:
    """One problem found in one field of one story."""

    story_id: str
    field_id: str
    reason: str
    text: str


@dataclass(frozen=True)
class AuditReport:
    stories_checked: int
    fields_checked: int
    findings: tuple[AuditFinding, ...]

    @property
    def passed(self) -> bool:
        return not self.findings

    def reasons(self) -> list[str]:
        return sorted({finding.reason for finding in self.findings})


def _expects_sentence(field_id: str) -> bool:
    return field_id in SENTENCE_FIELDS or field_id.startswith(_SENTENCE_PREFIXES)


def audit_fields(story_id: str, fields: Mapping[str, str]) -> list[AuditFinding]:
    """Check one story's field snapshot."""
    findings: list[AuditFinding] = []
    for field_id, text in fields.items():
        if not text.strip():
            findings.append(AuditFinding(story_id, field_id, "empty_text", text))
            continue
        for token in find_placeholders(text):
            findings.append(AuditFinding(story_id, field_id, f"placeholder:{token}", text))
        if _expects_sentence(field_id) and as_sentence(text) != text:
            findings.append(AuditFinding(story_id, field_id, "not_a_sentence", text))
    return findings


def audit_story(snapshots: Iterable[tuple[str, Mapping[str, str]]]) -> AuditReport:
    """Aggregate findings across `(story_id, fields)` snapshots."""
    findings: list[AuditFinding] = []
    stories = 0
    field_count = 0
    for story_id, fields in snapshots:
        stories += 1
        field_count += len(fields)
        findings.extend(audit_fields(story_id, fields))
    return AuditReport(stories_checked=stories, fields_checked=field_count, findings=tuple(findings))
