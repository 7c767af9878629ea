"""CLI entrypoint for generating a story outline in the terminal."""

from __future__ import annotations

import argparse
import json
import logging
import random

from story_forge.adapters.observability import configure_runtime_logging
from story_forge.application.story_service import (
    CORE_FIELD_IDS,
    generate_story,
    get_field,
    reroll,
    snapshot_fields,
)
from story_forge.core.beat_sheet import BEATS, beat_field_id
from story_forge.core.generation_audit import AuditReport, audit_story
from story_forge.core.genre_library import genre_names, template_for
from story_forge.domain.models import StoryInstance

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Define CLI flags for story generation."""
    parser = argparse.ArgumentParser(description="Generate a Save-the-Cat style story outline.")
    parser.add_argument("--genre", default="Random", help=f"One of: {', '.join(genre_names())}.")
    parser.add_argument("--theme", default="Random")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible story.")
    parser.add_argument("--beats", action="store_true", help="Also print the fifteen-beat sheet.")
    parser.add_argument(
        "--reroll",
        action="append",
        default=[],
        metavar="FIELD",
        help="Reroll a field after generating. Repeatable; applied in order.",
    )
    parser.add_argument("--json", action="store_true", help="Print the story as JSON.")
    parser.add_argument(
        "--audit",
        type=int,
        default=0,
        metavar="N",
        help="Generate N stories per genre and report unresolved placeholders instead.",
    )
    return parser


def _story_fields(instance: StoryInstance, *, include_beats: bool) -> dict[str, str]:
    field_ids = [*CORE_FIELD_IDS, *template_for(instance.genre).display_fields]
    if include_beats:
        field_ids.extend(
            beat_field_id(beat.name, sub.name) for beat in BEATS for sub in beat.sub_elements
        )
    return {field_id: get_field(instance, field_id) for field_id in field_ids}


def _print_story(instance: StoryInstance, fields: dict[str, str], *, include_beats: bool) -> None:
    print(f"{instance.genre} / {instance.theme}")
    print(f"logline: {fields['logline']}")
    for field_id in CORE_FIELD_IDS:
        if field_id not in ("genre", "theme", "logline"):
            print(f"  {field_id}: {fields[field_id]}")
    for field_id in template_for(instance.genre).display_fields:
        print(f"  {field_id}: {fields[field_id]}")
    if not include_beats:
        return
    for beat in BEATS:
        print(f"\n{beat.name} ({beat.act})")
        for sub in beat.sub_elements:
            print(f"  {sub.name}: {fields[beat_field_id(beat.name, sub.name)]}")


def run_audit(samples_per_genre: int, *, seed: int | None = None) -> AuditReport:
    """Generate stories across every genre and audit every field they produce."""
    rng = random.Random(seed)
    snapshots = []
    for genre in genre_names():
        for _ in range(samples_per_genre):
            instance = generate_story(genre, "Random", rng=rng)
            snapshots.append((instance.story_id, snapshot_fields(instance)))
    report = audit_story(snapshots)
    logger.info(
        "story.audit stories=%s fields=%s findings=%s",
        report.stories_checked,
        report.fields_checked,
        len(report.findings),
    )
    return report


def main(argv: list[str] | None = None) -> None:
    """Generate a story, apply rerolls, and print it."""
    configure_runtime_logging()
    parser = build_arg_parser()
    parsed = parser.parse_args(argv)

    if parsed.audit > 0:
        report = run_audit(int(parsed.audit), seed=parsed.seed)
        print(f"audited {report.stories_checked} stories, {report.fields_checked} fields")
        for finding in report.findings:
            print(f"  {finding.story_id} {finding.field_id}: {finding.reason} :: {finding.text}")
        if not report.passed:
            raise SystemExit(f"generation audit failed: {', '.join(report.reasons())}")
        print("generation audit passed")
        return

    instance = generate_story(str(parsed.genre), str(parsed.theme), seed=parsed.seed)
    for field_id in parsed.reroll:
        outcome = reroll(instance, str(field_id))
        if not outcome.known:
            parser.error(f"unknown field for reroll: {field_id}")

    fields = _story_fields(instance, include_beats=bool(parsed.beats))
    if parsed.json:
        payload = {"story_id": instance.story_id, "fields": fields}
        print(json.dumps(payload, indent=2))
        return
    _print_story(instance, fields, include_beats=bool(parsed.beats))


if __name__ == "__main__":
    main()
