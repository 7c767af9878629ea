"""Story generation and field reroll controller.

A story is generated once into a `StoryInstance`. Every displayed field is
then read through `get_field` (cached, idempotent) and replaced through
`reroll_field`, which clears exactly the fields that alias or embed the value
that changed.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from uuid import uuid4

from story_forge.application.content_cache import ContentCache
from story_forge.core import vocabulary
from story_forge.core.beat_sheet import (
    BeatContext,
    beat_field_ids,
    beat_fields_depending_on,
    find_sub_element,
    generate_beat_text,
    parse_beat_field_id,
)
from story_forge.core.genre_elements import REDRAW_ATTEMPTS
from story_forge.core.genre_library import (
    GenreTemplate,
    genre_names,
    random_genre,
    reassemble_logline,
    render_element,
    resolve_genre,
    template_for,
)
from story_forge.core.identity_registry import IdentityRegistry
from story_forge.core.phrasing import with_article
from story_forge.core.selection import chance, pick
from story_forge.core.template_resolver import render_template
from story_forge.domain.models import COUNTERPART_ID, HERO_ID, MINOR_ID, NEMESIS_ID, StoryInstance

logger = logging.getLogger(__name__)

UNKNOWN_FIELD = "[unknown field]"
RANDOM_SELECTION = "random"

GENRE = "genre"
THEME = "theme"
HERO = "hero"
FLAW = "flaw"
NEMESIS = "nemesis"
B_STORY = "b_story"
MINOR_CHARACTER = "minor_character"
SETTING = "setting"
ACT2_SETTING = "act2_setting"
LOGLINE = "logline"

CORE_FIELD_IDS: tuple[str, ...] = (
    GENRE,
    THEME,
    HERO,
    FLAW,
    NEMESIS,
    B_STORY,
    MINOR_CHARACTER,
    SETTING,
    ACT2_SETTING,
    LOGLINE,
)

__all__ = [
    "CORE_FIELD_IDS",
    "UNKNOWN_FIELD",
    "RerollOutcome",
    "declared_dependents",
    "field_ids",
    "generate_story",
    "get_field",
    "reassemble_logline",
    "reroll",
    "reroll_field",
    "snapshot_fields",
]


@dataclass(frozen=True)
class RerollOutcome:
    """Result of one reroll: the new text and every cached field it cleared."""

    field_id: str
    text: str
    known: bool
    invalidated: tuple[str, ...]


def _select_genre(requested: str | None, rng: random.Random) -> str:
    name = (requested or "").strip()
    if not name or name.lower() == RANDOM_SELECTION:
        return random_genre(rng)
    for known in genre_names():
        if known.lower() == name.lower():
            return known
    return name


def _select_theme(requested: str | None, rng: random.Random) -> str:
    name = (requested or "").strip()
    if not name or name.lower() == RANDOM_SELECTION:
        return vocabulary.random_theme(rng)
    for known in vocabulary.THEMES:
        if known.lower() == name.lower():
            return known
    return name


def _template(instance: StoryInstance) -> GenreTemplate:
    return template_for(instance.genre)


def _redraw(draw: Callable[[], str], current: str | None) -> str:
    value = draw()
    for _ in range(REDRAW_ATTEMPTS - 1):
        if value != current:
            break
        value = draw()
    return value


def _draw_nemesis(instance: StoryInstance, template: GenreTemplate) -> None:
    """Draw a non-aliased nemesis: a named person or the genre's own antagonist."""
    rng = instance.rng
    if chance(vocabulary.PERSON_NEMESIS_CHANCE, rng=rng):
        identity = instance.registry.resolve(NEMESIS_ID)
        instance.nemesis = f"{identity.display_name}, {with_article(vocabulary.person_nemesis_role(rng))}"
        instance.nemesis_name = identity.display_name
        return
    if resolve_genre(instance.genre) is None:
        instance.nemesis = vocabulary.entity_nemesis(rng)
    else:
        instance.nemesis = template.nemesis_pool.draw(rng)
    instance.nemesis_name = instance.nemesis


def _sync_aliased_core(instance: StoryInstance, template: GenreTemplate) -> None:
    nemesis_key = template.alias_for(NEMESIS)
    if nemesis_key is not None:
        instance.nemesis = instance.elements.value(nemesis_key)
        instance.nemesis_name = instance.nemesis
    flaw_key = template.alias_for(FLAW)
    if flaw_key is not None:
        instance.flaw = instance.elements.value(flaw_key)


def _populate(instance: StoryInstance, genre: str, theme: str) -> None:
    """Fill every stored attribute of `instance` from scratch."""
    instance.registry.reset()
    instance.cache.clear()
    instance.genre = genre
    instance.theme = theme
    rng = instance.rng
    template = _template(instance)

    instance.registry.resolve(HERO_ID)
    instance.hero_descriptor = vocabulary.hero_descriptor(template.hero_adjectives.draw(rng), rng)
    instance.elements = template.generate_elements(rng)
    if template.alias_for(FLAW) is None:
        instance.flaw = vocabulary.theme_based_flaw(theme, rng)
    if template.alias_for(NEMESIS) is None:
        _draw_nemesis(instance, template)
    _sync_aliased_core(instance, template)

    instance.setting = vocabulary.act1_setting(rng)
    instance.act2_setting = vocabulary.different_act2_setting(instance.setting, rng)
    instance.b_story_type = vocabulary.b_story_type(genre, rng)
    instance.minor_character_type = vocabulary.minor_character_type(rng)
    instance.registry.resolve(COUNTERPART_ID)
    instance.registry.resolve(MINOR_ID)

    instance.hero = vocabulary.hero_field(instance.hero_identity.display_name, instance.hero_descriptor)
    instance.logline = reassemble_logline(instance)


def generate_story(
    genre: str | None = "Random",
    theme: str | None = "Random",
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> StoryInstance:
    """Generate a fresh story; `"Random"` (or empty) picks the genre or theme."""
    source = rng or random.Random(seed)
    genre_name = _select_genre(genre, source)
    theme_name = _select_theme(theme, source)
    if resolve_genre(genre_name) is None:
        logger.info("story.genre.fallback genre=%s", genre_name)
    instance = StoryInstance(
        story_id=f"story_{uuid4().hex[:12]}",
        genre=genre_name,
        theme=theme_name,
        registry=IdentityRegistry(source),
        cache=ContentCache(),
        rng=source,
    )
    _populate(instance, genre_name, theme_name)
    logger.info(
        "story.generated story_id=%s genre=%s theme=%s",
        instance.story_id,
        instance.genre,
        instance.theme,
    )
    return instance


def field_ids(instance: StoryInstance) -> tuple[str, ...]:
    """Every routable field id for this story, in display order."""
    return CORE_FIELD_IDS + _template(instance).display_fields + beat_field_ids()


def _is_known(instance: StoryInstance, field_id: str) -> bool:
    if field_id in CORE_FIELD_IDS or field_id in _template(instance).display_fields:
        return True
    return find_sub_element(field_id) is not None


def _character_field(instance: StoryInstance, character_id: str, kind: str) -> str:
    return f"{instance.registry.display_name_of(character_id)}, {with_article(kind)}"


def _beat_context(instance: StoryInstance) -> BeatContext:
    hero = instance.hero_identity
    pronouns = hero.pronouns
    return BeatContext(
        genre=instance.genre,
        theme=instance.theme,
        pronouns=pronouns,
        hero_name=hero.first_name,
        hero_full_name=hero.display_name,
        flaw=render_element(instance.flaw, pronouns),
        nemesis=render_element(instance.nemesis_name, pronouns),
        setting=instance.setting,
        act2_setting=instance.act2_setting,
        counterpart_name=instance.counterpart_identity.first_name,
        counterpart_field=_character_field(instance, COUNTERPART_ID, instance.b_story_type),
        minor_field=_character_field(instance, MINOR_ID, instance.minor_character_type),
    )


def _display_field_text(instance: StoryInstance, template: GenreTemplate, field_id: str) -> str:
    pronouns = instance.hero_identity.pronouns
    element_key = template.alias_for(field_id)
    if element_key is None:
        return render_element(template.standalone_fields[field_id].draw(instance.rng), pronouns)
    value = render_element(instance.elements.value(element_key), pronouns)
    pattern = template.field_formats.get(field_id)
    if pattern is None:
        return value
    return render_template(
        pattern, pronouns, {"value": value, "counterpart": instance.counterpart_identity.display_name}
    )


def _generate(instance: StoryInstance, field_id: str) -> str:
    """Produce the text for a known field from the instance's stored values."""
    pronouns = instance.hero_identity.pronouns
    if field_id == GENRE:
        return instance.genre
    if field_id == THEME:
        return instance.theme
    if field_id == HERO:
        return instance.hero
    if field_id == FLAW:
        return render_element(instance.flaw, pronouns)
    if field_id == NEMESIS:
        return render_element(instance.nemesis, pronouns)
    if field_id == B_STORY:
        return _character_field(instance, COUNTERPART_ID, instance.b_story_type)
    if field_id == MINOR_CHARACTER:
        return _character_field(instance, MINOR_ID, instance.minor_character_type)
    if field_id == SETTING:
        return instance.setting
    if field_id == ACT2_SETTING:
        return instance.act2_setting
    if field_id == LOGLINE:
        return instance.logline
    template = _template(instance)
    if field_id in template.display_fields:
        return _display_field_text(instance, template, field_id)
    keys = parse_beat_field_id(field_id)
    if keys is None:
        raise KeyError(field_id)
    return generate_beat_text(_beat_context(instance), keys[0], keys[1], instance.rng)


def get_field(instance: StoryInstance, field_id: str) -> str:
    """Cached text for `field_id`, generating and caching it on first read."""
    if not _is_known(instance, field_id):
        logger.warning("story.field.unknown field_id=%s", field_id)
        return UNKNOWN_FIELD
    cached = instance.cache.get(field_id)
    if cached is not None:
        return cached
    return instance.cache.put(field_id, _generate(instance, field_id))


def snapshot_fields(instance: StoryInstance) -> dict[str, str]:
    return {field_id: get_field(instance, field_id) for field_id in field_ids(instance)}


def _element_dependents(template: GenreTemplate, redrawn: frozenset[str]) -> set[str]:
    fields = set(template.fields_aliasing(redrawn))
    for core_field in (NEMESIS, FLAW):
        if core_field in fields:
            fields.update(beat_fields_depending_on(core_field))
    fields.add(LOGLINE)
    return fields


def _is_identity_affecting(template: GenreTemplate, field_id: str) -> bool:
    """Rerolls that recreate a registry entry (or the whole story) clear the whole cache."""
    if field_id in (HERO, GENRE, B_STORY, MINOR_CHARACTER):
        return True
    return field_id == NEMESIS and template.alias_for(NEMESIS) is None


def declared_dependents(instance: StoryInstance, field_id: str) -> tuple[str, ...]:
    """Fields that a reroll of `field_id` may change besides `field_id` itself."""
    template = _template(instance)
    if _is_identity_affecting(template, field_id):
        return tuple(other for other in field_ids(instance) if other != field_id)
    element_key = template.alias_for(field_id)
    if element_key is not None:
        dependents = _element_dependents(template, template.coupled_keys(element_key))
    elif field_id == LOGLINE:
        dependents = _element_dependents(template, frozenset(template.element_type.keys()))
    elif field_id == THEME:
        dependents = {*beat_fields_depending_on(THEME), LOGLINE}
    elif field_id in (FLAW, SETTING, ACT2_SETTING):
        dependents = set(beat_fields_depending_on(field_id))
    else:
        dependents = set()
    dependents.discard(field_id)
    ordered = field_ids(instance)
    return tuple(sorted(dependents, key=ordered.index))


def _invalidate(instance: StoryInstance, field_ids_to_clear: set[str] | tuple[str, ...]) -> list[str]:
    return instance.cache.invalidate(field_ids_to_clear)


def _reroll_identity(instance: StoryInstance, field_id: str) -> list[str]:
    """Identity-affecting reroll: update the stored value, then drop the whole cache."""
    template = _template(instance)
    rng = instance.rng
    cleared = sorted(instance.cache.snapshot())
    if field_id == GENRE:
        current = instance.genre
        candidates = [name for name in genre_names() if name != current] or list(genre_names())
        _populate(instance, pick(candidates, rng=rng), instance.theme)
        logger.info(
            "story.regenerated story_id=%s genre=%s theme=%s", instance.story_id, instance.genre, instance.theme
        )
        return cleared
    if field_id == HERO:
        current = instance.hero
        for _ in range(REDRAW_ATTEMPTS):
            instance.registry.forget(HERO_ID)
            instance.hero_descriptor = vocabulary.hero_descriptor(template.hero_adjectives.draw(rng), rng)
            instance.hero = vocabulary.hero_field(
                instance.hero_identity.display_name, instance.hero_descriptor
            )
            if instance.hero != current:
                break
    elif field_id == B_STORY:
        instance.registry.forget(COUNTERPART_ID)
        instance.b_story_type = _redraw(
            lambda: vocabulary.b_story_type(instance.genre, rng), instance.b_story_type
        )
        instance.registry.resolve(COUNTERPART_ID)
    elif field_id == MINOR_CHARACTER:
        instance.registry.forget(MINOR_ID)
        instance.minor_character_type = _redraw(
            lambda: vocabulary.minor_character_type(rng), instance.minor_character_type
        )
        instance.registry.resolve(MINOR_ID)
    else:
        instance.registry.forget(NEMESIS_ID)
        current = instance.nemesis
        for _ in range(REDRAW_ATTEMPTS):
            _draw_nemesis(instance, template)
            if instance.nemesis != current:
                break
    instance.cache.clear()
    instance.logline = reassemble_logline(instance)
    return cleared


def _reroll_element(instance: StoryInstance, template: GenreTemplate, element_key: str) -> list[str]:
    redrawn = template.coupled_keys(element_key)
    instance.elements = template.regenerate(element_key, instance.elements, instance.rng)
    _sync_aliased_core(instance, template)
    instance.logline = reassemble_logline(instance)
    return _invalidate(instance, _element_dependents(template, redrawn))


def _reroll_all_elements(instance: StoryInstance, template: GenreTemplate) -> list[str]:
    current = instance.elements
    for _ in range(REDRAW_ATTEMPTS):
        instance.elements = template.generate_elements(instance.rng)
        if instance.elements != current:
            break
    _sync_aliased_core(instance, template)
    instance.logline = reassemble_logline(instance)
    return _invalidate(instance, _element_dependents(template, frozenset(template.element_type.keys())))


def _reroll_stored(instance: StoryInstance, field_id: str) -> list[str]:
    """Reroll a core value stored on the instance; returns cleared dependents."""
    rng = instance.rng
    if field_id == THEME:
        instance.theme = vocabulary.random_theme(rng, exclude=instance.theme)
        instance.logline = reassemble_logline(instance)
        return _invalidate(instance, {*beat_fields_depending_on(THEME), LOGLINE})
    if field_id == FLAW:
        instance.flaw = _redraw(lambda: vocabulary.theme_based_flaw(instance.theme, rng), instance.flaw)
    elif field_id == SETTING:
        instance.setting = _redraw(
            lambda: vocabulary.different_act1_setting(instance.act2_setting, rng), instance.setting
        )
    elif field_id == ACT2_SETTING:
        instance.act2_setting = _redraw(
            lambda: vocabulary.different_act2_setting(instance.setting, rng), instance.act2_setting
        )
    return _invalidate(instance, set(declared_dependents(instance, field_id)))


def reroll(instance: StoryInstance, field_id: str) -> RerollOutcome:
    """Regenerate `field_id`, clear what depends on it, and cache the new text."""
    if not _is_known(instance, field_id):
        logger.warning("story.field.unknown field_id=%s", field_id)
        return RerollOutcome(field_id=field_id, text=UNKNOWN_FIELD, known=False, invalidated=())

    template = _template(instance)
    previous = instance.cache.get(field_id)
    element_key = template.alias_for(field_id)
    if _is_identity_affecting(template, field_id):
        cleared = _reroll_identity(instance, field_id)
    elif element_key is not None:
        cleared = _reroll_element(instance, template, element_key)
    elif field_id == LOGLINE:
        cleared = _reroll_all_elements(instance, template)
    elif field_id in CORE_FIELD_IDS:
        cleared = _reroll_stored(instance, field_id)
    else:
        # Standalone display fields and beats live only in the cache.
        instance.cache.invalidate([field_id])
        cleared = []

    if field_id in CORE_FIELD_IDS or element_key is not None:
        text = _generate(instance, field_id)
    else:
        text = _redraw(lambda: _generate(instance, field_id), previous)
    instance.cache.put(field_id, text)
    invalidated = tuple(sorted(set(cleared) - {field_id}))
    logger.info(
        "story.field.rerolled story_id=%s field_id=%s invalidated=%d",
        instance.story_id,
        field_id,
        len(invalidated),
    )
    return RerollOutcome(field_id=field_id, text=text, known=True, invalidated=invalidated)


def reroll_field(instance: StoryInstance, field_id: str) -> str:
    """Always regenerate `field_id` and return its new text."""
    return reroll(instance, field_id).text
