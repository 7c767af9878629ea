"""Genre template registry: element recipes, logline assemblers, and field routing."""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Final

from story_forge.core.genre_elements import GENERIC_RECIPE, RECIPES, ElementRecipe
from story_forge.core.genre_flavor import DEFAULT_FLAVOR, FLAVORS, GenreFlavor
from story_forge.core.phrasing import with_article
from story_forge.core.selection import WeightedPool, pick
from story_forge.core.template_resolver import render_template
from story_forge.domain.models import Cast, ElementSet, PronounSet, StoryInstance
from story_forge.domain.ports import ElementGenerator, ElementRegenerator, LoglineAssembler

FALLBACK_LOGLINE: Final[str] = "{Hero} must overcome {possessive} challenges to achieve {possessive} goal."
DISPLAY_FIELD_COUNT: Final[int] = 3


class GenreRegistryError(RuntimeError):
    """Raised when a genre record is incomplete or inconsistent."""


@dataclass(frozen=True)
class GenreTemplate:
    """Everything needed to generate, reroll, and assemble one genre."""

    name: str
    description: str
    element_type: type[ElementSet]
    generate_elements: ElementGenerator
    regenerate: ElementRegenerator
    coupled_keys: Callable[[str], frozenset[str]]
    assemble: LoglineAssembler
    display_fields: tuple[str, ...]
    field_aliases: Mapping[str, str]
    flavor: GenreFlavor
    field_formats: Mapping[str, str] = field(default_factory=dict)

    @property
    def standalone_fields(self) -> Mapping[str, WeightedPool[str]]:
        return self.flavor.standalone_fields

    @property
    def hero_adjectives(self) -> WeightedPool[str]:
        return self.flavor.hero_adjectives

    @property
    def nemesis_pool(self) -> WeightedPool[str]:
        return self.flavor.nemesis_pool

    @property
    def catalysts(self) -> WeightedPool[str]:
        return self.flavor.catalysts

    @property
    def midpoints(self) -> WeightedPool[str]:
        return self.flavor.midpoints

    def alias_for(self, field_id: str) -> str | None:
        return self.field_aliases.get(field_id)

    def fields_aliasing(self, element_keys: frozenset[str]) -> tuple[str, ...]:
        return tuple(field_id for field_id, key in self.field_aliases.items() if key in element_keys)


def render_element(value: str, pronouns: PronounSet) -> str:
    """Element values carry explicit tokens only, so default wording is left alone."""
    return render_template(value, pronouns)


def _rendered(cast: Cast, elements: ElementSet) -> dict[str, str]:
    pronouns = cast.hero.pronouns
    return {key: render_element(value, pronouns) for key, value in elements.as_dict().items()}


def _assemble_whydunit(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"Obsessed by {p.possessive} need for the truth, {cast.hero.display_name} must solve "
        f"{values['mystery']} before {values['dark_turn']}."
    )


def _assemble_rites_of_passage(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"Facing {values['life_crisis']}, {cast.hero.display_name} spirals into {values['wrong_way']} "
        f"and must discover {theme.lower()} to overcome {p.possessive} worst enemy: {p.reflexive}."
    )


def _assemble_institutionalized(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"When {cast.hero.display_name} challenges {values['group']}, {p.possessive} rebellious "
        f"nature forces {p.object} to choose: {values['choice']}."
    )


def _assemble_superhero(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"Burdened by {p.possessive} gift, {cast.hero.display_name} must use {values['power']} to stop "
        f"{values['villain']}, even though the same power risks {values['curse']}."
    )


def _assemble_dude_with_a_problem(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"When {cast.hero.display_name} is caught in {values['sudden_event']}, {p.subject} must "
        f"{values['action']} {values['stakes']} {values['escalation']}."
    )


def _assemble_fool_triumphant(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    descriptor = with_article(cast.hero_descriptor) if cast.hero_descriptor else "an underdog"
    return (
        f"{cast.hero.display_name}, {descriptor}, must outwit {values['establishment']} and prove "
        f"{p.possessive} worth without losing the {values['underestimation']} that makes "
        f"{p.object} a target."
    )


def _assemble_buddy_love(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    contracted = f"{p.subject}'re" if p.is_plural else f"{p.subject}'s"
    return (
        f"Despite {p.possessive} {values['incompleteness']}, {cast.hero.display_name} must overcome "
        f"{values['situation']} to be with {cast.counterpart.display_name}, the only person who "
        f"{values['completion']}, even though {contracted} {values['complication']}."
    )


def _wish_phrase(wish: str) -> str:
    if wish.startswith("to "):
        return f"to wish {wish}"
    return f"to wish for {wish}"


def _assemble_out_of_the_bottle(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"When {cast.hero.display_name}'s desire leads {p.object} {_wish_phrase(values['wish'])}, "
        f"{p.subject} must {values['undo_method']} before {values['consequence']}."
    )


def _assemble_golden_fleece(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"Driven by {p.possessive} obsession, {cast.hero.display_name} must lead {values['team']} "
        f"{values['journey']} to retrieve {values['prize']}, {values['challenge']}."
    )


def _assemble_monster_in_the_house(cast: Cast, elements: ElementSet, theme: str) -> str:
    values = _rendered(cast, elements)
    p = cast.hero.pronouns
    return (
        f"When {cast.hero.display_name} unleashes {values['monster']} in {values['house']} through "
        f"{p.possessive} {values['sin']}, {p.subject} must {values['stakes']}."
    )


def _assemble_fallback(cast: Cast, elements: ElementSet, theme: str) -> str:
    return render_template(FALLBACK_LOGLINE, cast.hero.pronouns, {"hero": cast.hero.display_name})


def _template(
    name: str,
    recipe: ElementRecipe,
    assemble: LoglineAssembler,
    display_fields: tuple[str, ...],
    field_aliases: Mapping[str, str],
    field_formats: Mapping[str, str] | None = None,
) -> GenreTemplate:
    flavor = FLAVORS[name]
    return GenreTemplate(
        name=name,
        description=flavor.description,
        element_type=recipe.element_type,
        generate_elements=recipe.generate,
        regenerate=recipe.regenerate,
        coupled_keys=recipe.coupled_keys,
        assemble=assemble,
        display_fields=display_fields,
        field_aliases=field_aliases,
        flavor=flavor,
        field_formats=field_formats or {},
    )


GENRE_REGISTRY: Mapping[str, GenreTemplate] = {
    template.name: template
    for template in (
        _template(
            "Whydunit",
            RECIPES["Whydunit"],
            _assemble_whydunit,
            ("The Detective", "The Secret", "The Dark Turn"),
            {"The Secret": "mystery", "The Dark Turn": "dark_turn"},
        ),
        _template(
            "Rites of Passage",
            RECIPES["Rites of Passage"],
            _assemble_rites_of_passage,
            ("The Life Problem", "The Wrong Way", "The Acceptance"),
            {"The Life Problem": "life_crisis", "The Wrong Way": "wrong_way"},
        ),
        _template(
            "Institutionalized",
            RECIPES["Institutionalized"],
            _assemble_institutionalized,
            ("The Group", "The Choice", "The Sacrifice"),
            {"The Group": "group", "The Choice": "choice", "nemesis": "group"},
        ),
        _template(
            "Superhero",
            RECIPES["Superhero"],
            _assemble_superhero,
            ("The Power", "The Nemesis", "The Curse"),
            {"The Power": "power", "The Nemesis": "villain", "The Curse": "curse", "nemesis": "villain"},
        ),
        _template(
            "Dude with a Problem",
            RECIPES["Dude with a Problem"],
            _assemble_dude_with_a_problem,
            ("The Innocent Hero", "The Sudden Event", "The Life or Death Battle"),
            {
                "The Sudden Event": "sudden_event",
                "The Life or Death Battle": "stakes",
                "nemesis": "sudden_event",
            },
            {"The Life or Death Battle": "save {value}"},
        ),
        _template(
            "Fool Triumphant",
            RECIPES["Fool Triumphant"],
            _assemble_fool_triumphant,
            ("The Fool", "The Establishment", "The Transmutation"),
            {
                "The Establishment": "establishment",
                "The Transmutation": "underestimation",
                "nemesis": "establishment",
            },
        ),
        _template(
            "Buddy Love",
            RECIPES["Buddy Love"],
            _assemble_buddy_love,
            ("The Incomplete Hero", "The Counterpart", "The Complication"),
            {
                "The Incomplete Hero": "incompleteness",
                "The Counterpart": "completion",
                "The Complication": "complication",
                "nemesis": "situation",
                "flaw": "incompleteness",
            },
            {"The Counterpart": "{counterpart}, who {value}"},
        ),
        _template(
            "Out of the Bottle",
            RECIPES["Out of the Bottle"],
            _assemble_out_of_the_bottle,
            ("The Wish", "The Spell", "The Lesson"),
            {"The Wish": "wish", "The Spell": "consequence", "The Lesson": "lesson"},
        ),
        _template(
            "Golden Fleece",
            RECIPES["Golden Fleece"],
            _assemble_golden_fleece,
            ("The Road", "The Team", "The Prize"),
            {"The Road": "journey", "The Team": "team", "The Prize": "prize"},
        ),
        _template(
            "Monster in the House",
            RECIPES["Monster in the House"],
            _assemble_monster_in_the_house,
            ("The Monster", "The House", "The Sin"),
            {"The Monster": "monster", "The House": "house", "The Sin": "sin", "nemesis": "monster"},
        ),
    )
}

FALLBACK_TEMPLATE: Final[GenreTemplate] = GenreTemplate(
    name="Generic",
    description=DEFAULT_FLAVOR.description,
    element_type=GENERIC_RECIPE.element_type,
    generate_elements=GENERIC_RECIPE.generate,
    regenerate=GENERIC_RECIPE.regenerate,
    coupled_keys=GENERIC_RECIPE.coupled_keys,
    assemble=_assemble_fallback,
    display_fields=(),
    field_aliases={},
    flavor=DEFAULT_FLAVOR,
)


def validate_genre_registry(registry: Mapping[str, GenreTemplate]) -> None:
    """Fail fast on the first incomplete or inconsistent genre record."""
    if not registry:
        raise GenreRegistryError("Genre registry is empty.")
    for name, template in registry.items():
        if name != template.name:
            raise GenreRegistryError(f"Genre registered as {name!r} is named {template.name!r}.")
        for attribute in ("generate_elements", "regenerate", "assemble"):
            if not callable(getattr(template, attribute, None)):
                raise GenreRegistryError(f"{name}: {attribute} is not callable.")
        if len(template.display_fields) != DISPLAY_FIELD_COUNT:
            raise GenreRegistryError(
                f"{name}: expected {DISPLAY_FIELD_COUNT} display fields, found {len(template.display_fields)}."
            )
        element_keys = set(template.element_type.keys())
        for field_id, element_key in template.field_aliases.items():
            if element_key not in element_keys:
                raise GenreRegistryError(f"{name}: {field_id!r} aliases unknown element {element_key!r}.")
        for display_field in template.display_fields:
            aliased = display_field in template.field_aliases
            standalone = display_field in template.standalone_fields
            if aliased == standalone:
                raise GenreRegistryError(
                    f"{name}: {display_field!r} must be exactly one of aliased or standalone."
                )
        for field_id in template.field_formats:
            if field_id not in template.field_aliases:
                raise GenreRegistryError(f"{name}: format for {field_id!r} has no alias.")
        pools: dict[str, WeightedPool[str]] = {
            "hero_adjectives": template.hero_adjectives,
            "nemesis_pool": template.nemesis_pool,
            "catalysts": template.catalysts,
            "midpoints": template.midpoints,
            **template.standalone_fields,
        }
        for pool_name, pool in pools.items():
            if len(pool) == 0:
                raise GenreRegistryError(f"{name}: pool {pool_name!r} is empty.")


validate_genre_registry(GENRE_REGISTRY)


def genre_names() -> tuple[str, ...]:
    return tuple(GENRE_REGISTRY)


def resolve_genre(name: str) -> GenreTemplate | None:
    return GENRE_REGISTRY.get(name)


def template_for(name: str) -> GenreTemplate:
    """Registered template for `name`, or the generic fallback."""
    return resolve_genre(name) or FALLBACK_TEMPLATE


def random_genre(rng: random.Random) -> str:
    return pick(genre_names(), rng=rng)


def generate_logline(genre: str, cast: Cast, elements: ElementSet, theme: str) -> str:
    return template_for(genre).assemble(cast, elements, theme)


def reassemble_logline(instance: StoryInstance) -> str:
    """Rebuild the logline from the instance's current elements and identities."""
    return generate_logline(instance.genre, instance.cast(), instance.elements, instance.theme)
