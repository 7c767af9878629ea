"""Per-genre element sets, their wording pools, and draw recipes.

Element values use explicit pronoun tokens (`{subject}`, `{possessive}`, ...)
and are always rendered for the hero before display.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from story_forge.core.selection import PoolConfigurationError, WeightedPool
from story_forge.domain.models import ElementSet

# Redraw attempts before accepting a repeated value on reroll.
REDRAW_ATTEMPTS = 6


@dataclass(frozen=True)
class ElementGroup:
    """Element keys drawn together by one producer."""

    keys: tuple[str, ...]
    draw: Callable[[random.Random], tuple[str, ...]]

    def redraw(self, rng: random.Random, current: tuple[str, ...]) -> tuple[str, ...]:
        values = self.draw(rng)
        for _ in range(REDRAW_ATTEMPTS - 1):
            if values != current:
                break
            values = self.draw(rng)
        return values


def single(key: str, pool: WeightedPool[str]) -> ElementGroup:
    return ElementGroup(keys=(key,), draw=lambda rng: (pool.draw(rng),))


def paired(keys: tuple[str, str], pool: WeightedPool[tuple[str, str]]) -> ElementGroup:
    return ElementGroup(keys=keys, draw=pool.draw)


@dataclass(frozen=True)
class ElementRecipe:
    """How one genre draws and redraws its ElementSet."""

    element_type: type[ElementSet]
    groups: tuple[ElementGroup, ...]

    def __post_init__(self) -> None:
        declared = self.element_type.keys()
        covered = [key for group in self.groups for key in group.keys]
        if sorted(covered) != sorted(declared):
            raise PoolConfigurationError(
                f"{self.element_type.__name__} recipe covers {covered}, expected {list(declared)}."
            )

    def generate(self, rng: random.Random) -> ElementSet:
        values: dict[str, str] = {}
        for group in self.groups:
            values.update(zip(group.keys, group.draw(rng), strict=True))
        return self.element_type(**values)

    def group_for(self, element_key: str) -> ElementGroup:
        for group in self.groups:
            if element_key in group.keys:
                return group
        raise KeyError(element_key)

    def coupled_keys(self, element_key: str) -> frozenset[str]:
        return frozenset(self.group_for(element_key).keys)

    def regenerate(self, element_key: str, elements: ElementSet, rng: random.Random) -> ElementSet:
        group = self.group_for(element_key)
        current = tuple(elements.value(key) for key in group.keys)
        values = group.redraw(rng, current)
        return elements.with_values(**dict(zip(group.keys, values, strict=True)))


# Whydunit


@dataclass(frozen=True)
class WhydunitElements(ElementSet):
    mystery: str
    dark_turn: str


MYSTERIES = WeightedPool.uniform(
    (
        "a series of impossible murders", "a locked-room murder", "a string of ritualistic killings",
        "a copycat killer case", "a vanished witness", "a string of unexplained disappearances",
        "a decades-old conspiracy", "a web of lies and corruption", "a government cover-up",
        "a buried scandal", "a puzzle that defies logic", "a cold case that was never closed",
        "a murder with no body", "a victim who doesn't officially exist", "a perfect crime",
    )
)
DARK_TURNS = WeightedPool.uniform(
    (
        "it mirrors {possessive} own past",
        "it involves someone close to {object}",
        "it reveals {subject} {is} connected to the crime",
        "it implicates {possessive} family",
        "it ties back to {possessive} childhood",
        "it puts {object} in the killer's crosshairs",
        "it makes {object} the next target",
        "it threatens to expose {possessive} secrets",
        "it forces {object} to confront {possessive} demons",
        "it shows {subject} {has} been wrong all along",
        "it proves {possessive} mentor lied to {object}",
        "it forces {object} to choose between justice and loyalty",
        "it turns {possessive} own evidence against {object}",
    )
)
WHYDUNIT_RECIPE = ElementRecipe(
    element_type=WhydunitElements,
    groups=(single("mystery", MYSTERIES), single("dark_turn", DARK_TURNS)),
)


# Rites of Passage


@dataclass(frozen=True)
class RitesOfPassageElements(ElementSet):
    life_crisis: str
    wrong_way: str


LIFE_CRISES = WeightedPool.uniform(
    (
        "the death of a loved one", "a devastating divorce", "a career collapse",
        "a terminal diagnosis", "the loss of everything", "a midlife crisis",
        "a painful coming of age", "a betrayal by {possessive} closest friend",
        "a public failure", "an identity crisis", "a spiraling addiction", "a crisis of faith",
    )
)
WRONG_WAYS = WeightedPool.uniform(
    (
        "self-destruction", "denial", "running away", "lashing out at everyone",
        "numbing the pain", "blaming everyone else", "giving up",
        "refusing to change", "clinging to the past", "reckless thrill-seeking",
    )
)
RITES_OF_PASSAGE_RECIPE = ElementRecipe(
    element_type=RitesOfPassageElements,
    groups=(single("life_crisis", LIFE_CRISES), single("wrong_way", WRONG_WAYS)),
)


# Institutionalized


@dataclass(frozen=True)
class InstitutionalizedElements(ElementSet):
    group: str
    choice: str


OPPRESSIVE_GROUPS = WeightedPool.uniform(
    (
        "a powerful corporation", "a military academy", "a religious cult", "a family dynasty",
        "a political machine", "a criminal empire", "a totalitarian regime",
        "a secret society", "a strict boarding school", "an elite surgical residency",
        "a conformist small town",
    )
)
CHOICES = WeightedPool.uniform(
    (
        "conform or be destroyed", "survival or integrity", "obedience or exile",
        "safety or truth", "belonging or independence", "fitting in or being {reflexive}",
        "the mask or the truth", "loyalty or freedom", "duty or conscience",
        "family or justice", "the group or what's right", "tradition or change",
        "ambition or integrity",
    )
)
INSTITUTIONALIZED_RECIPE = ElementRecipe(
    element_type=InstitutionalizedElements,
    groups=(single("group", OPPRESSIVE_GROUPS), single("choice", CHOICES)),
)


# Superhero


@dataclass(frozen=True)
class SuperheroElements(ElementSet):
    power: str
    villain: str
    curse: str


POWERS = WeightedPool.uniform(
    (
        "superhuman strength", "super speed", "invulnerability", "regeneration",
        "the ability to fly", "teleportation", "phasing through walls",
        "fire manipulation", "lightning control", "telepathy", "telekinesis",
        "precognition", "shape-shifting", "time manipulation", "invisibility",
        "technopathy", "the power to heal any wound",
    )
)
SUPERHERO_VILLAINS = WeightedPool.uniform(
    (
        "a powerful supervillain", "a dark mirror of {reflexive}", "a government agency",
        "a rival hero", "a mad scientist", "an alien invasion", "a corrupt organization",
        "a nemesis from {possessive} past", "a world that fears {object}",
        "a rogue AI", "an ancient evil", "a criminal mastermind",
    )
)
CURSES = WeightedPool.uniform(
    (
        "isolating {object} from humanity",
        "making {object} feared by the people {subject} {is} sworn to protect",
        "destroying {possessive} normal life",
        "turning {object} into a weapon",
        "costing {object} every relationship {subject} {has}",
        "making {object} a target",
        "consuming {possessive} identity",
        "separating {object} from the people {subject} {has} always loved",
        "burning {object} out from the inside",
    )
)
SUPERHERO_RECIPE = ElementRecipe(
    element_type=SuperheroElements,
    groups=(single("power", POWERS), single("villain", SUPERHERO_VILLAINS), single("curse", CURSES)),
)


# Dude with a Problem


@dataclass(frozen=True)
class DudeWithAProblemElements(ElementSet):
    sudden_event: str
    stakes: str
    action: str
    escalation: str


SUDDEN_EVENTS = WeightedPool.uniform(
    (
        "a terrorist attack", "a deadly conspiracy", "a natural disaster", "a home invasion",
        "a kidnapping", "a plane crash", "a zombie outbreak", "a corporate cover-up gone deadly",
        "a wrongful accusation", "a case of mistaken identity", "a military coup",
        "a hijacking", "a citywide blackout",
    )
)
DUDE_STAKES = WeightedPool.uniform(
    (
        "{possessive} family", "innocent lives", "{possessive} city", "{possessive} country",
        "the world", "{possessive} loved ones", "everyone {subject} {has} ever cared about",
        "{possessive} own life", "{possessive} home", "{possessive} future",
    )
)
DUDE_ACTIONS = WeightedPool.uniform(
    (
        "fight to save", "battle to defend", "race to protect", "struggle to rescue",
        "scramble to save", "claw {possessive} way back to save",
        "push beyond {possessive} limits to save", "risk everything to save",
        "stop at nothing to protect", "overcome impossible odds to save", "defy fate to save",
        "move heaven and earth to save",
    )
)
ESCALATIONS = WeightedPool.uniform(
    (
        "before time runs out", "as the threat grows worse", "while the danger escalates",
        "before it's too late", "as the situation spirals out of control",
        "before all is lost", "while fighting an enemy {subject} can't see",
        "with no way out", "against overwhelming odds",
        "in a nightmare {subject} never saw coming",
    )
)
DUDE_WITH_A_PROBLEM_RECIPE = ElementRecipe(
    element_type=DudeWithAProblemElements,
    groups=(
        single("sudden_event", SUDDEN_EVENTS),
        single("stakes", DUDE_STAKES),
        single("action", DUDE_ACTIONS),
        single("escalation", ESCALATIONS),
    ),
)


# Fool Triumphant


@dataclass(frozen=True)
class FoolTriumphantElements(ElementSet):
    establishment: str
    underestimation: str


ESTABLISHMENTS = WeightedPool.uniform(
    (
        "the elite upper class", "a corrupt corporation", "a rigid institution",
        "the popular crowd", "a powerful family", "a prestigious academy",
        "a closed society", "the aristocracy", "the old guard", "the ruling elite",
        "the privileged few",
    )
)
UNDERESTIMATIONS = WeightedPool.uniform(
    (
        "naive innocence", "pure heart", "genuine kindness", "childlike wonder",
        "trusting nature", "simple faith", "honest streak", "humble charm",
        "outsider's eye", "unpolished manner", "rough edges", "unconventional thinking",
        "plainspoken honesty", "common sense",
    )
)
FOOL_TRIUMPHANT_RECIPE = ElementRecipe(
    element_type=FoolTriumphantElements,
    groups=(single("establishment", ESTABLISHMENTS), single("underestimation", UNDERESTIMATIONS)),
)


# Buddy Love


@dataclass(frozen=True)
class BuddyLoveElements(ElementSet):
    incompleteness: str
    completion: str
    situation: str
    complication: str


INCOMPLETENESS_PAIRS = WeightedPool.uniform(
    (
        ("emotional numbness", "teaches {object} to feel again"),
        ("rigid perfectionism", "shows {object} joy and spontaneity"),
        ("reckless impulsivity", "grounds {object} with patience"),
        ("blind ambition", "reminds {object} what truly matters"),
        ("haunted guilt", "helps {object} embrace the future"),
        ("deep mistrust", "proves that trust is possible"),
        ("bitter cynicism", "restores {possessive} faith in people"),
        ("prideful isolation", "shows {object} the value of vulnerability"),
        ("suffocating sense of duty", "teaches {object} to follow {possessive} heart"),
        ("paralyzing fear", "gives {object} the courage to live"),
        ("workaholic obsession", "shows {object} a life beyond achievement"),
        ("self-destructive anger", "teaches {object} peace"),
        ("crippling insecurity", "helps {object} see {possessive} own worth"),
        ("lonely independence", "shows {object} the strength in connection"),
    )
)
SITUATIONS = WeightedPool.uniform(
    (
        "a deadly mission", "a war", "a dangerous conspiracy", "a criminal empire",
        "a supernatural threat", "a family feud", "a corporate rivalry", "a bitter rivalry",
        "a class divide", "a race against time", "a terminal diagnosis",
        "a dangerous expedition", "a cross-country escape", "a perilous voyage",
    )
)
COMPLICATIONS = WeightedPool.uniform(
    (
        "from the opposite side of the tracks", "sworn to a rival family",
        "forbidden by society to love anyone", "bound by a terrible secret",
        "promised to someone else", "on the opposite side of the conflict",
        "divided by loyalty", "trapped by duty", "hiding who {subject} really {is}",
        "leaving town for good at the end of the summer",
    )
)
BUDDY_LOVE_RECIPE = ElementRecipe(
    element_type=BuddyLoveElements,
    groups=(
        paired(("incompleteness", "completion"), INCOMPLETENESS_PAIRS),
        single("situation", SITUATIONS),
        single("complication", COMPLICATIONS),
    ),
)


# Out of the Bottle


@dataclass(frozen=True)
class OutOfTheBottleElements(ElementSet):
    wish: str
    consequence: str
    lesson: str
    undo_method: str


WISHES = WeightedPool.uniform(
    (
        "unlimited power", "the ability to control time", "to control minds",
        "to see the future", "immortality", "to be someone else", "to be famous",
        "to be loved by everyone", "to be invisible", "a second chance at life",
        "to change the past", "to relive {possessive} glory days", "to never feel pain again",
        "to forget everything", "unlimited wealth", "eternal youth", "perfect happiness",
    )
)
CONSEQUENCES = WeightedPool.uniform(
    (
        "losing {possessive} humanity", "destroying everything {subject} {has} built",
        "becoming the villain", "losing {possessive} identity", "trapping {reflexive} forever",
        "hurting innocent people", "creating a worse reality", "corrupting {possessive} soul",
        "erasing {possessive} memories", "turning everyone against {object}",
        "becoming a monster", "losing {possessive} free will", "repeating the same day forever",
    )
)
LESSONS = WeightedPool.uniform(
    (
        "be careful what you wish for", "you can't escape yourself",
        "the grass isn't always greener", "power corrupts", "there are no shortcuts",
        "you must earn what you want", "some things can't be undone",
        "happiness comes from within", "perfection is a prison", "control is an illusion",
        "running from problems makes them worse", "wanting everything means losing everything",
    )
)
UNDO_METHODS = WeightedPool.uniform(
    (
        "undo the spell", "break the curse", "reverse the magic", "destroy the source",
        "return the power", "sacrifice everything {subject} {has} gained",
        "pay the ultimate price", "trade away {possessive} own dreams", "face the consequences",
        "admit {subject} made a terrible mistake", "embrace who {subject} really {is}",
        "find a way back", "make things right", "prove {subject} {has} changed",
        "complete an impossible task",
    )
)
OUT_OF_THE_BOTTLE_RECIPE = ElementRecipe(
    element_type=OutOfTheBottleElements,
    groups=(
        single("wish", WISHES),
        single("consequence", CONSEQUENCES),
        single("lesson", LESSONS),
        single("undo_method", UNDO_METHODS),
    ),
)


# Golden Fleece


@dataclass(frozen=True)
class GoldenFleeceElements(ElementSet):
    prize: str
    journey: str
    team: str
    challenge: str


PRIZES = WeightedPool.uniform(
    (
        "a legendary artifact", "a stolen fortune", "a cure for a deadly disease",
        "a missing loved one", "proof of {possessive} innocence", "a sacred relic",
        "a powerful weapon", "the truth about {possessive} past", "a priceless treasure",
        "a way home", "a second chance", "{possessive} stolen identity",
    )
)
JOURNEYS = WeightedPool.uniform(
    (
        "across a war-torn country", "through hostile territory", "across a frozen wasteland",
        "through the desert", "over treacherous mountains", "through a haunted forest",
        "across a lawless frontier", "through underground tunnels", "across the ocean",
        "down a raging river", "into the depths of space", "through time itself",
        "into the criminal underworld", "through the corridors of power",
    )
)
TEAMS = WeightedPool.uniform(
    (
        "a ragtag team", "a group of misfits", "a motley crew", "a band of outcasts",
        "unlikely allies", "a desperate crew", "former enemies", "a dysfunctional family",
        "a team of specialists", "seasoned veterans", "reluctant heroes",
        "prisoners on a mission", "volunteers with nothing to lose",
    )
)
CHALLENGES = WeightedPool.uniform(
    (
        "battling rivals who want it for themselves",
        "facing betrayal from within {possessive} own ranks",
        "racing against a rival team",
        "surviving deadly traps set by ancient guardians",
        "confronting the truth about why {subject} {is} really after it",
        "giving up what matters most to {object}",
        "proving {subject} {is} worthy of the prize",
        "discovering that the journey matters more than the destination",
        "learning that the prize comes at a terrible cost",
    )
)
GOLDEN_FLEECE_RECIPE = ElementRecipe(
    element_type=GoldenFleeceElements,
    groups=(
        single("prize", PRIZES),
        single("journey", JOURNEYS),
        single("team", TEAMS),
        single("challenge", CHALLENGES),
    ),
)


# Monster in the House


@dataclass(frozen=True)
class MonsterInTheHouseElements(ElementSet):
    monster: str
    house: str
    sin: str
    stakes: str


MONSTERS = WeightedPool.uniform(
    (
        "a deadly creature", "a supernatural entity", "a virus outbreak", "a killer AI",
        "a parasitic organism", "a possessed object", "a swarm of creatures",
        "a malevolent spirit", "a mutated beast", "an alien predator", "a demonic force",
        "a sentient disease",
    )
)
HOUSES = WeightedPool.uniform(
    (
        "an isolated mansion", "a remote research facility", "an underground bunker",
        "a lighthouse", "a mountain cabin", "an abandoned hospital", "a forgotten monastery",
        "a cruise ship", "a space station", "a submarine", "a small town",
        "a college campus", "a summer camp", "a resort hotel", "an arctic station",
    )
)
SINS = WeightedPool.uniform(
    (
        "reckless ambition", "greed", "curiosity", "arrogance", "negligence", "hubris",
        "lust for power", "forbidden experiments", "meddling with nature", "broken promise",
    )
)
MONSTER_STAKES = WeightedPool.uniform(
    (
        "save {possessive} family from certain death",
        "rescue a group of strangers before it's too late",
        "protect the children in {possessive} care",
        "save {possessive} colleagues from a gruesome fate",
        "escape with the survivors before dawn",
        "find a cure before everyone dies",
        "stop the spread before it reaches the mainland",
        "destroy the threat before it multiplies",
        "seal the evil away before it consumes everyone",
        "get everyone out alive",
    )
)
MONSTER_IN_THE_HOUSE_RECIPE = ElementRecipe(
    element_type=MonsterInTheHouseElements,
    groups=(
        single("monster", MONSTERS),
        single("house", HOUSES),
        single("sin", SINS),
        single("stakes", MONSTER_STAKES),
    ),
)


# Used for genres outside the registry.
@dataclass(frozen=True)
class GenericElements(ElementSet):
    pass


GENERIC_RECIPE = ElementRecipe(element_type=GenericElements, groups=())

RECIPES: Mapping[str, ElementRecipe] = {
    "Whydunit": WHYDUNIT_RECIPE,
    "Rites of Passage": RITES_OF_PASSAGE_RECIPE,
    "Institutionalized": INSTITUTIONALIZED_RECIPE,
    "Superhero": SUPERHERO_RECIPE,
    "Dude with a Problem": DUDE_WITH_A_PROBLEM_RECIPE,
    "Fool Triumphant": FOOL_TRIUMPHANT_RECIPE,
    "Buddy Love": BUDDY_LOVE_RECIPE,
    "Out of the Bottle": OUT_OF_THE_BOTTLE_RECIPE,
    "Golden Fleece": GOLDEN_FLEECE_RECIPE,
    "Monster in the House": MONSTER_IN_THE_HOUSE_RECIPE,
}
