"""Wording pools and generators for the core story fields.

Pools are plain data consumed through `WeightedPool`; swapping their contents
never requires engine changes.
"""

from __future__ import annotations

import random

from story_forge.core.phrasing import with_article
from story_forge.core.selection import WeightedPool, chance, pick, pick_generator

THEMES: tuple[str, ...] = (
    "Forgiveness",
    "Love",
    "Acceptance",
    "Faith",
    "Fear",
    "Trust",
    "Survival",
    "Selflessness",
    "Responsibility",
    "Redemption",
)

FEMALE_FIRST_NAMES: tuple[str, ...] = (
    "Kimberly", "Maya", "Elena", "Priya", "Grace", "Nadia", "Rosa", "Hannah",
    "Imani", "Chloe", "Sofia", "Leah", "Mei", "Amara", "Olivia", "Tessa",
    "Ingrid", "Yasmin", "Beatrice", "Lucia", "Naomi", "Harriet", "Zara", "Keiko",
)
MALE_FIRST_NAMES: tuple[str, ...] = (
    "Marcus", "Daniel", "Omar", "Felix", "Theo", "Rafael", "Hiro", "Samuel",
    "Caleb", "Jonah", "Andre", "Victor", "Kwame", "Lucas", "Arjun", "Henry",
    "Mateo", "Elliot", "Dmitri", "Isaac", "Tobias", "Wesley", "Ravi", "Gideon",
)
NEUTRAL_FIRST_NAMES: tuple[str, ...] = (
    "Alex", "Jordan", "Riley", "Morgan", "Casey", "Quinn", "Avery", "Rowan",
    "Sage", "Emerson", "Harper", "Kai", "Reese", "Skyler", "Dakota", "Ellis",
)
SURNAMES: tuple[str, ...] = (
    "Smith", "Chen", "Okafor", "Alvarez", "Novak", "Haddad", "Kowalski", "Nguyen",
    "Brennan", "Moreau", "Tanaka", "Lindqvist", "Osei", "Castillo", "Petrov",
    "Whitaker", "Romano", "Abernathy", "Delacroix", "Fitzgerald", "Mwangi",
    "Sorensen", "Vasquez", "Holloway", "Achebe", "Kaplan", "Yilmaz", "Reyes",
)

_JOBS = WeightedPool.uniform(
    (
        "barista", "accountant", "marine biologist", "librarian", "paramedic",
        "software engineer", "high school teacher", "tax auditor", "chef",
        "night-shift nurse", "wedding planner", "insurance adjuster", "architect",
        "court stenographer", "forensic scientist", "park ranger", "journalist",
        "session musician", "air traffic controller", "locksmith", "veterinarian",
        "real estate agent", "museum curator", "hotel concierge", "electrician",
        "flight attendant", "public defender", "astronomer", "tattoo artist",
        "stand-up comedian", "dental hygienist", "postal worker", "art restorer",
        "investment banker", "crossword editor", "undertaker", "ice cream truck driver",
    )
)
_KID_AGES = WeightedPool.uniform(
    ("ten-year-old", "twelve-year-old", "teenage", "middle school", "preteen", "eleven-year-old")
)
_KID_DESCRIPTORS = WeightedPool.uniform(
    (
        "curious", "bookish", "mischievous", "fearless", "anxious", "precocious",
        "misunderstood", "imaginative", "stubborn", "quiet",
    )
)
_SUPERNATURAL_BEINGS = WeightedPool.uniform(
    (
        "vampire", "ghost", "witch", "werewolf", "android", "fallen angel",
        "time traveler", "shapeshifter", "mermaid", "demigod", "necromancer",
        "clone", "genie", "immortal", "telepath",
    )
)
_SUPERNATURAL_ADJECTIVES = WeightedPool.uniform(
    ("reformed", "exiled", "ancient", "newly-turned", "reluctant", "cursed", "forgotten")
)
_ANIMALS = WeightedPool.uniform(
    (
        "dog", "cat", "raccoon", "owl", "fox", "horse", "octopus", "parrot",
        "otter", "crow", "bear", "goat",
    )
)
_ANIMAL_ADJECTIVES = WeightedPool.uniform(
    ("loyal", "clever", "scrappy", "noble", "mischievous", "grumpy", "brave", "wily")
)

# Category weights: job, kid, supernatural being, animal.
IDENTITY_CATEGORY_WEIGHTS: tuple[float, ...] = (70, 15, 10, 5)

SECONDARY_ADJECTIVES = WeightedPool.uniform(
    (
        "cynical", "cautious", "burnt-out", "grumpy", "bitter", "stubborn",
        "impulsive", "insecure", "jaded", "timid", "charismatic", "resourceful",
        "eccentric", "pragmatic", "meticulous", "restless", "sarcastic", "earnest",
    )
)
SECONDARY_ADJECTIVE_CHANCE = 0.3

DEFAULT_HERO_ADJECTIVES = WeightedPool.uniform(
    (
        "determined", "troubled", "driven", "conflicted", "ambitious",
        "reluctant", "desperate", "haunted", "resilient", "complicated",
    )
)

THEME_FLAWS: dict[str, WeightedPool[str]] = {
    "Forgiveness": WeightedPool.uniform(
        (
            "grudge-holding", "self-loathing", "inability to apologize", "blame-shifting",
            "vengefulness", "refusal to forget", "victim mentality", "rigid moralism",
        )
    ),
    "Love": WeightedPool.uniform(
        (
            "fear of intimacy", "selfishness", "possessiveness", "jealousy",
            "codependence", "workaholism", "emotional guardedness", "people-pleasing",
        )
    ),
    "Acceptance": WeightedPool.uniform(
        (
            "stubborn denial", "perfectionism", "need for control", "nostalgia",
            "black-and-white thinking", "avoidance", "arrogance", "pessimism",
        )
    ),
    "Faith": WeightedPool.uniform(
        (
            "cynicism", "nihilism", "need for proof", "hopelessness",
            "excessive self-reliance", "fear of the unknown", "jadedness", "paranoia",
        )
    ),
    "Fear": WeightedPool.uniform(
        (
            "cowardice", "excessive caution", "fear of failure", "conflict avoidance",
            "indecisiveness", "self-sabotage", "conformity", "anxiety",
        )
    ),
    "Trust": WeightedPool.uniform(
        (
            "distrust", "secrecy", "loyalty testing", "fear of vulnerability",
            "micromanagement", "suspicion", "naivety", "deceitfulness",
        )
    ),
    "Survival": WeightedPool.uniform(
        (
            "defeatism", "recklessness", "apathy", "refusal to adapt",
            "panic under pressure", "greed", "over-dependence", "complacency",
        )
    ),
    "Selflessness": WeightedPool.uniform(
        (
            "greed", "vanity", "self-absorption", "hedonism",
            "excessive ambition", "entitlement", "stinginess", "indifference",
        )
    ),
    "Responsibility": WeightedPool.uniform(
        (
            "irresponsibility", "immaturity", "negligence", "procrastination",
            "fear of commitment", "refusal to lead", "unreliability", "aimlessness",
        )
    ),
    "Redemption": WeightedPool.uniform(
        (
            "inability to admit fault", "self-destruction", "denial", "bitterness",
            "refusal to change", "manipulativeness", "vindictiveness", "shame",
        )
    ),
}
GENERAL_FLAWS = WeightedPool.uniform(
    ("pride", "stubbornness", "selfishness", "cowardice", "impatience", "dishonesty")
)
FLAW_INTENSIFIERS = WeightedPool.uniform(
    (
        "deep-seated", "crippling", "chronic", "debilitating", "overwhelming",
        "consuming", "paralyzing", "profound", "destructive", "lifelong",
    )
)
FLAW_INTENSIFIER_CHANCE = 0.7

PERSON_NEMESIS_ADJECTIVES = WeightedPool.uniform(
    (
        "charismatic", "deceitful", "brilliant", "ruthless", "fanatical", "corrupt",
        "vain", "calculating", "vengeful", "manipulative", "megalomaniac", "petty",
    )
)
PERSON_NEMESIS_ROLES = WeightedPool.uniform(
    (
        "CEO", "government agent", "cult leader", "rival scientist", "family matriarch",
        "former mentor", "crime boss", "tech mogul", "military commander",
        "prosecutor", "media tycoon", "business partner",
    )
)
ENTITY_NEMESIS_ADJECTIVES = WeightedPool.uniform(
    ("shadowy", "ancient", "faceless", "sprawling", "secretive", "unseen", "omnipresent")
)
ENTITY_NEMESIS_KINDS = WeightedPool.uniform(
    (
        "corporation", "government agency", "conspiracy", "AI system",
        "secret society", "criminal organization", "supernatural entity",
        "alien intelligence",
    )
)
PERSON_NEMESIS_CHANCE = 0.3

ACT1_SETTINGS = WeightedPool.uniform(
    (
        "cramped studio apartment", "suburban cul-de-sac", "fluorescent-lit office park",
        "dying mill town", "crowded city diner", "family farmhouse",
        "coastal fishing village", "overbooked hospital ward", "strip-mall dental practice",
        "university dormitory", "rain-soaked trailer park", "high-rise condo",
    )
)
ACT2_SETTINGS = WeightedPool.uniform(
    (
        "underground resistance camp", "glittering world of high society",
        "abandoned research station", "lawless frontier town", "royal court",
        "secret academy", "war-torn border zone", "floating casino",
        "derelict space station", "parallel dimension", "criminal underworld",
        "mountain monastery", "high-school reunion", "family dinner",
    )
)

B_STORY_TYPES = WeightedPool.uniform(
    (
        "sarcastic informant", "charming rival", "riddling mentor", "childhood friend",
        "sentient AI", "grumpy teenager", "idealistic rookie", "estranged sibling",
        "therapist", "talking animal", "mysterious stranger", "wise elder", "ex-lover",
    )
)
PARTNER_UNIQUENESS = WeightedPool.uniform(
    (
        "completely opposite", "forbidden", "unexpected", "unconventional",
        "sworn", "impossible", "extraordinary", "infuriating",
    )
)
PARTNER_KINDS = WeightedPool.uniform(
    ("rival", "enemy", "stranger", "outsider", "counterpart", "foil", "mirror image")
)
MINOR_CHARACTER_TYPES = WeightedPool.uniform(
    (
        "barista who remembers everyone's order", "janitor who has worked there thirty years",
        "cab driver who has seen it all", "street vendor with a philosophy degree",
        "old librarian who quotes poetry", "cynical bartender", "late-night radio DJ",
        "elderly neighbor who bakes too much", "precocious niece", "hair stylist",
        "mechanic who talks about life like it's an engine", "pharmacist who notices patterns",
        "chatty rideshare driver", "grumpy security guard with a soft side",
    )
)


def job(rng: random.Random) -> str:
    return _JOBS.draw(rng)


def kid(rng: random.Random) -> str:
    return f"{_KID_DESCRIPTORS.draw(rng)} {_KID_AGES.draw(rng)} kid"


def supernatural_being(rng: random.Random) -> str:
    return f"{_SUPERNATURAL_ADJECTIVES.draw(rng)} {_SUPERNATURAL_BEINGS.draw(rng)}"


def animal(rng: random.Random) -> str:
    return f"{_ANIMAL_ADJECTIVES.draw(rng)} {_ANIMALS.draw(rng)}"


def hero_identity(rng: random.Random) -> str:
    """Two-level draw: category by weight, then an instance within it."""
    return pick_generator(
        [
            lambda: job(rng),
            lambda: kid(rng),
            lambda: supernatural_being(rng),
            lambda: animal(rng),
        ],
        IDENTITY_CATEGORY_WEIGHTS,
        rng=rng,
    )


def hero_descriptor(genre_adjective: str, rng: random.Random) -> str:
    """Genre adjective, optional secondary adjective, then the identity."""
    words = [genre_adjective]
    if chance(SECONDARY_ADJECTIVE_CHANCE, rng=rng):
        secondary = SECONDARY_ADJECTIVES.draw(rng)
        if secondary != genre_adjective:
            words.append(secondary)
    words.append(hero_identity(rng))
    return " ".join(words)


def hero_field(display_name: str, descriptor: str) -> str:
    return f"{display_name}, {with_article(descriptor)}"


def theme_based_flaw(theme: str, rng: random.Random) -> str:
    pool = THEME_FLAWS.get(theme, GENERAL_FLAWS)
    flaw = pool.draw(rng)
    if chance(FLAW_INTENSIFIER_CHANCE, rng=rng):
        return f"{FLAW_INTENSIFIERS.draw(rng)} {flaw}"
    return flaw


def person_nemesis_role(rng: random.Random) -> str:
    return f"{PERSON_NEMESIS_ADJECTIVES.draw(rng)} {PERSON_NEMESIS_ROLES.draw(rng)}"


def entity_nemesis(rng: random.Random) -> str:
    return with_article(f"{ENTITY_NEMESIS_ADJECTIVES.draw(rng)} {ENTITY_NEMESIS_KINDS.draw(rng)}")


def act1_setting(rng: random.Random) -> str:
    return ACT1_SETTINGS.draw(rng)


def different_act2_setting(act1: str, rng: random.Random) -> str:
    candidates = [setting for setting in ACT2_SETTINGS.items if setting != act1]
    return pick(candidates, rng=rng)


def different_act1_setting(act2: str, rng: random.Random) -> str:
    candidates = [setting for setting in ACT1_SETTINGS.items if setting != act2]
    return pick(candidates, rng=rng)


def b_story_type(genre: str, rng: random.Random) -> str:
    if genre == "Buddy Love":
        return f"{PARTNER_UNIQUENESS.draw(rng)} {PARTNER_KINDS.draw(rng)}"
    return B_STORY_TYPES.draw(rng)


def minor_character_type(rng: random.Random) -> str:
    return MINOR_CHARACTER_TYPES.draw(rng)


def random_theme(rng: random.Random, *, exclude: str | None = None) -> str:
    candidates = [theme for theme in THEMES if theme != exclude] or list(THEMES)
    return pick(candidates, rng=rng)
