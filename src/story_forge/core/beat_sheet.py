"""Fifteen-beat sheet: beat definitions, field ids, and sub-element generators.

Pool text is written in default they/them wording for the hero and resolved
with `resolve_text`; story values (names, flaw, nemesis, theme, settings) are
passed as named references so their own wording is never rewritten.
"""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from story_forge.core.genre_flavor import flavor_for
from story_forge.core.phrasing import as_sentence, with_article
from story_forge.core.selection import WeightedPool
from story_forge.core.template_resolver import render_template, resolve_text
from story_forge.domain.models import PronounSet

BEAT_FIELD_PREFIX = "beat_"
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class BeatContext:
    """Rendered story values a beat sentence may reference."""

    genre: str
    theme: str
    pronouns: PronounSet
    hero_name: str
    hero_full_name: str
    flaw: str
    nemesis: str
    setting: str
    act2_setting: str
    counterpart_name: str
    counterpart_field: str
    minor_field: str

    def names(self) -> dict[str, str]:
        return {
            "hero": self.hero_name,
            "full": self.hero_full_name,
            "flaw": self.flaw,
            "nemesis": self.nemesis,
            "setting": with_article(self.setting),
            "newWorld": self.act2_setting,
            "theme": self.theme.lower(),
            "counterpart": self.counterpart_name,
            "counterpartField": self.counterpart_field,
            "minorField": self.minor_field,
        }


@dataclass(frozen=True)
class Draft:
    """Beat wording plus extra named values inserted after pronoun resolution."""

    text: str
    names: Mapping[str, str] = field(default_factory=dict)


Composer = Callable[[BeatContext, random.Random], str | Draft]


@dataclass(frozen=True)
class SubElement:
    name: str
    compose: Composer
    depends_on: frozenset[str] = field(default_factory=frozenset)

    @property
    def key(self) -> str:
        return beat_key(self.name)


@dataclass(frozen=True)
class Beat:
    name: str
    act: str
    prompt: str
    sub_elements: tuple[SubElement, ...]

    @property
    def key(self) -> str:
        return beat_key(self.name)


def beat_key(name: str) -> str:
    """Strip everything but letters and digits."""
    return _NON_ALNUM.sub("", name)


def beat_field_id(beat: str, sub: str) -> str:
    return f"{BEAT_FIELD_PREFIX}{beat_key(beat)}_{beat_key(sub)}"


def parse_beat_field_id(field_id: str) -> tuple[str, str] | None:
    """Split `beat_<Beat>_<Sub>` into its keys, or None if malformed."""
    if not field_id.startswith(BEAT_FIELD_PREFIX):
        return None
    remainder = field_id[len(BEAT_FIELD_PREFIX) :]
    beat, separator, sub = remainder.partition("_")
    if not separator or not beat or not sub:
        return None
    return beat, sub


OPENING_ACTIONS = WeightedPool.uniform(
    (
        "photocopying the same memo for the 500th time",
        "arriving late to work for the third time this week",
        "deleting another rejection email without reading it",
        "watching their boss take credit for their work again",
        "eating lunch alone at their desk for the 200th day in a row",
        "rehearsing a confrontation they'll never have",
        "scrolling through an ex's social media at 2am",
        "ignoring their mother's fifth call this week",
        "writing a text message they'll never send",
        "staring at an empty canvas they haven't touched in months",
        "stepping over the same pile of unpaid bills",
        "checking their bank account and closing it immediately",
        "taking the long way home to avoid someone",
        "walking past the gym membership they never use",
    )
)
FLAW_SHOWN = WeightedPool.uniform(
    (
        "is on full display for everyone to see", "manifests in every interaction",
        "drives everyone away", "sabotages every opportunity",
        "is obvious to everyone but them", "controls their every decision",
        "keeps them trapped", "prevents any real connection",
        "makes them their own worst enemy", "blinds them to the truth",
        "poisons every relationship", "is their armor and their prison",
    )
)
DISMISSALS = WeightedPool.uniform(
    (
        "that {hero} immediately dismisses", "that {hero} laughs off",
        "that {hero} refuses to hear", "that {hero} argues against",
        "that {hero} thinks doesn't apply to them", "that {hero} finds naive",
        "that {hero} isn't ready to hear", "that {hero} will remember too late",
        "that goes in one ear and out the other", "that {hero} takes as an insult",
        "that {hero} believes they're the exception to", "that {hero} rationalizes away",
        "that {hero} convinces themselves doesn't matter",
    )
)
STASIS = WeightedPool.uniform(
    (
        "their skills are becoming obsolete",
        "their passion project is gathering dust",
        "their dreams have been replaced by a paycheck",
        "all their friends have moved on with their lives",
        "they eat dinner alone every night",
        "they've become invisible to everyone around them",
        "they can't remember the last time they laughed",
        "every day is exactly like the last",
        "their world has shrunk to a five-block radius",
        "they're one mistake away from losing everything",
        "they're drowning in debt with no way out",
        "their lies are catching up to them",
    )
)
STATED_GOALS = WeightedPool.uniform(
    (
        "get the promotion they don't deserve", "win back an ex who's moved on",
        "prove their worth to someone who doesn't care", "get rich quick",
        "beat their rival at any cost", "keep their secret hidden",
        "maintain the perfect facade", "stay in their comfort zone",
        "keep everyone happy except themselves", "fix everyone else's problems but their own",
        "start over without dealing with the past", "prove their parents wrong",
        "just make it through another day", "pay this month's rent",
    )
)
DEBATES = WeightedPool.uniform(
    (
        "paces their apartment all night, unable to decide",
        "makes a pro and con list that doesn't help",
        "stares at the phone, unable to make the call",
        "writes and deletes the same email twenty times",
        "rehearses what they'll say in the mirror",
        "asks everyone they know for advice they won't take",
        "asks a stranger on the street what they should do",
        "cleans the entire apartment to avoid deciding",
        "imagines every worst-case scenario",
        "convinces themselves they're not ready",
        "flips a coin to decide",
        "sets a deadline they keep pushing back",
    )
)
WRONG_DECISIONS = WeightedPool.uniform(
    (
        "chooses the easy path over the right one", "takes the shortcut that will cost them",
        "picks comfort over growth", "selects safety over truth",
        "chooses what others expect", "opts for status over substance",
        "chooses to run rather than face it", "opts to hide rather than heal",
        "chooses denial over acceptance", "selects revenge over forgiveness",
        "opts for control over connection", "chooses pride over humility",
        "lets their flaw make the choice", "chooses the path that won't change them",
    )
)
NEW_CHARACTER_ENTRANCES = WeightedPool.uniform(
    (
        "{Hero} meets {counterpartField}",
        "{Hero} is thrown together with {counterpartField}",
        "{Hero} crosses paths with {counterpartField}",
        "{Hero} can't shake {counterpartField}",
    )
)
THEME_EMBODIED = WeightedPool.uniform(
    (
        "embodies the lesson of {theme}", "is a living example of {theme}",
        "has already learned {theme}", "shows {theme} in action",
        "teaches {theme} without trying", "makes {theme} seem possible",
        "has what {hero} lacks: {theme}", "understands {theme} while {hero} doesn't",
        "lives by {theme} while {hero} fights it", "found peace through {theme}",
        "shows {hero} their potential through {theme}", "is {hero}'s future if they embrace {theme}",
    )
)
PROMISES = WeightedPool.uniform(
    (
        "they embarrass themselves at every turn", "they accidentally insult the wrong person",
        "they discover a hidden talent", "they train with an eccentric mentor",
        "they fake it till they make it",
        "they bond with an unlikely ally", "they gain the respect of a rival",
        "they explore a world they never knew existed", "they pull off an impossible heist",
        "they surprise everyone including themselves", "they laugh for the first time in years",
        "they stand up for themselves", "they feel alive again",
    )
)
SUCCESS_FAILURE = WeightedPool.uniform(
    (
        "they succeed through dumb luck", "they accidentally become the hero",
        "their inexperience becomes an advantage", "they win by not playing by the rules",
        "they fail in the most public way possible", "they make everything worse",
        "they trust the wrong person", "they realize they're in over their head",
        "victory feels hollow",
        "they succeed, only to make a powerful enemy", "they learn the hard way",
        "they realize this isn't a game", "they can't go back now",
    )
)
STAKES_RAISED = WeightedPool.uniform(
    (
        "someone they love is now in danger", "their family is threatened",
        "they have 24 hours to save someone", "their career is on the line",
        "they'll lose everything they've built", "their reputation will be destroyed",
        "thousands of lives now depend on them", "the entire city is at risk",
        "they'll lose themselves if they continue", "their only ally is captured",
        "the enemy is stronger than they thought", "there's no second chance",
    )
)
EXTERNAL_PRESSURE = WeightedPool.uniform(
    (
        "{Nemesis} applies direct force",
        "{Nemesis} tightens the net around {hero}",
        "{Nemesis} strikes at everything {hero} cares about",
        "{Nemesis} turns {hero}'s allies against them",
        "{Nemesis} closes in from every side",
        "{Nemesis} cuts off every escape route",
    )
)
INTERNAL_PRESSURE = WeightedPool.uniform(
    (
        "resurfaces at the worst possible moment", "tears the team apart",
        "costs them a crucial ally", "makes them doubt everything",
        "pushes away the people trying to help", "leads them straight into a trap",
        "becomes impossible to hide",
    )
)
WHIFFS_OF_DEATH = WeightedPool.uniform(
    (
        "their mentor is killed protecting them", "their home is destroyed",
        "their reputation is obliterated", "they're disowned by their family",
        "their life's work is destroyed", "they're left for dead",
        "they survive an assassination attempt", "the deadline passes",
        "the door closes forever", "they watch their dream die",
    )
)
ROCK_BOTTOMS = WeightedPool.uniform(
    (
        "they've lost everything that mattered", "everyone they love has abandoned them",
        "they're completely alone", "their plan has failed catastrophically",
        "they're out of options", "their flaw has destroyed everything",
        "they've become what they feared", "they can't look at themselves",
        "they can't see a way forward", "they've made everything worse",
        "they're hunted",
    )
)
REFLECTIONS = WeightedPool.uniform(
    (
        "sits alone in the wreckage of their life", "stares at the ceiling unable to sleep",
        "walks through the ruins of what they built", "stands in the rain letting it wash over them",
        "sits in their car in an empty parking lot", "watches the sunrise alone",
        "finally lets themselves cry", "remembers their mother's advice",
        "dreams of their old life", "calls someone they haven't spoken to in years",
        "questions every choice they've made", "visits their childhood home",
    )
)
RIGHT_DECISIONS = WeightedPool.uniform(
    (
        "finally understands what they must do", "sees the solution clearly for the first time",
        "makes a quiet, unshakeable decision", "chooses to act despite the cost",
        "stops running and turns to fight", "formulates a brilliant but risky plan",
        "devises a plan that uses their flaw as strength", "rallies the team for one final push",
        "asks for help from everyone they hurt", "accepts help they previously refused",
        "lets go of what's holding them back", "chooses love over fear", "goes all in",
    )
)
FINAL_BATTLES = WeightedPool.uniform(
    (
        "{Hero} confronts {nemesis}",
        "{Hero} faces {nemesis} one last time",
        "{Hero} takes the fight to {nemesis}",
        "{Hero} stands against {nemesis} with everything they have",
    )
)
FINALE_STAKES = WeightedPool.uniform(
    (
        "saving their partner's life", "stopping a bomb with seconds left",
        "choosing who lives and who dies", "saving the many or the one",
        "choosing between justice and mercy", "saving their city from destruction",
        "exposing a conspiracy that reaches the top", "earning forgiveness",
        "reconciling with their family", "breaking the cycle",
        "proving they've changed", "becoming the hero they should have been",
    )
)
MIRRORED_IMAGES = WeightedPool.uniform(
    (
        "the same place as the opening, but everything has changed",
        "the same choice as the opening, but they choose differently",
        "the phone rings again, but this time they answer",
        "they pass the same spot, and this time they don't avoid it",
        "they see their reflection, and this time they recognize themselves",
        "they give the advice they once ignored",
        "they help someone in their old situation",
        "they smile for real this time",
        "they're finally home",
        "they open a door they once closed",
    )
)
TRANSFORMATIONS = WeightedPool.uniform(
    (
        "{Hero} now acts with an understanding of {theme}",
        "{Hero} has learned what {theme} truly means",
        "{Hero} chooses {theme} without hesitation",
    )
)

THEME_ADVICE: Mapping[str, WeightedPool[str]] = {
    "Love": WeightedPool.uniform(
        (
            '"You can\'t love someone else until you love yourself."',
            '"Real love means being vulnerable."',
            '"Love isn\'t about control, it\'s about trust."',
            '"You\'re pushing away the people who care about you."',
            '"The walls you built to protect yourself are your prison."',
        )
    ),
    "Forgiveness": WeightedPool.uniform(
        (
            '"Everyone deserves a second chance."',
            '"Forgiveness is for you, not them."',
            '"Your mistakes don\'t define you unless you let them."',
            '"Carrying that guilt will destroy you."',
            '"You can\'t move forward while looking back."',
        )
    ),
    "Redemption": WeightedPool.uniform(
        (
            '"You can\'t change the past, but you can change who you become."',
            '"Redemption starts with taking responsibility."',
            '"You\'re not your worst moment."',
            '"It\'s never too late to make things right."',
        )
    ),
    "Fear": WeightedPool.uniform(
        (
            '"Courage isn\'t the absence of fear, it\'s acting despite it."',
            '"Fear is a liar."',
            '"What you\'re running from is what you need to face."',
            '"Your fear is keeping you small."',
            '"You can\'t let fear make your decisions."',
        )
    ),
    "Acceptance": WeightedPool.uniform(
        (
            '"You are not what happened to you."',
            '"Stop trying to be who they want you to be."',
            '"You can\'t hide from yourself."',
            '"Who you are is enough."',
        )
    ),
    "Selflessness": WeightedPool.uniform(
        (
            '"You can\'t save everyone, but you can save someone."',
            '"What you give up defines who you become."',
            '"Sacrifice is only meaningful if it\'s chosen."',
            '"Sometimes the hardest sacrifice is accepting help."',
        )
    ),
}
DEFAULT_ADVICE = WeightedPool.uniform(
    (
        '"The answer to {theme} is simpler than you think."',
        '"You already know the truth about {theme}."',
        '"{Theme} isn\'t something you find, it\'s something you choose."',
        '"You can\'t learn {theme} from a book."',
        '"{Theme} requires action, not intention."',
        '"You\'re closer to {theme} than you realize."',
        '"You can\'t achieve {theme} alone."',
    )
)
THEME_EPIPHANIES: Mapping[str, WeightedPool[str]] = {
    "Love": WeightedPool.uniform(
        (
            "love isn't about being perfect, it's about being real",
            "pushing people away doesn't protect them, it hurts them",
            "they can't love anyone until they love themselves",
            "they're worthy of love exactly as they are",
        )
    ),
    "Forgiveness": WeightedPool.uniform(
        (
            "forgiveness starts with forgiving themselves",
            "their mistakes don't define them",
            "carrying guilt won't fix what they broke",
            "they can't move forward while chained to the past",
        )
    ),
    "Redemption": WeightedPool.uniform(
        (
            "they can't change the past, but they can change the future",
            "redemption is a choice, not a destination",
            "making amends is how they heal",
            "they deserve a second chance",
        )
    ),
    "Fear": WeightedPool.uniform(
        (
            "courage is acting despite the fear",
            "the thing they fear most is what they need to face",
            "they're braver than they believe",
            "fear has been making their decisions",
        )
    ),
    "Acceptance": WeightedPool.uniform(
        (
            "they are not what happened to them",
            "pretending to be someone else is exhausting",
            "they can't hide from themselves forever",
            "being themselves is the bravest thing they can do",
        )
    ),
    "Selflessness": WeightedPool.uniform(
        (
            "they can't save everyone, but they can save someone",
            "what they give up defines who they become",
            "accepting help is sometimes the hardest sacrifice",
        )
    ),
}
DEFAULT_EPIPHANIES = WeightedPool.uniform(
    (
        "{theme} was inside them all along",
        "the path to {theme} requires letting go",
        "they already have everything they need for {theme}",
        "{theme} starts with accepting who they are",
        "they can't find {theme} alone",
        "{theme} means choosing differently",
    )
)


def _visual_snapshot(context: BeatContext, rng: random.Random) -> str:
    return f"{{Full}} is seen {OPENING_ACTIONS.draw(rng)} in {{setting}}"


def _flaw_shown(context: BeatContext, rng: random.Random) -> str:
    return f"{{Possessive}} {{flaw}} {FLAW_SHOWN.draw(rng)}"


def _minor_character(context: BeatContext, rng: random.Random) -> str:
    return "{Hero} crosses paths with {minorField}"


def _dismissed_advice(context: BeatContext, rng: random.Random) -> Draft:
    pool = THEME_ADVICE.get(context.theme, DEFAULT_ADVICE)
    # Quoted speech addresses the hero directly and keeps its own pronouns.
    advice = render_template(pool.draw(rng), context.pronouns, context.names())
    return Draft(f"Says {{advice}} {DISMISSALS.draw(rng)}", {"advice": advice})


def _stasis(context: BeatContext, rng: random.Random) -> str:
    return STASIS.draw(rng)


def _stated_goal(context: BeatContext, rng: random.Random) -> str:
    return f"{{Hero}} wants to {STATED_GOALS.draw(rng)}"


def _inciting_incident(context: BeatContext, rng: random.Random) -> str:
    return flavor_for(context.genre).catalysts.draw(rng)


def _core_question(context: BeatContext, rng: random.Random) -> str:
    return f"{{Hero}} {DEBATES.draw(rng)}"


def _new_world(context: BeatContext, rng: random.Random) -> str:
    return "{Hero} enters the {newWorld}"


def _wrong_decision(context: BeatContext, rng: random.Random) -> str:
    return f"{{Hero}} {WRONG_DECISIONS.draw(rng)}"


def _new_character(context: BeatContext, rng: random.Random) -> str:
    return NEW_CHARACTER_ENTRANCES.draw(rng)


def _theme_embodied(context: BeatContext, rng: random.Random) -> str:
    return f"{{Counterpart}} {THEME_EMBODIED.draw(rng)}"


def _pool_composer(pool: WeightedPool[str]) -> Composer:
    return lambda context, rng: pool.draw(rng)


def _turning_point(context: BeatContext, rng: random.Random) -> str:
    return flavor_for(context.genre).midpoints.draw(rng)


def _internal_pressure(context: BeatContext, rng: random.Random) -> str:
    return f"{{Possessive}} {{flaw}} {INTERNAL_PRESSURE.draw(rng)}"


def _reflection(context: BeatContext, rng: random.Random) -> str:
    return f"{{Hero}} {REFLECTIONS.draw(rng)}"


def _epiphany(context: BeatContext, rng: random.Random) -> str:
    pool = THEME_EPIPHANIES.get(context.theme, DEFAULT_EPIPHANIES)
    return f"{{Hero}} realizes that {pool.draw(rng)}"


def _right_decision(context: BeatContext, rng: random.Random) -> str:
    return f"{{Hero}} {RIGHT_DECISIONS.draw(rng)}"


def _dig_deep_down(context: BeatContext, rng: random.Random) -> str:
    return "{Hero} must overcome {possessive} {flaw} to win"


def _high_stakes(context: BeatContext, rng: random.Random) -> str:
    return f"Everything comes down to {FINALE_STAKES.draw(rng)}"


FLAW = "flaw"
NEMESIS = "nemesis"
THEME = "theme"
SETTING = "setting"
ACT2_SETTING = "act2_setting"
B_STORY = "b_story"
MINOR_CHARACTER = "minor_character"


def _sub(name: str, compose: Composer, *depends_on: str) -> SubElement:
    return SubElement(name=name, compose=compose, depends_on=frozenset(depends_on))


BEATS: tuple[Beat, ...] = (
    Beat(
        "Opening Image",
        "1",
        'A "before" snapshot.',
        (_sub("Visual Snapshot", _visual_snapshot, SETTING), _sub("Flaw Shown", _flaw_shown, FLAW)),
    ),
    Beat(
        "Theme Stated",
        "1",
        "Stated by a minor character.",
        (
            _sub("Minor Character", _minor_character, MINOR_CHARACTER),
            _sub("Dismissed Advice", _dismissed_advice, THEME),
        ),
    ),
    Beat(
        "Setup",
        "1",
        "Show the hero's normal life.",
        (_sub("Stasis = Death", _stasis), _sub("Stated Goal (Want)", _stated_goal)),
    ),
    Beat(
        "Catalyst",
        "1",
        "An action beat that happens to the hero.",
        (_sub("Inciting Incident", _inciting_incident),),
    ),
    Beat("Debate", "1", "A question or preparation.", (_sub("Core Question", _core_question),)),
    Beat(
        "Break Into 2",
        "2A",
        "The hero makes a proactive decision.",
        (_sub("New World", _new_world, ACT2_SETTING), _sub("Wrong Decision", _wrong_decision)),
    ),
    Beat(
        "B Story",
        "2A",
        "Introduce a new character or concept.",
        (
            _sub("New Character", _new_character, B_STORY),
            _sub("Theme Embodied", _theme_embodied, THEME, B_STORY),
        ),
    ),
    Beat(
        "Fun and Games",
        "2A",
        'The "promise of the premise."',
        (
            _sub("Promise of Premise", _pool_composer(PROMISES)),
            _sub("Success/Failure", _pool_composer(SUCCESS_FAILURE)),
        ),
    ),
    Beat(
        "Midpoint",
        "2A",
        'A "false victory" or "false defeat".',
        (_sub("Turning Point", _turning_point), _sub("Stakes Raised", _pool_composer(STAKES_RAISED))),
    ),
    Beat(
        "Bad Guys Close In",
        "2B",
        "The opposite of Fun and Games.",
        (
            _sub("External Pressure", _pool_composer(EXTERNAL_PRESSURE), NEMESIS),
            _sub("Internal Pressure", _internal_pressure, FLAW),
        ),
    ),
    Beat(
        "All Is Lost",
        "2B",
        "The hero hits rock bottom.",
        (
            _sub("Whiff of Death", _pool_composer(WHIFFS_OF_DEATH)),
            _sub("Rock Bottom", _pool_composer(ROCK_BOTTOMS)),
        ),
    ),
    Beat(
        "Dark Night of the Soul",
        "2B",
        "A moment of reflection.",
        (_sub("Moment of Reflection", _reflection), _sub("The Epiphany", _epiphany, THEME)),
    ),
    Beat("Break Into 3", "3", "The hero learns the theme.", (_sub("Right Decision", _right_decision),)),
    Beat(
        "Finale",
        "3",
        "The hero enacts the plan.",
        (
            _sub("Final Battle", _pool_composer(FINAL_BATTLES), NEMESIS),
            _sub("Dig Deep Down", _dig_deep_down, FLAW),
            _sub("High Stakes", _high_stakes),
        ),
    ),
    Beat(
        "Final Image",
        "3",
        'A visual "after" snapshot.',
        (
            _sub("Mirrored Image", _pool_composer(MIRRORED_IMAGES)),
            _sub("Transformation", _pool_composer(TRANSFORMATIONS), THEME),
        ),
    ),
)

_SUB_ELEMENTS: dict[tuple[str, str], SubElement] = {
    (beat.key, sub.key): sub for beat in BEATS for sub in beat.sub_elements
}


def beat_field_ids() -> tuple[str, ...]:
    return tuple(beat_field_id(beat.name, sub.name) for beat in BEATS for sub in beat.sub_elements)


def find_sub_element(field_id: str) -> SubElement | None:
    keys = parse_beat_field_id(field_id)
    if keys is None:
        return None
    return _SUB_ELEMENTS.get(keys)


def beat_fields_depending_on(core_field: str) -> tuple[str, ...]:
    return tuple(
        beat_field_id(beat.name, sub.name)
        for beat in BEATS
        for sub in beat.sub_elements
        if core_field in sub.depends_on
    )


def generate_beat_text(context: BeatContext, beat: str, sub: str, rng: random.Random) -> str:
    """Generate one beat sentence; raises KeyError for an unknown beat or sub-element."""
    sub_element = _SUB_ELEMENTS[(beat_key(beat), beat_key(sub))]
    drafted = sub_element.compose(context, rng)
    draft = drafted if isinstance(drafted, Draft) else Draft(drafted)
    names = {**context.names(), **draft.names}
    return as_sentence(resolve_text(draft.text, context.pronouns, names))
