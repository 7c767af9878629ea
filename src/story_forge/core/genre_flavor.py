"""Genre-specific wording: descriptions, hero adjectives, nemeses, and beat events.

Nemesis and standalone field values use explicit pronoun tokens. Catalyst and
midpoint events are written in default they/them wording and resolved for the
hero when a beat is generated.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from story_forge.core.selection import WeightedPool


@dataclass(frozen=True)
class GenreFlavor:
    description: str
    hero_adjectives: WeightedPool[str]
    nemesis_pool: WeightedPool[str]
    catalysts: WeightedPool[str]
    midpoints: WeightedPool[str]
    standalone_fields: Mapping[str, WeightedPool[str]] = field(default_factory=dict)


ELEMENT_DESCRIPTIONS: Mapping[str, str] = {
    "The Detective": "The hero, not always a literal detective, who is compelled to find the truth.",
    "The Secret": "The dark truth at the heart of the mystery, often with personal ties to the detective.",
    "The Dark Turn": "A twist that reveals the secret is much more sinister than it first appeared.",
    "The Life Problem": "A universal issue the hero is struggling with, like grief, divorce, or puberty.",
    "The Wrong Way": "The hero's initial, flawed approach to solving the Life Problem.",
    "The Acceptance": "The final realization that the problem cannot be beaten, only understood and accepted.",
    "The Group": "The family, company, or society with its own set of rules and values.",
    "The Choice": "A moment where the hero must choose between their own desires and the group's needs.",
    "The Sacrifice": "What the hero must give up for the good of the group.",
    "The Power": "The hero's unique ability, which is both a gift and a burden.",
    "The Nemesis": "The villain who is the thematic opposite of the hero and often a dark reflection of them.",
    "The Curse": "The downside of the hero's power; the personal sacrifice it demands.",
    "The Innocent Hero": "An ordinary person who is completely unprepared for the extraordinary situation.",
    "The Sudden Event": "The unexpected incident that plunges the hero into a life-or-death struggle.",
    "The Life or Death Battle": "The hero must tap into primal survival instincts to overcome the odds.",
    "The Fool": "An underestimated underdog who is seen as foolish by the world.",
    "The Establishment": "A powerful and respected person or institution that the Fool opposes.",
    "The Transmutation": "The moment the Fool is revealed to have a hidden, unique wisdom.",
    "The Incomplete Hero": "A hero who is missing something crucial in their life.",
    "The Counterpart": "The person who comes into the hero's life and helps them become whole.",
    "The Complication": "The force that threatens to keep the hero and their counterpart apart.",
    "The Wish": "The magical element or sudden opportunity that the hero is granted.",
    "The Spell": "The rules, limitations, or unforeseen consequences of the magic.",
    "The Lesson": "The moral the hero must learn to properly handle the magic or give it up.",
    "The Road": "The physical and spiritual journey the hero undertakes.",
    "The Team": "The companions or allies the hero gathers along the way.",
    "The Prize": "The tangible goal the hero is seeking, which often turns out to be a MacGuffin.",
    "The Monster": "A supernatural or metaphorical creature driven by a primal need.",
    "The House": "A confined space where the hero cannot escape the monster.",
    "The Sin": "A past transgression that has summoned the monster.",
}

DEFAULT_FLAVOR = GenreFlavor(
    description="A story about a hero who must overcome a great challenge.",
    hero_adjectives=WeightedPool.uniform(("determined", "reluctant", "unlikely", "weary", "hopeful")),
    nemesis_pool=WeightedPool.uniform(
        (
            "a dangerous adversary", "a powerful enemy", "a deadly threat",
            "a ruthless opponent", "a formidable challenge", "a dark force",
        )
    ),
    catalysts=WeightedPool.uniform(
        (
            "everything changes in an instant",
            "they receive news that changes everything",
            "an unexpected event disrupts their life",
            "they're forced to make a choice",
            "opportunity and danger arrive together",
            "the past catches up with them",
        )
    ),
    midpoints=WeightedPool.uniform(
        (
            "they achieve a false victory",
            "they suffer a devastating setback",
            "the stakes are raised dramatically",
            "they discover the truth is worse than they thought",
            "they're forced to make an impossible choice",
            "they can't go back now",
        )
    ),
)

FLAVORS: Mapping[str, GenreFlavor] = {
    "Whydunit": GenreFlavor(
        description=(
            "A mystery where the hero seeks to uncover a truth, forcing them to confront "
            "a dark secret from their own past."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "obsessed", "single-minded", "relentless", "driven", "fixated",
                "consumed", "haunted", "determined", "compulsive", "dogged",
            )
        ),
        nemesis_pool=WeightedPool.uniform(
            (
                "a brilliant serial killer", "a master manipulator", "a corrupt official",
                "a hidden conspiracy", "a ghost from {possessive} past", "a cunning adversary",
                "a web of lies", "a dangerous cult", "a criminal mastermind",
                "a buried secret", "a powerful organization",
            )
        ),
        catalysts=WeightedPool.uniform(
            (
                "a body is discovered",
                "they're assigned an impossible case",
                "a pattern of crimes emerges",
                "someone they know is murdered",
                "they receive a cryptic clue",
                "a cold case is reopened",
                "they discover a conspiracy",
                "evidence points to someone impossible",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they discover they're connected to the crime",
                "the killer targets them",
                "they solve it but the answer is worse",
                "someone they trust is the killer",
                "they're framed for the murder",
                "a new body appears",
                "they realize they've been wrong all along",
                "the case becomes personal",
            )
        ),
        standalone_fields={
            "The Detective": WeightedPool.uniform(
                (
                    "a jaded ex-cop", "an obsessed blogger", "the victim's relative",
                    "a nosy neighbor", "a PI on {possessive} first case", "a washed-up journalist",
                    "a skeptical academic", "a conspiracy theorist", "a corporate investigator",
                    "a rogue data analyst", "an honest cop", "a teen sleuth",
                    "an amateur detective", "a retired investigator",
                )
            ),
        },
    ),
    "Rites of Passage": GenreFlavor(
        description=(
            "A story about coping with a universal life problem (pain, loss, coming-of-age) "
            "where the real monster is internal."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "troubled", "lost", "broken", "struggling", "conflicted",
                "tormented", "haunted", "wounded", "confused", "spiraling",
            )
        ),
        nemesis_pool=WeightedPool.uniform(
            (
                "{possessive} inner demon", "a devastating loss", "a life crisis",
                "the weight of {possessive} past mistakes", "a broken relationship", "addiction",
                "a family tragedy", "{possessive} own fear", "a career collapse",
                "an identity crisis", "{possessive} own weakness", "the passage of time",
            )
        ),
        catalysts=WeightedPool.uniform(
            (
                "they receive devastating news",
                "a life-changing diagnosis arrives",
                "someone close to them dies",
                "they hit rock bottom",
                "their carefully constructed life falls apart",
                "a milestone forces self-reflection",
                "they lose something they thought defined them",
                "reality crashes through their denial",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they hit a new low",
                "their coping mechanism fails",
                "they push everyone away",
                "they face the thing they've been avoiding",
                "they realize how far they've fallen",
                "they see themselves clearly for the first time",
                "they can't hide anymore",
                "the truth they've been denying surfaces",
            )
        ),
        standalone_fields={
            "The Acceptance": WeightedPool.uniform(
                (
                    'saying "it wasn\'t my fault"', 'admitting "it\'s okay to be sad"',
                    "a symbolic funeral", "letting go of a memento",
                    "a final honest conversation", "embracing the new normal",
                    "a quiet moment of peace", "forgiving {reflexive}",
                    "moving to a new city", "quitting the toxic job", "writing a goodbye letter",
                )
            ),
        },
    ),
    "Institutionalized": GenreFlavor(
        description=(
            "A story about a group or institution and an individual's place within it. "
            "The hero must choose between their own desires and the good of the group."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "rebellious", "independent", "nonconformist", "defiant", "individualistic",
                "unconventional", "maverick", "rogue", "free-spirited", "unorthodox",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("the system", "the institution")),
        catalysts=WeightedPool.uniform(
            (
                "they join an organization with dark secrets",
                "they're inducted into a rigid system",
                "they enter a world with unspoken rules",
                "they're recruited by a powerful group",
                "they're initiated into the inner circle",
                "they take an oath they don't understand",
                "they sign a contract they can't escape",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they discover the organization's dark secret",
                "they're promoted to the inner circle",
                "they're forced to do something unforgivable",
                "they see the system for what it is",
                "they're given a test of loyalty",
                "they realize they can't leave",
                "they're asked to betray a friend",
                "they're in too deep",
            )
        ),
        standalone_fields={
            "The Sacrifice": WeightedPool.uniform(
                (
                    "giving up a promotion", "losing a relationship",
                    "taking the fall for someone else", "giving {possessive} own life",
                    "publicly humiliating {reflexive}", "giving up {possessive} life's work",
                    "losing {possessive} home", "betraying a principle", "losing {possessive} status",
                    "giving up {possessive} dream", "accepting exile", "destroying evidence",
                )
            ),
        },
    ),
    "Superhero": GenreFlavor(
        description="An extraordinary person in an ordinary world who must bear a great burden or sacrifice.",
        hero_adjectives=WeightedPool.uniform(
            (
                "gifted", "extraordinary", "superhuman", "exceptional", "unique",
                "powerful", "enhanced", "special", "chosen", "blessed",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("a supervillain",)),
        catalysts=WeightedPool.uniform(
            (
                "they discover they have powers",
                "they're exposed to something that changes them",
                "they wake up different",
                "an accident gives them abilities",
                "they inherit a legacy",
                "their dormant powers activate",
                "they're given a gift and a curse",
                "destiny calls them",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they reveal their identity",
                "their powers fail at a critical moment",
                "they discover their powers are killing them",
                "they're forced to choose between power and humanity",
                "they lose control of their abilities",
                "they become public enemy number one",
                "they realize they're not the hero",
                "they cross the line",
            )
        ),
    ),
    "Dude with a Problem": GenreFlavor(
        description="An ordinary person in an extraordinary circumstance who must rise to the occasion to survive.",
        hero_adjectives=WeightedPool.uniform(
            (
                "ordinary", "unsuspecting", "innocent", "unwitting", "naive",
                "unprepared", "peaceful", "simple", "unassuming", "normal",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("a sudden threat",)),
        catalysts=WeightedPool.uniform(
            (
                "they're in the wrong place at the wrong time",
                "an ordinary day turns into a nightmare",
                "they witness something they shouldn't have",
                "they're caught in an attack",
                "their normal life explodes in violence",
                "they become a target",
                "disaster strikes without warning",
                "they're suddenly fighting for survival",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they think they've escaped, only to walk into a trap",
                "the threat is much bigger than they knew",
                "they're captured",
                "they discover who's really behind it",
                "the stakes escalate to global",
                "they're betrayed by someone they trusted",
                "they realize they can't run anymore",
                "time runs out",
            )
        ),
        standalone_fields={
            "The Innocent Hero": WeightedPool.uniform(
                (
                    "a librarian", "a mail carrier", "a high-school kid", "a retiree", "a chef",
                    "a florist", "a mild-mannered teacher", "a struggling artist", "a barista",
                    "a dog walker", "a programmer", "a street musician", "an accountant", "a nurse",
                )
            ),
        },
    ),
    "Fool Triumphant": GenreFlavor(
        description=(
            "An underdog who is underestimated by everyone, but whose hidden wisdom and luck "
            'help them defeat a more powerful "establishment" figure.'
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "naive", "innocent", "simple", "genuine", "honest",
                "unsophisticated", "pure-hearted", "guileless", "sincere", "authentic",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("the establishment",)),
        catalysts=WeightedPool.uniform(
            (
                "they're thrust into a world above their station",
                "they're mistaken for someone important",
                "they're given an opportunity they're not qualified for",
                "they lie their way into an elite circle",
                "they're the underdog in a rigged system",
                "they stumble into a high-stakes situation",
                "they're invited where they don't belong",
                "they're given a chance to prove themselves",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they're exposed as a fraud",
                "they succeed beyond their wildest dreams",
                "they're accepted by the elite",
                "their lie becomes the truth",
                "they're given real power",
                "they become what they pretended to be",
                "they win but at a cost",
                "they can't go back to who they were",
            )
        ),
        standalone_fields={
            "The Fool": WeightedPool.uniform(
                (
                    "a clumsy janitor", "a ditzy socialite", "a failed artist",
                    "a low-level bureaucrat", "a fast-food worker", "a perpetually lost tourist",
                    "a slacker gamer", "a hopelessly naive optimist", "a weird neighbor",
                    "a bumbling intern", "a musician who only knows one song",
                    "an aspiring influencer",
                )
            ),
        },
    ),
    "Buddy Love": GenreFlavor(
        description=(
            "A story about the power of relationships (not just romantic) where the hero's "
            "journey is catalyzed by someone else."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "incomplete", "inadequate", "lonely", "isolated", "broken",
                "damaged", "lost", "empty", "unfulfilled", "disconnected",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("a difficult situation",)),
        catalysts=WeightedPool.uniform(
            (
                "they meet someone who challenges everything they believe",
                "they're forced to work with someone they can't stand",
                "an old flame returns at the worst possible time",
                "they're paired with an unlikely partner",
                "someone sees through their carefully constructed walls",
                "they're assigned a partner who's their complete opposite",
                "they're forced into close quarters with a stranger",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they confess feelings they can't take back",
                "they cross a line they swore they wouldn't",
                "their partnership becomes something more",
                "their secret relationship is exposed",
                "they can't deny it anymore",
                "they choose love over everything else",
            )
        ),
    ),
    "Out of the Bottle": GenreFlavor(
        description=(
            "A story involving magic, a wish granted, or a sudden stroke of luck that forces "
            "the hero to deal with the consequences, both good and bad."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "greedy", "envious", "desperate", "dissatisfied", "covetous",
                "ambitious", "jealous", "yearning", "discontented", "longing",
            )
        ),
        nemesis_pool=WeightedPool.uniform(
            (
                "an unintended consequence", "the price of the wish",
                "the dark side of {possessive} desire", "the chaos {subject} unleashed",
                "{possessive} own greed", "the magic gone wrong", "the reality {subject} created",
                "the trap of {possessive} fantasy", "the cost of {possessive} ambition",
                "the monster {subject} became",
            )
        ),
        catalysts=WeightedPool.uniform(
            (
                "they make a wish they can't take back",
                "they discover they have a power with a price",
                "a deal with consequences is offered",
                "they get exactly what they asked for",
                "magic enters their mundane life",
                "they find a way to change everything",
                "they wake up in a different life",
                "their deepest desire manifests",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "the wish backfires spectacularly",
                "they realize they can't undo it",
                "the price becomes clear",
                "they've become the monster",
                "everyone they love is affected",
                "the magic is out of control",
                "reality is unraveling",
                "the curse manifests fully",
            )
        ),
    ),
    "Golden Fleece": GenreFlavor(
        description=(
            "A quest or road trip story where the hero is in pursuit of a tangible prize, "
            "but the real growth happens on the journey itself."
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "determined", "obsessed", "relentless", "driven", "single-minded",
                "ambitious", "desperate", "focused", "unwavering", "compelled",
            )
        ),
        nemesis_pool=WeightedPool.uniform(
            (
                "a ruthless rival", "a dangerous warlord", "a corrupt official",
                "a treacherous landscape", "a deadly organization", "a vengeful enemy",
                "a powerful crime lord", "a hostile territory", "a competing team",
                "a relentless pursuer", "a natural disaster", "a ticking clock",
            )
        ),
        catalysts=WeightedPool.uniform(
            (
                "they're offered a quest they can't refuse",
                "a map to something legendary falls into their hands",
                "they're recruited for an impossible mission",
                "they discover the location of something thought lost",
                "a dying stranger gives them a final mission",
                "they inherit a quest from someone who failed",
                "they're given 72 hours to retrieve it",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "they find the prize but it's a trap",
                "their team betrays them",
                "they discover the prize isn't what they thought",
                "they're closer but the cost is higher",
                "they lose half the team",
                "they find it but can't take it",
                "they discover why the previous seekers failed",
                "they learn the truth about the quest",
            )
        ),
    ),
    "Monster in the House": GenreFlavor(
        description=(
            'A story where a monster (literal or metaphorical) confines the hero to a limited '
            'space, and there is a "sin" that has brought the monster forth.'
        ),
        hero_adjectives=WeightedPool.uniform(
            (
                "reckless", "arrogant", "negligent", "greedy", "ambitious",
                "careless", "overconfident", "foolish", "hubristic", "irresponsible",
            )
        ),
        nemesis_pool=WeightedPool.uniform(("a monster",)),
        catalysts=WeightedPool.uniform(
            (
                "something ancient is awakened",
                "they unleash something they can't control",
                "the first victim is discovered",
                "they're trapped with an unknown threat",
                "the monster reveals itself",
                "they break a sacred rule",
                "the infection begins to spread",
                "they discover they're not alone",
            )
        ),
        midpoints=WeightedPool.uniform(
            (
                "the monster is much worse than they thought",
                "they discover they're infected",
                "escape is impossible",
                "the monster evolves",
                "they realize they created it",
                "the safe room is breached",
                "they discover the monster's origin",
                "they learn the monster can't be killed",
            )
        ),
    ),
}


def flavor_for(genre: str) -> GenreFlavor:
    return FLAVORS.get(genre, DEFAULT_FLAVOR)
