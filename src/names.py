"""Name heuristics: gender inference, surnames, and name normalization."""

from dataclasses import dataclass
import re
from typing import Protocol

from models import FEMALE, MALE


# Common first names seen in hand-typed family trees. Nicknames are listed
# alongside the formal names so "Peggy" and "Margaret" both resolve.
FEMALE_NAMES = frozenset(
    {
        "mary", "margaret", "peggy", "anne", "anna", "ann", "eileen", "helen",
        "catherine", "kate", "cathy", "kathy", "elizabeth", "betty", "dorothy",
        "dot", "loreen", "carol", "alice", "monica", "jean", "nancy", "sally",
        "barbara", "theresa", "teresa", "fran", "frances", "sharon", "charlene",
        "regina", "gina", "maureen", "jo", "joanne", "kim", "lisa", "juliet",
        "bridget", "caitlin", "karen", "kelly", "megan", "maggie", "paige",
        "jessica", "sydney", "sarah", "emily", "abby", "madeline", "madeleine",
        "alanna", "lily", "olivia", "nicole", "kierston", "hanna", "kacie",
        "anya", "christine", "heather", "tiffany", "alison", "kathleen", "rachel",
        "melody", "alyssa", "katrina", "marissa", "valerie", "kiersten", "angela",
        "colleen", "samantha", "trish", "deirdre", "felicia", "michelle", "laurie",
        "kristin", "ashley", "kristie", "rose", "susan", "linda", "robin", "ellen",
        "leslie", "laura", "denise", "arlene", "reece", "katie", "julie",
    }
)

MALE_NAMES = frozenset(
    {
        "john", "james", "jim", "thomas", "tom", "joseph", "joe", "michael",
        "william", "bill", "robert", "bob", "charles", "chuck", "george",
        "edward", "ed", "richard", "dick", "frank", "paul", "peter", "stephen",
        "steve", "mark", "david", "daniel", "dan", "patrick", "sean", "kevin",
        "timothy", "tim", "gerald", "gerry", "dennis", "martin", "marty",
        "lawrence", "larry", "gary", "douglas", "doug", "glenn", "steven",
        "andrew", "christopher", "chris", "nicholas", "nick", "ryan", "kyle",
        "matthew", "matt", "brian", "bryan", "justin", "jacob", "ian", "alec",
        "connor", "nolan", "broderick", "samuel", "sam", "scott", "lee", "julian",
        "aaron", "eric", "toby", "christian", "cameron", "ron", "brenton",
        "tyler", "kenneth", "simon", "navid", "brett", "gerard",
    }
)

GENERATIONAL_SUFFIXES = frozenset({"Jr", "Jr.", "Sr", "Sr.", "II", "III", "IV", "V"})

NICKNAME_GROUP = re.compile(r"\s*\([^)]*\)\s*")

# "Margaret (Peggy) McGinty" and the unclosed "Margaret (Peggy McGinty"
DISPLAY_NICKNAME = re.compile(r"^(\S+)\s+\(([A-Z][a-z]{1,15})(?:\)|(?=\s|$))")


class GenderLookup(Protocol):
    """Anything that can map a first name to MALE, FEMALE or None."""

    def gender_of(self, first_name: str) -> str | None: ...


class TableGenderLookup:
    """Gender lookup backed by fixed first-name tables."""

    def __init__(
        self,
        female_names: frozenset[str] = FEMALE_NAMES,
        male_names: frozenset[str] = MALE_NAMES,
    ):
        self.female_names = female_names
        self.male_names = male_names

    def gender_of(self, first_name: str) -> str | None:
        key = first_name.lower()
        if key in self.female_names:
            return FEMALE
        if key in self.male_names:
            return MALE
        return None


DEFAULT_GENDER_LOOKUP = TableGenderLookup()


def name_tokens(name: str) -> list[str]:
    """Split a name into words, ignoring parenthesized nicknames."""
    return NICKNAME_GROUP.sub(" ", name).split()


def normalize_name(name: str) -> str:
    """Case-folded, whitespace-collapsed form used for identity matching."""
    return " ".join(name.split()).casefold()


@dataclass(frozen=True)
class DisplayNameParts:
    given_name: str
    nickname: str | None
    surname: str | None


def parse_display_name(display_name: str) -> DisplayNameParts:
    """
    Split a display name into given name, nickname and the rest.

    "Margaret (Peggy) McGinty" -> Margaret / Peggy / McGinty
    "Margaret (Peggy McGinty"  -> Margaret / Peggy / McGinty
    "John Daniel McGinty Jr"   -> John / None / Daniel McGinty Jr
    """
    trimmed = display_name.strip()
    if not trimmed:
        return DisplayNameParts(given_name="", nickname=None, surname=None)

    match = DISPLAY_NICKNAME.match(trimmed)
    if match:
        rest = re.sub(r"^\)?\s*", "", trimmed[match.end() :]).strip()
        return DisplayNameParts(
            given_name=match.group(1),
            nickname=match.group(2),
            surname=rest or None,
        )

    parts = trimmed.split()
    return DisplayNameParts(
        given_name=parts[0], nickname=None, surname=" ".join(parts[1:]) or None
    )


def infer_gender(full_name: str, lookup: GenderLookup | None = None) -> str | None:
    """
    Infer gender from the given name, falling back to the nickname.
    Returns None if unknown.
    """
    parts = parse_display_name(full_name)
    if not parts.given_name:
        return None
    lookup = lookup or DEFAULT_GENDER_LOOKUP
    gender = lookup.gender_of(parts.given_name)
    if gender is None and parts.nickname:
        gender = lookup.gender_of(parts.nickname)
    return gender


def extract_surname(full_name: str) -> str | None:
    """
    Last word of a name, skipping nicknames.

    "Margaret (Peggy) McGinty" -> "McGinty"; a single-word name has no surname.
    """
    tokens = name_tokens(full_name)
    if len(tokens) < 2:
        return None
    return tokens[-1]


def is_first_name_only(name: str) -> bool:
    """
    True for "John", "Mary (Peggy)" and "James III".

    Two given names ("John Daniel") cannot be told apart from given + surname,
    so anything else with two or more words is treated as having a surname.
    """
    tokens = name_tokens(name)
    if len(tokens) == 1:
        return True
    return len(tokens) == 2 and tokens[1] in GENERATIONAL_SUFFIXES


def add_surname(first_name: str, surname: str) -> str:
    """
    Append a surname, keeping a trailing nickname last.

    "Margaret (Peggy)" + "McGinty" -> "Margaret McGinty (Peggy)"
    """
    match = re.match(r"^(.+?)(\s*\([^)]+\))$", first_name)
    if match:
        return f"{match.group(1).strip()} {surname}{match.group(2)}"
    return f"{first_name} {surname}"
