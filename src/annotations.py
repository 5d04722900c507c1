"""Extraction of dates, nicknames, and union notes from parenthesized metadata."""

from dataclasses import dataclass
import re

from models import ADOPTIVE_PARENT, BIOLOGICAL_PARENT, STEP_PARENT


NICKNAME_MAX_LENGTH = 20

# Capitalized words that look like nicknames but carry metadata
METADATA_WORDS = frozenset(
    {
        "Adopted",
        "Deceased",
        "Div",
        "Divorced",
        "Married",
        "Now",
        "Partner",
        "Partners",
        "Separated",
        "Step",
        "Stepchild",
        "Stillborn",
        "Widowed",
    }
)

NICKNAME_PATTERN = re.compile(r"^[A-Z][a-z]+(\s[A-Z][a-z]+)?$")

# Date patterns, checked in this order
LIFESPAN_PATTERN = re.compile(r"\((\d{4})\s*-\s*(\d{4}|\?)\)")  # (1870-1909), (1870-?)
BIRTH_ONLY_PATTERN = re.compile(r"\(b\.?\s*(\d{4})\)", re.IGNORECASE)  # (b. 1870)
STANDALONE_YEAR_PATTERN = re.compile(r"\((\d{4})\)(?!\s*-)")  # (1870)
STILLBORN_PATTERN = re.compile(r"stillborn", re.IGNORECASE)
FIRST_YEAR_PATTERN = re.compile(r"\((\d{4})")

MARRIAGE_YEAR_PATTERN = re.compile(
    r"\(\s*(?:m|married)\b[.:]?\s*-?\s*[^()]*?\b(\d{4})\b", re.IGNORECASE
)  # (M- 5 February 1955, NY), (m. 1960), (Married 1948)
DIVORCE_YEAR_PATTERN = re.compile(r"\b(?:div|divorced)\b\.?\s*(\d{4})\b", re.IGNORECASE)

ADOPTED_PATTERN = re.compile(r"\badopted\b", re.IGNORECASE)
STEP_PATTERN = re.compile(r"\bstep(?:child|son|daughter)?\b", re.IGNORECASE)
PARTNER_PATTERN = re.compile(r"\bpartners?\b", re.IGNORECASE)


@dataclass(frozen=True)
class ParenGroup:
    start: int
    end: int
    inner: str
    closed: bool


@dataclass(frozen=True)
class Annotation:
    name: str
    birth_year: int | None
    death_year: int | None


def iter_groups(text: str):
    """
    Yield the top-level parenthesized groups of `text`, honoring nesting.

    An unclosed "(" produces a final group running to the end of the text.
    """
    i = 0
    n = len(text)
    while i < n:
        if text[i] != "(":
            i += 1
            continue
        depth = 1
        j = i + 1
        while j < n and depth > 0:
            if text[j] == "(":
                depth += 1
            elif text[j] == ")":
                depth -= 1
            j += 1
        closed = depth == 0
        inner = text[i + 1 : j - 1] if closed else text[i + 1 :]
        yield ParenGroup(start=i, end=j, inner=inner, closed=closed)
        i = j


def is_nickname(inner: str) -> bool:
    """A nickname is one or two short Capitalized words: (Peggy), (Mary Kate)."""
    trimmed = inner.strip()
    if trimmed in METADATA_WORDS:
        return False
    return len(trimmed) < NICKNAME_MAX_LENGTH and bool(NICKNAME_PATTERN.match(trimmed))


def strip_metadata(text: str) -> str:
    """
    Remove parenthesized metadata from a text segment, keeping nicknames.

    "Margaret (Peggy) McGinty (1933-2024)" -> "Margaret (Peggy) McGinty"
    "Charlene Carter (M- 1963, Divorced)" -> "Charlene Carter"
    """
    pieces: list[str] = []
    pos = 0
    for group in iter_groups(text):
        pieces.append(text[pos : group.start].replace(")", ""))
        if group.closed and is_nickname(group.inner):
            pieces.append(text[group.start : group.end])
        else:
            pieces.append(" ")
        pos = group.end
    pieces.append(text[pos:].replace(")", ""))

    result = "".join(pieces)
    result = re.sub(r"\s*,\s*", " ", result)
    result = re.sub(r"\s*-\s*stillborn\s*", " ", result, flags=re.IGNORECASE)
    result = re.sub(r"\s+\d{4}\s*$", "", result)  # trailing bare year: "Fran Adams 1945"
    result = re.sub(r"\s*\?\s*$", "", result)
    return re.sub(r"\s{2,}", " ", result).strip()


def extract_dates(text: str) -> tuple[int | None, int | None]:
    """
    Extract (birth_year, death_year) from the raw text of a segment.

    Handles formats like:
    - "(1870-1909)"
    - "(1870-?)"
    - "(b. 1870)" / "(b 1870)"
    - "(1870)"  (birth year)
    - "(1950) - stillborn"  (born and died the same year)
    """
    match = LIFESPAN_PATTERN.search(text)
    if match:
        death = match.group(2)
        return int(match.group(1)), None if death == "?" else int(death)

    match = BIRTH_ONLY_PATTERN.search(text)
    if match:
        return int(match.group(1)), None

    match = STANDALONE_YEAR_PATTERN.search(text)
    if match:
        return int(match.group(1)), None

    if STILLBORN_PATTERN.search(text):
        match = FIRST_YEAR_PATTERN.search(text)
        if match:
            year = int(match.group(1))
            return year, year

    return None, None


def extract_union_years(text: str) -> tuple[int | None, int | None]:
    """Extract (marriage_year, divorce_year) from union notes in a segment."""
    start_year = None
    end_year = None

    match = MARRIAGE_YEAR_PATTERN.search(text)
    if match:
        start_year = int(match.group(1))

    for group in iter_groups(text):
        match = DIVORCE_YEAR_PATTERN.search(group.inner)
        if match:
            end_year = int(match.group(1))
            break

    return start_year, end_year


def extract_lineage_kind(text: str) -> str:
    """Parent relationship type implied by markers like (Adopted) or (Step)."""
    for group in iter_groups(text):
        if ADOPTED_PATTERN.search(group.inner):
            return ADOPTIVE_PARENT
        if STEP_PATTERN.search(group.inner):
            return STEP_PARENT
    return BIOLOGICAL_PARENT


def has_partner_marker(text: str) -> bool:
    """True if a segment is marked as an unmarried partnership: (Partner)."""
    return any(PARTNER_PATTERN.search(group.inner) for group in iter_groups(text))


def extract_annotations(text: str) -> Annotation:
    """Clean name plus birth/death years for one segment."""
    birth_year, death_year = extract_dates(text)
    return Annotation(name=strip_metadata(text), birth_year=birth_year, death_year=death_year)
