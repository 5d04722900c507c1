"""Parsing of single TreeDown lines into a primary person and their spouses."""

from dataclasses import dataclass, field
import re

from annotations import (
    extract_annotations,
    extract_lineage_kind,
    extract_union_years,
    has_partner_marker,
    strip_metadata,
)
from models import BIOLOGICAL_PARENT, EX_SPOUSE, PARTNER, SPOUSE


# Lines whose primary segment is one of these carry no person
PLACEHOLDER_NAMES = frozenset({"", "?", "??", "-", "_", "...", "…"})

DIVORCE_PATTERN = re.compile(r"\b(div|divorced|divorcing|separated)\b", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedSpouse:
    name: str
    relationship_type: str  # SPOUSE, EX_SPOUSE or PARTNER
    birth_year: int | None = None
    death_year: int | None = None
    start_year: int | None = None
    end_year: int | None = None


@dataclass(frozen=True)
class ParsedLine:
    primary_name: str
    birth_year: int | None = None
    death_year: int | None = None
    lineage_type: str = BIOLOGICAL_PARENT
    spouses: list[ParsedSpouse] = field(default_factory=list)


def is_placeholder(name: str) -> bool:
    return name.strip() in PLACEHOLDER_NAMES


def has_divorce_indicator(text: str) -> bool:
    return bool(DIVORCE_PATTERN.search(text))


def find_top_level_ampersands(text: str) -> list[int]:
    """Indices of every " & " separator that is not inside parentheses."""
    positions: list[int] = []
    depth = 0
    for i, ch in enumerate(text):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        elif ch == "&" and depth == 0 and 0 < i < len(text) - 1:
            if text[i - 1] == " " and text[i + 1] == " ":
                positions.append(i)
    return positions


def find_top_level_dash(text: str) -> int | None:
    """
    Index of the first " - " separator outside parentheses.

    Only one is honored: the dash form is shorthand for a single marriage.
    A "- stillborn" tail is a death note, not a separator.
    """
    depth = 0
    for i in range(len(text) - 2):
        ch = text[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth = max(0, depth - 1)
        elif depth == 0 and text[i : i + 3] == " - ":
            if strip_metadata(text[i + 3 :]).lower() == "stillborn":
                return None
            return i + 1
    return None


def split_segments(text: str, positions: list[int]) -> list[str]:
    """Cut `text` at each " & " position, dropping the separators."""
    segments: list[str] = []
    start = 0
    for pos in positions:
        segments.append(text[start : pos - 1])
        start = pos + 2
    segments.append(text[start:])
    return segments


def parse_spouse(raw: str, divorced: bool) -> ParsedSpouse | None:
    annotation = extract_annotations(raw)
    if is_placeholder(annotation.name):
        return None

    if divorced:
        relationship_type = EX_SPOUSE
    elif has_partner_marker(raw):
        relationship_type = PARTNER
    else:
        relationship_type = SPOUSE

    start_year, end_year = extract_union_years(raw)
    return ParsedSpouse(
        name=annotation.name,
        relationship_type=relationship_type,
        birth_year=annotation.birth_year,
        death_year=annotation.death_year,
        start_year=start_year,
        end_year=end_year,
    )


def parse_primary(raw: str) -> ParsedLine | None:
    annotation = extract_annotations(raw)
    if is_placeholder(annotation.name):
        return None
    return ParsedLine(
        primary_name=annotation.name,
        birth_year=annotation.birth_year,
        death_year=annotation.death_year,
        lineage_type=extract_lineage_kind(raw),
    )


def parse_line(raw: str) -> ParsedLine | None:
    """
    Parse a raw line into a primary person and their spouses.
    Returns None if the line names nobody.

    Examples:
    - "James McGhee (1936-2006) & Charlene Carter (M- 1963, Divorced) & Sharon Callan"
      -> James McGhee; spouses Charlene Carter (ex_spouse), Sharon Callan (spouse)
    - "Margaret (Peggy) McGinty (1933-2024) & James Brannigan (1932-2004)"
      -> Margaret (Peggy) McGinty; spouse James Brannigan
    - "Maureen - Dennis Murray" -> Maureen; spouse Dennis Murray
    - "Timothy" -> Timothy; no spouses
    """
    raw = raw.strip()

    ampersands = find_top_level_ampersands(raw)
    if ampersands:
        segments = split_segments(raw, ampersands)
        primary = parse_primary(segments[0])
        if primary is None:
            return None

        spouses: list[ParsedSpouse] = []
        for i, segment in enumerate(segments[1:], start=1):
            # Anyone followed by another spouse on the same line is a former spouse
            has_later_spouse = i < len(segments) - 1
            spouse = parse_spouse(segment, has_divorce_indicator(segment) or has_later_spouse)
            if spouse is not None:
                spouses.append(spouse)
        return ParsedLine(
            primary_name=primary.primary_name,
            birth_year=primary.birth_year,
            death_year=primary.death_year,
            lineage_type=primary.lineage_type,
            spouses=spouses,
        )

    dash = find_top_level_dash(raw)
    if dash is not None:
        primary = parse_primary(raw[: dash - 1])
        if primary is None:
            return None
        spouse = parse_spouse(raw[dash + 2 :], has_divorce_indicator(raw))
        return ParsedLine(
            primary_name=primary.primary_name,
            birth_year=primary.birth_year,
            death_year=primary.death_year,
            lineage_type=primary.lineage_type,
            spouses=[spouse] if spouse is not None else [],
        )

    return parse_primary(raw)
