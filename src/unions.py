"""Union (marriage and partnership) timelines."""

from models import EX_SPOUSE, PARTNER, SPOUSE, Individual, RelationshipEdge, Union


UNION_TYPES = {
    SPOUSE: ("married", "Married"),
    EX_SPOUSE: ("divorced", "Divorced"),
    PARTNER: ("partners", "Partners"),
}

UNION_LABELS = {
    SPOUSE: "Married to",
    EX_SPOUSE: "Divorced from",
    PARTNER: "Partner of",
}


def union_sort_key(start_year: int | None, partner_name: str) -> tuple:
    """Chronological by start year, undated last, then by partner name."""
    return (start_year is None, start_year or 0, partner_name.casefold())


def resolve_unions(
    individuals: list[Individual], edges: list[RelationshipEdge], person_id: str
) -> list[Union]:
    """
    All unions of a person, ordered by start year (undated last) and then
    alphabetically by partner name. Unions with partners missing from
    `individuals` are skipped.
    """
    people = {p.id: p for p in individuals}
    unions: list[Union] = []
    seen: set[tuple[str, str, str]] = set()

    for e in edges:
        if not e.is_union or person_id not in (e.source_id, e.target_id):
            continue
        if e.key() in seen:
            continue
        seen.add(e.key())

        partner_id = e.target_id if e.source_id == person_id else e.source_id
        partner = people.get(partner_id)
        if partner is None:
            continue

        union_type, label = UNION_TYPES[e.relationship_type]
        unions.append(
            Union(
                type=union_type,
                label=label,
                partner=partner,
                start_year=e.start_year,
                end_year=e.end_year,
            )
        )

    unions.sort(key=lambda u: union_sort_key(u.start_year, u.partner.display_name))
    return unions


def format_union_date_range(start_year: int | None, end_year: int | None) -> str | None:
    """
    start=1958, end=1990 -> "1958-1990"
    start=1958, end=None -> "since 1958"
    start=None, end=1990 -> "until 1990"
    """
    if start_year and end_year:
        return f"{start_year}-{end_year}"
    if start_year:
        return f"since {start_year}"
    if end_year:
        return f"until {end_year}"
    return None


def union_label(relationship_type: str) -> str:
    """Phrase for list views: "Married to", "Divorced from", "Partner of"."""
    return UNION_LABELS.get(relationship_type, relationship_type)
