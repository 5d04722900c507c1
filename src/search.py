"""Search individuals by display name."""

from dataclasses import dataclass, field

from models import Individual


@dataclass
class SearchMatch:
    individual: Individual
    match_ranges: list[tuple[int, int]] = field(default_factory=list)  # [start, end)


def fold(text: str) -> str:
    """Lower-case each character, keeping any whose lower-case form changes length."""
    return "".join(ch if len(ch.lower()) != 1 else ch.lower() for ch in text)


def search_individuals(individuals: list[Individual], query: str) -> list[SearchMatch]:
    """
    Case-insensitive substring search over display names.

    Every occurrence of the query is reported as a character range so callers
    can highlight it. Names starting with the query come first, then the rest,
    each group alphabetical. An empty query matches everyone, without ranges.
    """
    trimmed = query.strip()
    if not trimmed:
        return [SearchMatch(individual=p) for p in individuals]

    needle = fold(trimmed)
    results: list[SearchMatch] = []
    for person in individuals:
        haystack = fold(person.display_name)
        ranges = []
        start = haystack.find(needle)
        while start != -1:
            ranges.append((start, start + len(needle)))
            start = haystack.find(needle, start + 1)
        if ranges:
            results.append(SearchMatch(individual=person, match_ranges=ranges))

    results.sort(
        key=lambda m: (m.match_ranges[0][0] != 0, m.individual.display_name.casefold())
    )
    return results
