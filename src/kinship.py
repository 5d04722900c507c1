"""Kinship resolution: how two people are related through a common ancestor."""

from collections import deque

import networkx as nx

from graph import build_graph, lineage_graph
from models import Individual, Kinship, RelationshipEdge


def ancestor_generations(lineage: nx.DiGraph, person_id: str) -> dict[str, int]:
    """
    Map every ancestor of a person (and the person, at 0) to the smallest
    number of generations separating them, in breadth-first order.
    """
    return nx.single_source_shortest_path_length(lineage.reverse(copy=False), person_id)


def trace_path(lineage: nx.DiGraph, start_id: str, ancestor_id: str) -> list[str]:
    """Shortest chain of ids from `start_id` up to `ancestor_id`, inclusive."""
    came_from: dict[str, str | None] = {start_id: None}
    queue = deque([start_id])
    while queue:
        current = queue.popleft()
        if current == ancestor_id:
            break
        for parent in lineage.predecessors(current):
            if parent not in came_from:
                came_from[parent] = current
                queue.append(parent)

    path: list[str] = []
    node: str | None = ancestor_id
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def great_prefix(generations: int) -> str:
    """Prefix for a relative `generations` away: none for 2, "great-" for 3, "2nd great-" for 4."""
    greats = generations - 2
    if greats <= 0:
        return ""
    if greats == 1:
        return "great-"
    return f"{ordinal(greats)} great-"


def removed_phrase(removed: int) -> str:
    if removed == 1:
        return "once removed"
    if removed == 2:
        return "twice removed"
    return f"{removed} times removed"


def kinship_label(generations_a: int, generations_b: int) -> str:
    """
    Name what B is to A, given each one's distance to their nearest common
    ancestor.

    (0, 1) -> "child"          (1, 0) -> "parent"
    (1, 1) -> "sibling"        (2, 1) -> "aunt/uncle"
    (2, 2) -> "1st cousin"     (2, 3) -> "1st cousin once removed"
    """
    if generations_a == 0 and generations_b == 0:
        return "same person"

    if generations_a == 0 or generations_b == 0:
        # One of them is the common ancestor
        gen = max(generations_a, generations_b)
        b_is_ancestor = generations_b == 0
        if gen == 1:
            return "parent" if b_is_ancestor else "child"
        base = "grandparent" if b_is_ancestor else "grandchild"
        return f"{great_prefix(gen)}{base}"

    if generations_a == 1 and generations_b == 1:
        return "sibling"

    if generations_a == 1 or generations_b == 1:
        other = max(generations_a, generations_b)
        base = "aunt/uncle" if generations_b == 1 else "niece/nephew"
        return f"{great_prefix(other)}{base}"

    degree = min(generations_a, generations_b) - 1
    removed = abs(generations_a - generations_b)
    if removed == 0:
        return f"{ordinal(degree)} cousin"
    return f"{ordinal(degree)} cousin {removed_phrase(removed)}"


def find_kinship(
    individuals: list[Individual],
    edges: list[RelationshipEdge],
    person_a_id: str,
    person_b_id: str,
) -> Kinship | None:
    """
    How person B is related to person A.

    The common ancestor chosen is the one minimizing the combined distance
    from both people, which picks the right ancestor when several lines
    connect them. Returns None when either id is unknown or they share no
    ancestor.
    """
    G = build_graph(individuals, edges)
    if person_a_id not in G or person_b_id not in G:
        return None

    lineage = lineage_graph(G)
    ancestors_a = ancestor_generations(lineage, person_a_id)
    ancestors_b = ancestor_generations(lineage, person_b_id)

    best_ancestor = None
    best_total = None
    for ancestor, gen_a in ancestors_a.items():
        gen_b = ancestors_b.get(ancestor)
        if gen_b is None:
            continue
        if best_total is None or gen_a + gen_b < best_total:
            best_ancestor = ancestor
            best_total = gen_a + gen_b

    if best_ancestor is None:
        return None

    generations_a = ancestors_a[best_ancestor]
    generations_b = ancestors_b[best_ancestor]
    return Kinship(
        label=kinship_label(generations_a, generations_b),
        common_ancestor_id=best_ancestor,
        path_a=trace_path(lineage, person_a_id, best_ancestor),
        path_b=trace_path(lineage, person_b_id, best_ancestor),
        generations_a=generations_a,
        generations_b=generations_b,
    )
