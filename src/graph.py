"""NetworkX graph building and relationship graph algorithms."""

import logging
import math

import networkx as nx

from models import PARENT_TYPES, SPOUSE_TYPES, Individual, RelationshipEdge


logger = logging.getLogger(__name__)

WHITE, GRAY, BLACK = 0, 1, 2


def build_graph(individuals: list[Individual], edges: list[RelationshipEdge]) -> nx.MultiDiGraph:
    """
    Build a NetworkX multigraph from individuals and relationship edges.

    Edges are keyed by relationship type, so a pair of people can hold at most
    one edge of each type. Union edges are stored once in the direction they
    were given. Edges touching anyone outside `individuals` are dropped, which
    is expected when working on a filtered subset.
    """
    G = nx.MultiDiGraph()

    for p in individuals:
        G.add_node(
            p.id,
            person_name=p.display_name,
            birth_year=p.birth_year,
            death_year=p.death_year,
            gender=p.gender,
        )

    for e in edges:
        if e.source_id not in G or e.target_id not in G:
            logger.debug(
                "Dropping %s edge %s -> %s: endpoint not in working set",
                e.relationship_type,
                e.source_id,
                e.target_id,
            )
            continue
        if e.is_union and G.has_edge(e.target_id, e.source_id, key=e.relationship_type):
            continue
        G.add_edge(
            e.source_id,
            e.target_id,
            key=e.relationship_type,
            relationship_type=e.relationship_type,
            start_year=e.start_year,
            end_year=e.end_year,
        )

    return G


def parent_edges(G: nx.MultiDiGraph) -> list[tuple[str, str]]:
    """Distinct (parent, child) pairs, in insertion order."""
    pairs = (
        (u, v) for u, v, k in G.edges(keys=True) if k in PARENT_TYPES
    )
    return list(dict.fromkeys(pairs))


def union_edges(G: nx.MultiDiGraph, person_id: str):
    """Yield (partner_id, relationship_type, data) for every union of a person."""
    for _, partner, key, data in G.out_edges(person_id, keys=True, data=True):
        if key in SPOUSE_TYPES:
            yield partner, key, data
    for partner, _, key, data in G.in_edges(person_id, keys=True, data=True):
        if key in SPOUSE_TYPES:
            yield partner, key, data


def union_type_between(G: nx.MultiDiGraph, a: str, b: str) -> str | None:
    for partner, key, _ in union_edges(G, a):
        if partner == b:
            return key
    return None


def find_back_edges(G: nx.MultiDiGraph) -> set[tuple[str, str]]:
    """
    Parent -> child edges that close a cycle.

    Three-color depth-first search over parent edges, started from every
    person in insertion order. An edge reaching a node that is still on the
    DFS stack (GRAY) is a back edge. Runs on an explicit stack so deep trees
    cannot exhaust the interpreter's recursion limit.
    """
    children: dict[str, list[str]] = {n: [] for n in G}
    for parent, child in parent_edges(G):
        children[parent].append(child)

    color = dict.fromkeys(G, WHITE)
    back_edges: set[tuple[str, str]] = set()

    for start in G:
        if color[start] != WHITE:
            continue
        color[start] = GRAY
        stack = [(start, iter(children[start]))]
        while stack:
            node, remaining = stack[-1]
            for child in remaining:
                if color[child] == GRAY:
                    back_edges.add((node, child))
                elif color[child] == WHITE:
                    color[child] = GRAY
                    stack.append((child, iter(children[child])))
                    break
            else:
                color[node] = BLACK
                stack.pop()

    if back_edges:
        logger.debug("Suppressing %d cycle-forming parent edges", len(back_edges))
    return back_edges


def lineage_graph(G: nx.MultiDiGraph) -> nx.DiGraph:
    """
    Acyclic parent -> child graph with cycle-forming edges removed.

    Every derived view walks this graph, so traversals terminate even when
    the source data says someone is their own ancestor.
    """
    back_edges = find_back_edges(G)
    L = nx.DiGraph()
    L.add_nodes_from(G.nodes(data=True))
    for u, v, key in G.edges(keys=True):
        if key in PARENT_TYPES and (u, v) not in back_edges and not L.has_edge(u, v):
            L.add_edge(u, v, relationship_type=key)
    return L


def connected_component(
    individuals: list[Individual], edges: list[RelationshipEdge], start_id: str
) -> set[str]:
    """Everyone reachable from `start_id` through parent or union edges."""
    G = build_graph(individuals, edges)
    if start_id not in G:
        return set()
    return set(nx.node_connected_component(G.to_undirected(as_view=True), start_id))


def birth_sort_key(person: Individual) -> float:
    """Birth year for ordering; unknown years sort last."""
    return person.birth_year if person.birth_year is not None else math.inf


def select_root(individuals: list[Individual], edges: list[RelationshipEdge]) -> str | None:
    """
    Pick the person to draw at the top of the family tree.

    Candidates are people with no parents. Among those with descendants the
    winner has the most descendants, then the earliest birth year, then the
    name latest in the alphabet. If nobody is parentless (every person sits
    on a cycle), the most connected person wins.
    """
    if not individuals:
        return None

    G = build_graph(individuals, edges)
    has_parents = {child for _, child in parent_edges(G)}
    candidates = [p for p in individuals if p.id not in has_parents]

    if not candidates:
        degree = dict(G.degree())
        return max(individuals, key=lambda p: degree[p.id]).id

    lineage = lineage_graph(G)
    scored = []
    for person in candidates:
        descendants = len(nx.descendants(lineage, person.id))
        if descendants > 0:
            scored.append((person, descendants))

    if not scored:
        return min(candidates, key=birth_sort_key).id

    # Stable sorts: the later sort takes precedence over the earlier one
    scored.sort(key=lambda item: item[0].display_name.casefold(), reverse=True)
    scored.sort(key=lambda item: (-item[1], birth_sort_key(item[0])))
    return scored[0][0].id


def siblings(
    individuals: list[Individual], edges: list[RelationshipEdge], person_id: str
) -> list[tuple[Individual, str]]:
    """
    People sharing at least one parent with `person_id`.

    Each sibling is paired with "full" when two or more parents are shared,
    otherwise "half".
    """
    G = build_graph(individuals, edges)
    if person_id not in G:
        return []
    lineage = lineage_graph(G)
    people = {p.id: p for p in individuals}

    shared: dict[str, int] = {}
    for parent in lineage.predecessors(person_id):
        for child in lineage.successors(parent):
            if child != person_id:
                shared[child] = shared.get(child, 0) + 1

    return [
        (people[sibling_id], "full" if count >= 2 else "half")
        for sibling_id, count in shared.items()
    ]
