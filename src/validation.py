"""Data-quality validation for imported family tree data."""

from graph import build_graph, find_back_edges, parent_edges
from models import Individual, RelationshipEdge


MIN_PARENT_AGE = 12


def validate_graph(individuals: list[Individual], edges: list[RelationshipEdge]) -> list[str]:
    """
    Validate family tree data for:
    - Cycles in parent-child relationships
    - Impossible ages (child born before parent)
    - Suspiciously young parents
    - Death before birth

    Returns a list of warning messages. Nothing here is fatal; tree views
    already suppress cycle edges on their own.
    """
    warnings: list[str] = []
    G = build_graph(individuals, edges)

    def name(person_id: str) -> str:
        return G.nodes[person_id]["person_name"]

    for parent, child in sorted(find_back_edges(G)):
        warnings.append(
            f"Cycle detected in parent-child relationships: {name(parent)} -> {name(child)}"
        )

    for parent, child in parent_edges(G):
        parent_birth = G.nodes[parent]["birth_year"]
        child_birth = G.nodes[child]["birth_year"]
        if parent_birth is None or child_birth is None:
            continue

        if child_birth < parent_birth:
            warnings.append(f"Impossible: {name(child)} born before parent {name(parent)}")
        elif child_birth - parent_birth < MIN_PARENT_AGE:
            warnings.append(
                f"Suspicious: {name(parent)} was less than {MIN_PARENT_AGE} years "
                f"old when {name(child)} was born"
            )

    for person_id, data in G.nodes(data=True):
        birth = data["birth_year"]
        death = data["death_year"]
        if birth is not None and death is not None and death < birth:
            warnings.append(f"Impossible: {name(person_id)} died before being born")

    return warnings
