"""Derived tree views: whole-family, ancestor, and descendant forests."""

from collections import deque

import networkx as nx

from graph import build_graph, lineage_graph, select_root, union_edges, union_type_between
from models import Individual, RelationshipEdge, TreeNode
from unions import union_sort_key


def format_lifespan(birth_year: int | None, death_year: int | None) -> str:
    """Lifespan text such as 1870-1909, b. 1870 or ?-1909; empty when unknown."""
    if death_year is not None:
        return f"{birth_year if birth_year is not None else '?'}-{death_year}"
    if birth_year is not None:
        return f"b. {birth_year}"
    return ""


class TreeBuilder:
    """Creates family-unit nodes with ids unique within one view."""

    def __init__(self, G: nx.MultiDiGraph):
        self.G = G
        self.lineage = lineage_graph(G)
        self._next_id = 0

    def label(self, person_id: str) -> str:
        data = self.G.nodes[person_id]
        lifespan = format_lifespan(data["birth_year"], data["death_year"])
        name = data["person_name"]
        return f"{name} ({lifespan})" if lifespan else name

    def make_node(
        self,
        person_ids: list[str],
        union_type: str | None = None,
        union_with: str | None = None,
    ) -> TreeNode:
        node = TreeNode(
            id=f"n-{self._next_id}",
            name=" & ".join(self.label(pid) for pid in person_ids),
            person_ids=list(person_ids),
            union_type=union_type,
            union_with=union_with,
        )
        self._next_id += 1
        return node

    def ordered_partners(self, person_id: str) -> list[tuple[str, str]]:
        partners = sorted(
            union_edges(self.G, person_id),
            key=lambda item: union_sort_key(
                item[2].get("start_year"), self.G.nodes[item[0]]["person_name"]
            ),
        )
        return [(partner, kind) for partner, kind, _ in partners]

    def children_of(self, members: list[str], child_filter: set[str] | None) -> list[str]:
        """Children of any member, deduplicated, in insertion order."""
        return list(
            dict.fromkeys(
                child
                for member in members
                for child in self.lineage.successors(member)
                if child_filter is None or child in child_filter
            )
        )

    def build_down(
        self,
        root_id: str,
        partner_filter: set[str] | None = None,
        child_filter: set[str] | None = None,
    ) -> list[TreeNode]:
        """
        Descend from `root_id`, grouping each person with their partners and
        hanging children beneath the partnership that produced them.

        A person with one unplaced partner becomes a couple node holding both
        partners' children. A person with several gets a node of their own,
        with one partnership node per partner (`union_with` set) holding that
        partner's children; children with no listed co-parent hang directly
        under the person.

        Children are visited depth-first in order; anyone already placed
        (through a cousin marriage, say) is not repeated.
        """
        placed: set[str] = set()
        forest: list[TreeNode] = []
        stack: list[tuple[str, TreeNode | None]] = [(root_id, None)]

        while stack:
            person_id, parent_node = stack.pop()
            if person_id in placed:
                continue
            placed.add(person_id)

            partners: dict[str, str] = {}
            for partner_id, kind in self.ordered_partners(person_id):
                if partner_id in placed:
                    continue
                if partner_filter is not None and partner_id not in partner_filter:
                    continue
                partners.setdefault(partner_id, kind)
            placed.update(partners)

            groups: list[tuple[TreeNode, list[str]]] = []
            if len(partners) <= 1:
                members = [person_id, *partners]
                node = self.make_node(members, next(iter(partners.values()), None))
                groups.append((node, self.children_of(members, child_filter)))
            else:
                node = self.make_node([person_id])
                assigned: set[str] = set()
                for partner_id, kind in partners.items():
                    union_node = self.make_node([partner_id], kind, union_with=person_id)
                    node.children.append(union_node)
                    shared = [
                        child
                        for child in self.children_of([partner_id], child_filter)
                        if child not in assigned
                    ]
                    assigned.update(shared)
                    groups.append((union_node, shared))
                single = [
                    child
                    for child in self.children_of([person_id], child_filter)
                    if child not in assigned
                ]
                groups.append((node, single))

            if parent_node is None:
                forest.append(node)
            else:
                parent_node.children.append(node)

            for target, child_ids in reversed(groups):
                for child_id in reversed(child_ids):
                    stack.append((child_id, target))

        return forest

    def pair_parents(self, parent_ids: list[str]) -> list[list[str]]:
        """Group parents into couples where a union links them."""
        units: list[list[str]] = []
        remaining = list(parent_ids)
        while remaining:
            parent = remaining.pop(0)
            partner = next(
                (other for other in remaining if union_type_between(self.G, parent, other)),
                None,
            )
            if partner is None:
                units.append([parent])
            else:
                remaining.remove(partner)
                units.append([parent, partner])
        return units

    def build_up(self, focus_id: str) -> list[TreeNode]:
        """Walk strictly up parent edges; a node's children are its parents."""
        root = self.make_node([focus_id])
        placed = {focus_id}
        queue = deque([root])

        while queue:
            node = queue.popleft()
            for member in node.person_ids:
                parents = [p for p in self.lineage.predecessors(member) if p not in placed]
                for unit in self.pair_parents(parents):
                    placed.update(unit)
                    union_type = union_type_between(self.G, *unit) if len(unit) == 2 else None
                    parent_node = self.make_node(unit, union_type)
                    node.children.append(parent_node)
                    queue.append(parent_node)

        return [root]


def ancestor_subgraph(
    individuals: list[Individual], edges: list[RelationshipEdge], focus_id: str
) -> list[TreeNode]:
    """
    Pedigree of `focus_id`: the focus person at the root, parents below.

    Only direct ancestors appear; siblings, aunts, uncles, and cousins are
    never reached because the walk only follows child -> parent edges.
    """
    G = build_graph(individuals, edges)
    if focus_id not in G:
        return []
    return TreeBuilder(G).build_up(focus_id)


def descendant_subgraph(
    individuals: list[Individual], edges: list[RelationshipEdge], focus_id: str
) -> list[TreeNode]:
    """
    Descendants of `focus_id`, grouped into family units.

    A spouse joins a unit only when they co-parent someone in the view, so
    childless in-laws and the focus person's own parents stay out.
    """
    G = build_graph(individuals, edges)
    if focus_id not in G:
        return []

    builder = TreeBuilder(G)
    descendants = nx.descendants(builder.lineage, focus_id) | {focus_id}
    co_parents = {
        parent
        for person in descendants - {focus_id}
        for parent in builder.lineage.predecessors(person)
    }
    return builder.build_down(
        focus_id,
        partner_filter=descendants | co_parents,
        child_filter=descendants,
    )


def family_tree(individuals: list[Individual], edges: list[RelationshipEdge]) -> list[TreeNode]:
    """The whole family hanging from the automatically selected root."""
    root_id = select_root(individuals, edges)
    if root_id is None:
        return []
    return TreeBuilder(build_graph(individuals, edges)).build_down(root_id)
