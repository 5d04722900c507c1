"""Tests for graph building, cycle suppression, root selection and siblings."""

import networkx as nx

from conftest import parent, person, union
from graph import (
    build_graph,
    connected_component,
    find_back_edges,
    lineage_graph,
    select_root,
    siblings,
)
from models import EX_SPOUSE, SPOUSE


class TestBuildGraph:
    def test_nodes_carry_person_attributes(self, three_generations):
        G = build_graph(*three_generations)
        assert G.nodes["grandpa"]["person_name"] == "Grandpa Smith"
        assert G.nodes["grandpa"]["birth_year"] == 1930

    def test_dangling_edges_are_dropped(self):
        G = build_graph([person("a", "A")], [parent("a", "ghost"), union("ghost", "a")])
        assert list(G.nodes) == ["a"]
        assert G.number_of_edges() == 0

    def test_reversed_union_stored_once(self):
        individuals = [person("a", "A"), person("b", "B")]
        G = build_graph(individuals, [union("a", "b"), union("b", "a")])
        assert G.number_of_edges() == 1

    def test_different_union_types_are_kept(self):
        individuals = [person("a", "A"), person("b", "B")]
        G = build_graph(individuals, [union("a", "b", EX_SPOUSE), union("a", "b", SPOUSE)])
        assert set(G["a"]["b"]) == {EX_SPOUSE, SPOUSE}


class TestCycles:
    def test_back_edge_found(self):
        individuals = [person("a", "A"), person("b", "B"), person("c", "C")]
        edges = [parent("a", "b"), parent("b", "c"), parent("c", "a")]
        assert find_back_edges(build_graph(individuals, edges)) == {("c", "a")}

    def test_acyclic_data_has_no_back_edges(self, three_generations):
        assert find_back_edges(build_graph(*three_generations)) == set()

    def test_lineage_graph_is_acyclic_and_reachable_from_roots(self):
        individuals = [person(pid, pid.upper()) for pid in "abcdxy"]
        edges = [
            parent("a", "b"),
            parent("b", "c"),
            parent("c", "a"),
            parent("c", "d"),
            parent("x", "y"),
            parent("y", "x"),
        ]
        L = lineage_graph(build_graph(individuals, edges))

        assert nx.is_directed_acyclic_graph(L)
        roots = [n for n in L if L.in_degree(n) == 0]
        reachable = set(roots)
        for root in roots:
            reachable |= nx.descendants(L, root)
        assert reachable == set(L)

    def test_unions_do_not_count_as_cycles(self):
        individuals = [person("a", "A"), person("b", "B")]
        G = build_graph(individuals, [union("a", "b"), union("b", "a", EX_SPOUSE)])
        assert find_back_edges(G) == set()


class TestConnectedComponent:
    def test_follows_parent_and_union_edges(self, three_generations):
        individuals, edges = three_generations
        individuals = individuals + [person("stranger", "Stranger")]

        component = connected_component(individuals, edges, "child")
        assert component == {"grandpa", "grandma", "dad", "mom", "child", "sibling"}
        assert connected_component(individuals, edges, "stranger") == {"stranger"}

    def test_unknown_start(self, three_generations):
        assert connected_component(*three_generations, "nobody") == set()


class TestSelectRoot:
    def test_most_descendants_wins(self):
        individuals = [person("a", "A"), person("a1", "A1"), person("a2", "A2"), person("b", "B")]
        individuals += [person(f"b{i}", f"B{i}") for i in range(1, 6)]
        edges = [parent("a", "a1"), parent("a1", "a2")]
        edges += [parent("b", f"b{i}") for i in range(1, 6)]

        assert select_root(individuals, edges) == "b"

    def test_earliest_birth_breaks_ties(self):
        individuals = [
            person("young", "Young", 1950),
            person("old", "Old", 1900),
            person("yc", "Young Child"),
            person("oc", "Old Child"),
        ]
        edges = [parent("young", "yc"), parent("old", "oc")]
        assert select_root(individuals, edges) == "old"

    def test_unknown_birth_sorts_last(self):
        individuals = [
            person("unknown", "Unknown"),
            person("known", "Known", 1950),
            person("uc", "Unknown Child"),
            person("kc", "Known Child"),
        ]
        edges = [parent("unknown", "uc"), parent("known", "kc")]
        assert select_root(individuals, edges) == "known"

    def test_later_name_breaks_remaining_ties(self):
        individuals = [person("adam", "Adam"), person("zed", "Zed"), person("c1", "C1"), person("c2", "C2")]
        edges = [parent("adam", "c1"), parent("zed", "c2")]
        assert select_root(individuals, edges) == "zed"

    def test_three_generations(self, three_generations):
        assert select_root(*three_generations) == "grandpa"

    def test_nobody_has_descendants(self):
        individuals = [person("a", "A", 1950), person("b", "B", 1940), person("c", "C")]
        assert select_root(individuals, [union("a", "b")]) == "b"

    def test_everyone_has_a_parent(self):
        individuals = [person("a", "A"), person("b", "B"), person("c", "C")]
        edges = [parent("a", "b"), parent("b", "c"), parent("c", "a"), parent("c", "b"), union("b", "a")]
        assert select_root(individuals, edges) == "b"

    def test_empty(self):
        assert select_root([], []) is None


class TestSiblings:
    def test_full_and_half(self, three_generations):
        individuals, edges = three_generations
        individuals = individuals + [person("half", "Half Smith")]
        edges = edges + [parent("dad", "half")]

        found = {p.id: kind for p, kind in siblings(individuals, edges, "child")}
        assert found == {"sibling": "full", "half": "half"}

    def test_only_child(self, three_generations):
        assert siblings(*three_generations, "dad") == []

    def test_unknown_person(self, three_generations):
        assert siblings(*three_generations, "nobody") == []
