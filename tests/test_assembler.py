"""End-to-end tests for importing TreeDown text."""

import pytest

from assembler import ImportOptions, import_text
from models import ADOPTIVE_PARENT, BIOLOGICAL_PARENT, EX_SPOUSE, SPOUSE


def by_name(result):
    return {p.display_name: p for p in result.individuals}


def edge_set(result):
    names = {p.id: p.display_name for p in result.individuals}
    return {(names[e.source_id], names[e.target_id], e.relationship_type) for e in result.edges}


class TestImportText:
    def test_first_name_child_inherits_father_surname(self):
        result = import_text(
            "Margaret (Peggy) McGinty (1933-2024) & James Brannigan (1932-2004)\n"
            "    Timothy\n"
        )
        people = by_name(result)

        assert set(people) == {"Margaret (Peggy) McGinty", "James Brannigan", "Timothy Brannigan"}
        assert people["Margaret (Peggy) McGinty"].birth_year == 1933
        assert edge_set(result) == {
            ("Margaret (Peggy) McGinty", "James Brannigan", SPOUSE),
            ("Margaret (Peggy) McGinty", "Timothy Brannigan", BIOLOGICAL_PARENT),
            ("James Brannigan", "Timothy Brannigan", BIOLOGICAL_PARENT),
        }
        assert result.warnings == []

    def test_surname_carries_through_generations(self):
        result = import_text("John McGinty & Mary Fousek\n    James & Anne\n        Tom\n")
        assert {"James McGinty", "Tom McGinty", "Anne"} <= set(by_name(result))

    def test_repeated_block_is_deduplicated(self):
        block = "John McGinty (1870-1909) & Margaret Kirk\n\tJames McGinty (1896-1950)\n"
        result = import_text(block + block)

        assert len(result.individuals) == 3
        assert len(result.edges) == 3

    def test_same_name_different_birth_years(self):
        result = import_text("John McGinty (1870-1909) & Margaret Kirk\n\tJohn McGinty (1925-1991)\n")
        johns = [p for p in result.individuals if p.display_name == "John McGinty"]

        assert sorted(p.birth_year for p in johns) == [1870, 1925]
        old, young = sorted(johns, key=lambda p: p.birth_year)
        assert any(
            e.source_id == old.id and e.target_id == young.id and e.relationship_type == BIOLOGICAL_PARENT
            for e in result.edges
        )

    def test_children_belong_to_last_spouse_only(self):
        result = import_text("James (1936-2006) & Charlene (Divorced) & Sharon\n    Kid\n")
        edges = edge_set(result)

        assert ("James", "Charlene", EX_SPOUSE) in edges
        assert ("James", "Sharon", SPOUSE) in edges
        parents = {source for source, target, kind in edges if target == "Kid"}
        assert parents == {"James", "Sharon"}

    def test_union_years_on_edges(self):
        result = import_text("John Smith & Mary Jones (M- 1960, Div 1972)\n")
        (edge,) = result.edges
        assert edge.relationship_type == EX_SPOUSE
        assert (edge.start_year, edge.end_year) == (1960, 1972)

    def test_adopted_child(self):
        result = import_text("John Smith & Mary Smith\n\tKevin (Adopted)\n")
        kinds = {kind for source, target, kind in edge_set(result) if target == "Kevin Smith"}
        assert kinds == {ADOPTIVE_PARENT}

    def test_multiple_roots(self):
        result = import_text("John Smith\n    Tim\nMary Jones\n    Ann\n")
        assert set(by_name(result)) == {"John Smith", "Tim Smith", "Mary Jones", "Ann Jones"}

    def test_no_duplicate_edges(self):
        result = import_text("Ann Lee & Bob Lee\nBob Lee & Ann Lee\n")
        assert len(result.edges) == 1

    def test_ids_are_fresh_per_import(self):
        first = import_text("Ann\n")
        second = import_text("Bob\n")
        assert first.individuals[0].id == second.individuals[0].id == "import-0"

    def test_options(self):
        result = import_text("Ann\n\tBob\n", ImportOptions(tab_width=2, id_prefix="tree"))
        assert [p.id for p in result.individuals] == ["tree-0", "tree-1"]
        assert len(result.edges) == 1


class TestWarnings:
    def test_unparseable_line_skips_its_children(self):
        result = import_text("?\n\tOrphan\nMary\n")

        assert [p.display_name for p in result.individuals] == ["Mary"]
        assert result.warnings == ["Skipping unparseable line 1: ?"]

    def test_long_lines_are_truncated_in_warnings(self):
        result = import_text("? & " + "x" * 100 + "\nMary\n")
        (warning,) = result.warnings
        assert warning == "Skipping unparseable line 1: " + ("? & " + "x" * 100)[:60]

    @pytest.mark.parametrize("text", ["", "   \n\n\t\n"])
    def test_empty_input(self, text):
        result = import_text(text)
        assert result.individuals == []
        assert result.edges == []
        assert result.warnings == ["Empty input"]

    def test_nothing_parseable(self):
        result = import_text("?\n??\n")
        assert result.individuals == []
        assert result.warnings[-1] == "No individuals found in input"

    def test_none_is_rejected(self):
        with pytest.raises(ValueError):
            import_text(None)


def test_deeply_nested_input():
    text = "\n".join(" " * depth + f"P{depth}" for depth in range(3000))
    result = import_text(text)
    assert len(result.individuals) == 3000
    assert len(result.edges) == 2999


def test_as_dict_shape():
    result = import_text("John Smith (1900-1970) & Mary Jones\n")
    data = result.as_dict()

    assert data["individuals"][0] == {
        "tempId": "import-0",
        "displayName": "John Smith",
        "birthYear": 1900,
        "deathYear": 1970,
    }
    assert data["edges"] == [
        {"sourceTempId": "import-0", "targetTempId": "import-1", "type": SPOUSE}
    ]
    assert data["warnings"] == []
