"""Tests for union timelines."""

import pytest

from conftest import person, union
from models import EX_SPOUSE, PARTNER, SPOUSE
from unions import format_union_date_range, resolve_unions, union_label


@pytest.fixture
def married_often():
    individuals = [
        person("p", "Pat"),
        person("q", "Quinn"),
        person("r", "Riley"),
        person("s", "Beth"),
        person("t", "Anna"),
    ]
    edges = [
        union("p", "q", EX_SPOUSE, start_year=1970, end_year=1975),
        union("r", "p", EX_SPOUSE, start_year=1960),
        union("p", "s", PARTNER),
        union("t", "p", SPOUSE),
    ]
    return individuals, edges


class TestResolveUnions:
    def test_order_dated_first_then_by_name(self, married_often):
        found = resolve_unions(*married_often, "p")
        assert [u.partner.display_name for u in found] == ["Riley", "Quinn", "Anna", "Beth"]

    def test_types_and_labels(self, married_often):
        found = {u.partner.id: u for u in resolve_unions(*married_often, "p")}

        assert (found["q"].type, found["q"].label) == ("divorced", "Divorced")
        assert (found["s"].type, found["s"].label) == ("partners", "Partners")
        assert (found["t"].type, found["t"].label) == ("married", "Married")
        assert (found["q"].start_year, found["q"].end_year) == (1970, 1975)

    def test_seen_from_either_side(self, married_often):
        (only,) = resolve_unions(*married_often, "r")
        assert only.partner.id == "p"

    def test_same_year_sorted_by_name(self):
        individuals = [person("p", "Pat"), person("z", "Zoe"), person("a", "Amy")]
        edges = [union("p", "z", start_year=1980), union("p", "a", start_year=1980)]
        assert [u.partner.id for u in resolve_unions(individuals, edges, "p")] == ["a", "z"]

    def test_missing_partner_skipped(self):
        found = resolve_unions([person("p", "Pat")], [union("p", "ghost")], "p")
        assert found == []

    def test_duplicate_union_listed_once(self):
        individuals = [person("p", "Pat"), person("q", "Quinn")]
        assert len(resolve_unions(individuals, [union("p", "q"), union("q", "p")], "p")) == 1


def test_format_union_date_range():
    assert format_union_date_range(1958, 1990) == "1958-1990"
    assert format_union_date_range(1958, None) == "since 1958"
    assert format_union_date_range(None, 1990) == "until 1990"
    assert format_union_date_range(None, None) is None


def test_union_label():
    assert union_label(SPOUSE) == "Married to"
    assert union_label(EX_SPOUSE) == "Divorced from"
    assert union_label(PARTNER) == "Partner of"
