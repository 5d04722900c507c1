"""Shared fixtures: small hand-built families."""

import pytest

from models import BIOLOGICAL_PARENT, SPOUSE, Individual, RelationshipEdge


def person(person_id: str, name: str, birth_year: int | None = None, death_year: int | None = None):
    return Individual(id=person_id, display_name=name, birth_year=birth_year, death_year=death_year)


def parent(parent_id: str, child_id: str, relationship_type: str = BIOLOGICAL_PARENT):
    return RelationshipEdge(parent_id, child_id, relationship_type)


def union(a: str, b: str, relationship_type: str = SPOUSE, start_year=None, end_year=None):
    return RelationshipEdge(a, b, relationship_type, start_year=start_year, end_year=end_year)


@pytest.fixture
def three_generations():
    """
    Grandpa & Grandma
          |
      Dad & Mom
        |    |
     Child  Sibling
    """
    individuals = [
        person("grandpa", "Grandpa Smith", 1930),
        person("grandma", "Grandma Jones", 1932),
        person("dad", "Dad Smith", 1960),
        person("mom", "Mom Brown", 1962),
        person("child", "Child Smith", 1990),
        person("sibling", "Sibling Smith", 1992),
    ]
    edges = [
        union("grandpa", "grandma"),
        parent("grandpa", "dad"),
        parent("grandma", "dad"),
        union("dad", "mom"),
        parent("dad", "child"),
        parent("mom", "child"),
        parent("dad", "sibling"),
        parent("mom", "sibling"),
    ]
    return individuals, edges


@pytest.fixture
def cousins():
    """
    Grandpa -> Dad -> Child
    Grandpa -> Aunt -> Cousin -> Cousin2
    """
    individuals = [
        person("grandpa", "Grandpa"),
        person("dad", "Dad"),
        person("aunt", "Aunt"),
        person("child", "Child"),
        person("cousin", "Cousin"),
        person("cousin2", "Cousin2"),
    ]
    edges = [
        parent("grandpa", "dad"),
        parent("grandpa", "aunt"),
        parent("dad", "child"),
        parent("aunt", "cousin"),
        parent("cousin", "cousin2"),
    ]
    return individuals, edges


def collect_person_ids(nodes) -> list[str]:
    """Every person id in a forest, in pre-order."""
    ids = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        ids.extend(node.person_ids)
        stack.extend(reversed(node.children))
    return ids
