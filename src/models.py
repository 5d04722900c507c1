"""Data classes for family tree entities."""

from dataclasses import dataclass, field


BIOLOGICAL_PARENT = "biological_parent"
ADOPTIVE_PARENT = "adoptive_parent"
STEP_PARENT = "step_parent"
SPOUSE = "spouse"
EX_SPOUSE = "ex_spouse"
PARTNER = "partner"

PARENT_TYPES = frozenset({BIOLOGICAL_PARENT, ADOPTIVE_PARENT, STEP_PARENT})
SPOUSE_TYPES = frozenset({SPOUSE, EX_SPOUSE, PARTNER})

MALE = "male"
FEMALE = "female"


@dataclass(frozen=True)
class Individual:
    id: str
    display_name: str
    birth_year: int | None = None
    death_year: int | None = None
    gender: str | None = None  # MALE, FEMALE or None when unknown


@dataclass(frozen=True)
class RelationshipEdge:
    source_id: str
    target_id: str
    relationship_type: str  # parent types point parent -> child
    start_year: int | None = None
    end_year: int | None = None

    @property
    def is_union(self) -> bool:
        return self.relationship_type in SPOUSE_TYPES

    def key(self) -> tuple[str, str, str]:
        """Identity of the edge; union edges ignore direction."""
        if self.is_union:
            a, b = sorted((self.source_id, self.target_id))
            return (a, b, self.relationship_type)
        return (self.source_id, self.target_id, self.relationship_type)


@dataclass
class ParseResult:
    individuals: list[Individual] = field(default_factory=list)
    edges: list[RelationshipEdge] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        """Wire shape handed to the storage layer."""
        return {
            "individuals": [
                {
                    "tempId": p.id,
                    "displayName": p.display_name,
                    "birthYear": p.birth_year,
                    "deathYear": p.death_year,
                }
                for p in self.individuals
            ],
            "edges": [
                {
                    "sourceTempId": e.source_id,
                    "targetTempId": e.target_id,
                    "type": e.relationship_type,
                }
                for e in self.edges
            ],
            "warnings": list(self.warnings),
        }


@dataclass
class TreeNode:
    """
    A family unit in a derived tree view: one person, a couple, or one
    partnership of a person with several partners.
    """

    id: str
    name: str
    person_ids: list[str]
    union_type: str | None = None
    union_with: str | None = None  # partnership nodes: id of the person partnered
    children: list["TreeNode"] = field(default_factory=list)


@dataclass(frozen=True)
class Union:
    type: str  # married, divorced, partners
    label: str
    partner: Individual
    start_year: int | None
    end_year: int | None


@dataclass(frozen=True)
class Kinship:
    label: str
    common_ancestor_id: str
    path_a: list[str]
    path_b: list[str]
    generations_a: int
    generations_b: int
