"""Assemble parsed TreeDown lines into individuals and relationship edges."""

from dataclasses import dataclass
import logging

from identity import IdentityResolver, apply_inherited_surname, resolve_child_surname
from indentation import TAB_WIDTH, LineNode, build_forest
from models import ParseResult, RelationshipEdge
from names import DEFAULT_GENDER_LOOKUP, GenderLookup
from parsing import parse_line


logger = logging.getLogger(__name__)

WARNING_PREVIEW_LENGTH = 60


@dataclass
class ImportOptions:
    tab_width: int = TAB_WIDTH
    gender_lookup: GenderLookup = DEFAULT_GENDER_LOOKUP
    id_prefix: str = "import"


class ParseSession:
    """
    State for one import: id allocation, deduplication, edges and warnings.

    A session is used once; ids are only meaningful within it.
    """

    def __init__(self, options: ImportOptions | None = None):
        self.options = options or ImportOptions()
        self.identities = IdentityResolver(self.options.gender_lookup, self.options.id_prefix)
        self.edges: list[RelationshipEdge] = []
        self.warnings: list[str] = []
        self._edge_keys: set[tuple[str, str, str]] = set()

    def add_edge(self, edge: RelationshipEdge) -> None:
        if edge.source_id == edge.target_id:
            logger.debug("Dropping self-referencing %s edge on %s", edge.relationship_type, edge.source_id)
            return
        key = edge.key()
        if key in self._edge_keys:
            return
        self._edge_keys.add(key)
        self.edges.append(edge)

    def process(self, roots: list[LineNode]) -> None:
        """
        Walk the forest in document order, emitting people and edges.

        Each stack frame carries the ids of the child's parents and the
        surname the parents pass down to first-name-only children.
        """
        stack: list[tuple[LineNode, list[str], str | None]] = [
            (node, [], None) for node in reversed(roots)
        ]
        while stack:
            node, parent_ids, inherited_surname = stack.pop()

            parsed = parse_line(node.raw)
            if parsed is None:
                self.warnings.append(
                    f"Skipping unparseable line {node.line_number}: "
                    f"{node.raw[:WARNING_PREVIEW_LENGTH]}"
                )
                # Children of a skipped line are skipped with it
                continue

            primary_name = apply_inherited_surname(parsed.primary_name, inherited_surname)
            primary_id = self.identities.resolve(
                primary_name, parsed.birth_year, parsed.death_year
            )

            for parent_id in parent_ids:
                self.add_edge(RelationshipEdge(parent_id, primary_id, parsed.lineage_type))

            spouse_ids: list[str] = []
            for spouse in parsed.spouses:
                # Spouses keep their own names
                spouse_id = self.identities.resolve(
                    spouse.name, spouse.birth_year, spouse.death_year
                )
                spouse_ids.append(spouse_id)
                self.add_edge(
                    RelationshipEdge(
                        primary_id,
                        spouse_id,
                        spouse.relationship_type,
                        start_year=spouse.start_year,
                        end_year=spouse.end_year,
                    )
                )

            # Children belong to the primary and the last (current) spouse only
            co_parents = [primary_id] + spouse_ids[-1:]
            child_surname = resolve_child_surname(
                primary_name, parsed, inherited_surname, self.options.gender_lookup
            )
            for child in reversed(node.children):
                stack.append((child, co_parents, child_surname))

    def result(self) -> ParseResult:
        warnings = list(self.warnings)
        if not self.identities.individuals:
            warnings.append("No individuals found in input")
        return ParseResult(
            individuals=list(self.identities.individuals),
            edges=list(self.edges),
            warnings=warnings,
        )


def import_text(text: str, options: ImportOptions | None = None) -> ParseResult:
    """
    Parse TreeDown text into individuals, relationship edges and warnings.

    Warnings never stop the import; an empty individual list is the one
    outcome callers should treat as a failed import.
    """
    if text is None:
        raise ValueError("import_text requires text, got None")

    session = ParseSession(options)
    roots = build_forest(text, session.options.tab_width)
    if not roots:
        return ParseResult(warnings=["Empty input"])

    session.process(roots)
    result = session.result()
    logger.debug(
        "Imported %d individuals and %d edges with %d warnings",
        len(result.individuals),
        len(result.edges),
        len(result.warnings),
    )
    return result
