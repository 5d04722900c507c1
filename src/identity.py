"""Identity resolution: deduplication of mentions and surname inheritance."""

import logging

from models import FEMALE, MALE, PARTNER, SPOUSE, Individual
from names import (
    GenderLookup,
    add_surname,
    extract_surname,
    infer_gender,
    is_first_name_only,
    normalize_name,
)
from parsing import ParsedLine


logger = logging.getLogger(__name__)

UNKNOWN_BIRTH_YEAR = "unknown"


class IdentityResolver:
    """
    Allocates temp ids for mentioned people, reusing them for repeat mentions.

    Two mentions are the same person when their normalized names match and they
    carry the same explicit birth year (or neither has one). The same name
    with different birth years always yields distinct people.
    """

    def __init__(self, gender_lookup: GenderLookup, id_prefix: str = "import"):
        self.gender_lookup = gender_lookup
        self.id_prefix = id_prefix
        self.individuals: list[Individual] = []
        self._next_id = 0
        self._ids_by_key: dict[tuple[str, str], str] = {}

    def _allocate_id(self) -> str:
        temp_id = f"{self.id_prefix}-{self._next_id}"
        self._next_id += 1
        return temp_id

    def resolve(self, name: str, birth_year: int | None, death_year: int | None) -> str:
        """Return the temp id for a mention, creating the individual on first sight."""
        clean = " ".join(name.split())
        key = (
            normalize_name(clean),
            str(birth_year) if birth_year is not None else UNKNOWN_BIRTH_YEAR,
        )

        existing = self._ids_by_key.get(key)
        if existing is not None:
            logger.debug("Reusing %s for repeated mention of %r", existing, clean)
            return existing

        temp_id = self._allocate_id()
        self.individuals.append(
            Individual(
                id=temp_id,
                display_name=clean,
                birth_year=birth_year,
                death_year=death_year,
                gender=infer_gender(clean, self.gender_lookup),
            )
        )
        self._ids_by_key[key] = temp_id
        return temp_id


def apply_inherited_surname(name: str, inherited_surname: str | None) -> str:
    """Give a first-name-only child the surname passed down by its parents."""
    if inherited_surname and is_first_name_only(name):
        return add_surname(name, inherited_surname)
    return name


def resolve_child_surname(
    primary_name: str,
    parsed: ParsedLine,
    inherited_surname: str | None,
    gender_lookup: GenderLookup,
) -> str | None:
    """
    Surname that first-name-only children of this line should take.

    Follows Western convention (children take the father's surname), using
    first-name gender inference to tell which partner that is:

    1. "John McGinty & Mary Fousek": John is male, children are McGinty.
    2. "Peggy McGinty & James Brannigan": Peggy is female, children are Brannigan.
    3. Only the spouse's gender is known: the same rule from the other side.
    4. Nobody's gender is known: keep the family line's surname if the primary
       carries it, else prefer the spouse's, then the primary's, then whatever
       the parents passed down.
    """
    primary_surname = extract_surname(primary_name) or inherited_surname

    last_spouse = parsed.spouses[-1] if parsed.spouses else None
    spouse_surname = None
    spouse_gender = None
    if last_spouse is not None:
        spouse_gender = infer_gender(last_spouse.name, gender_lookup)
        # Former spouses do not pass their surname to later children
        if last_spouse.relationship_type in (SPOUSE, PARTNER):
            spouse_surname = extract_surname(last_spouse.name)

    primary_gender = infer_gender(primary_name, gender_lookup)

    if primary_gender == MALE and primary_surname:
        return primary_surname
    if primary_gender == FEMALE and spouse_surname:
        return spouse_surname
    if spouse_gender == MALE and spouse_surname:
        return spouse_surname
    if spouse_gender == FEMALE and primary_surname:
        return primary_surname
    if primary_surname and primary_surname == inherited_surname:
        return primary_surname
    if spouse_surname:
        return spouse_surname
    if primary_surname:
        return primary_surname
    return inherited_surname
