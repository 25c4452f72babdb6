"""The Family aggregate: sole owner of members and relationships.

A family hands out member identifiers from its own counter and enforces the
graph invariants on every mutation:

- member identifiers are unique and never reused;
- two members are connected by at most one relationship;
- the children of a relationship are members of the family;
- removing a member deletes the relationships they are a partner in and
  strips them from the children of the others.

Every mutator either applies its change completely or leaves the family
untouched. Read accessors return fresh collections, so a snapshot taken by a
caller is unaffected by later edits.
"""

import logging
from collections.abc import Iterable

from .constants import FIRST_MEMBER_ID
from .models import FamilyMember, Relationship

logger = logging.getLogger(__name__)


class FamilyIntegrityError(RuntimeError):
    """Raised when a mutation would leave the family graph inconsistent."""


class Family:
    def __init__(self, name: str, counter: int = FIRST_MEMBER_ID):
        self._counter = counter
        self._name = _check_name(name)
        self._members: dict[int, FamilyMember] = {}
        self._relations: dict[frozenset[int], Relationship] = {}

    @classmethod
    def create(cls, name: str) -> "Family":
        """Create an empty family."""
        return cls(name)

    @classmethod
    def restore(
        cls,
        counter: int,
        name: str,
        members: Iterable[FamilyMember],
        relations: Iterable[Relationship],
    ) -> "Family":
        """Rebuild a family from the state exposed by its query surface.

        Raises:
            ValueError: If a member has no identifier, or one the counter
                could hand out again.
            FamilyIntegrityError: If a relation lists a child that is not a member.
        """
        family = cls(name, counter)
        for member in members:
            if member.id < FIRST_MEMBER_ID:
                raise ValueError(f"member '{member}' has no identifier")
            if member.id >= counter:
                raise ValueError(f"member ID {member.id} is not below the counter ({counter})")
            family._members[member.id] = member
        for relation in relations:
            family._check_children(relation)
            family._relations[relation.partners] = relation
        logger.debug(
            f"Restored family '{name}' with {len(family._members)} members "
            f"and {len(family._relations)} relations"
        )
        return family

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = _check_name(name)

    def set_name(self, name: str) -> None:
        self.name = name

    @property
    def counter(self) -> int:
        """The identifier the next admitted member will receive."""
        return self._counter

    # ─────────────────────────────────────────
    # Members
    # ─────────────────────────────────────────

    def get_all_members(self) -> set[FamilyMember]:
        return set(self._members.values())

    def get_member(self, member_id: int) -> FamilyMember | None:
        return self._members.get(member_id)

    def add_member(self, member: FamilyMember) -> int:
        """Admit a member and return its identifier.

        A member already present (same identifier) is left as is.
        """
        if member.id in self._members:
            return member.id
        member_id = self._next_member_id()
        self._members[member_id] = member.copy_with_id(member_id)
        logger.debug(f"Added member {member_id}")
        return member_id

    def update_member(self, member: FamilyMember) -> None:
        """Replace the stored member with the same identifier, if any."""
        if member.id in self._members:
            self._members[member.id] = member
            logger.debug(f"Updated member {member.id}")

    def remove_member(self, member_id: int) -> None:
        """Remove a member and cascade onto its relationships."""
        if member_id not in self._members:
            return
        for key, relation in list(self._relations.items()):
            if relation.is_in_relationship(member_id):
                del self._relations[key]
            elif relation.is_child(member_id):
                self._relations[key] = relation.without_child(member_id)
        del self._members[member_id]
        logger.debug(f"Removed member {member_id}")

    # ─────────────────────────────────────────
    # Relationships
    # ─────────────────────────────────────────

    def get_all_relations(self) -> set[Relationship]:
        return set(self._relations.values())

    def get_relation(self, id1: int, id2: int) -> Relationship | None:
        """Return the relationship connecting the two members, in either order."""
        return self._relations.get(frozenset((id1, id2)))

    def get_relations(self, member_id: int) -> set[Relationship]:
        """Return the relationships in which the member is a partner."""
        return {r for r in self._relations.values() if r.is_in_relationship(member_id)}

    def add_relation(self, relation: Relationship) -> None:
        """Store a relationship unless its two partners are already connected.

        Raises:
            FamilyIntegrityError: If a child is not a member of this family.
        """
        if self.are_in_relationship(relation.partner1, relation.partner2):
            return
        self._check_children(relation)
        self._relations[relation.partners] = relation
        logger.debug(f"Added relation {relation}")

    def update_relation(self, relation: Relationship) -> None:
        """Replace the stored relationship between the same partners, if any.

        Raises:
            FamilyIntegrityError: If a child is not a member of this family.
        """
        if relation.partners not in self._relations:
            return
        self._check_children(relation)
        self._relations[relation.partners] = relation
        logger.debug(f"Updated relation {relation}")

    def remove_relationship(self, relation: Relationship) -> None:
        if self._relations.pop(relation.partners, None) is not None:
            logger.debug(f"Removed relation {relation}")

    def are_in_relationship(self, id1: int, id2: int) -> bool:
        return frozenset((id1, id2)) in self._relations

    def has_parents(self, member_id: int) -> bool:
        return any(r.is_child(member_id) for r in self._relations.values())

    # ─────────────────────────────────────────
    # Derived queries
    # ─────────────────────────────────────────

    def get_potential_children(self, relation: Relationship | None = None) -> set[FamilyMember]:
        """Return the members that may be added as children of a couple.

        Without a relation, every member is returned. Otherwise the partners
        are excluded, and so is every member not born strictly after the
        younger partner (members with no known birth date are kept), every
        current child of the relation and every member who already has parents.
        """
        candidates = self.get_all_members()
        if relation is None:
            return candidates
        partner1 = self.get_member(relation.partner1)
        partner2 = self.get_member(relation.partner2)
        if partner1 is None or partner2 is None:
            return candidates

        candidates.discard(partner1)
        candidates.discard(partner2)

        youngest = _youngest(partner1, partner2)
        if youngest is not None:
            candidates = {m for m in candidates if _born_after(m, youngest)}

        return {
            m for m in candidates
            if not relation.is_child(m.id) and not self.has_parents(m.id)
        }

    def clone(self) -> "Family":
        """Return an independent copy, counter included."""
        return Family.restore(
            self._counter, self._name, self._members.values(), self._relations.values()
        )

    __copy__ = clone

    def __deepcopy__(self, memo):
        return self.clone()

    def __repr__(self):
        return (
            f"Family(name={self._name!r}, counter={self._counter}, "
            f"members={len(self._members)}, relations={len(self._relations)})"
        )

    def _next_member_id(self) -> int:
        member_id = self._counter
        self._counter += 1
        return member_id

    def _check_children(self, relation: Relationship) -> None:
        for child_id in sorted(relation.children):
            if child_id not in self._members:
                raise FamilyIntegrityError(f"member ID '{child_id}' does not exist")


def _check_name(name: str) -> str:
    if not isinstance(name, str):
        raise ValueError("family name must be a string")
    return name


def _youngest(partner1: FamilyMember, partner2: FamilyMember) -> FamilyMember | None:
    """Return the younger partner among those with a known birth date."""
    if partner1.birth_date is not None and partner2.birth_date is not None:
        return partner1 if partner1.compare_birthdays(partner2) > 0 else partner2
    if partner1.birth_date is not None:
        return partner1
    if partner2.birth_date is not None:
        return partner2
    return None


def _born_after(member: FamilyMember, other: FamilyMember) -> bool:
    # An unknown birth date never excludes a member
    comparison = member.compare_birthdays(other)
    return comparison is None or comparison > 0
