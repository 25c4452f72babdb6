"""Entities of the family graph: members and the relationships between them.

Both entity types are immutable values. Edits are expressed by building a
modified copy (``with_changes``, ``with_child``...) and submitting it to the
owning Family, which is the only place where stored state changes.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from functools import total_ordering

from .constants import GENDER_ALIASES, UNASSIGNED_ID, UNKNOWN_NAME
from .dates import Period, age_between, compare_dates, format_date, parse_date


class Gender(Enum):
    UNKNOWN = "unknown"
    MAN = "man"
    WOMAN = "woman"

    @property
    def is_man(self) -> bool:
        return self is Gender.MAN

    @property
    def is_woman(self) -> bool:
        return self is Gender.WOMAN

    @classmethod
    def parse(cls, value) -> "Gender":
        """Resolve a Gender from an enum member, a name or a common code (M/F/U)."""
        if isinstance(value, Gender):
            return value
        if isinstance(value, str):
            key = GENDER_ALIASES.get(value.strip().lower())
            if key:
                return cls[key]
        raise ValueError(f"Unknown gender: {value!r}")


@total_ordering
@dataclass(frozen=True, eq=False)
class FamilyMember:
    image: bytes | None = field(default=None, repr=False)
    name: str | None = None
    first_name: str | None = None
    gender: Gender = Gender.UNKNOWN
    birth_date: date | None = None
    birth_location: str | None = None
    death_date: date | None = None
    death_location: str | None = None
    id: int = UNASSIGNED_ID

    def __post_init__(self):
        if self.gender is None:
            raise ValueError("gender must be set, use Gender.UNKNOWN when it is not known")
        object.__setattr__(self, "gender", Gender.parse(self.gender))
        if self.image is not None:
            # Detach from caller-owned buffers (bytearray, memoryview...)
            object.__setattr__(self, "image", bytes(self.image))
        object.__setattr__(self, "birth_date", parse_date(self.birth_date))
        object.__setattr__(self, "death_date", parse_date(self.death_date))

    @property
    def is_man(self) -> bool:
        return self.gender.is_man

    @property
    def is_woman(self) -> bool:
        return self.gender.is_woman

    def copy_with_id(self, member_id: int) -> "FamilyMember":
        """Return a value-identical member carrying another identifier."""
        return dataclasses.replace(self, id=member_id)

    def with_changes(self, **changes) -> "FamilyMember":
        """Return a copy with the given fields replaced, keeping the identifier."""
        if "id" in changes:
            raise ValueError("the identifier of a member cannot be changed")
        return dataclasses.replace(self, **changes)

    def age(self, reference_date: date | None = None) -> Period | None:
        """Age of this member.

        Computed as of the death date when one is recorded, otherwise as of
        `reference_date` (today when omitted). None without a birth date.
        """
        if self.birth_date is None:
            return None
        if self.death_date is not None:
            reference = self.death_date
        else:
            reference = reference_date or date.today()
        return age_between(self.birth_date, reference)

    def compare_birthdays(self, other: "FamilyMember") -> int | None:
        """Compare birth dates: negative if this member was born first.

        None when either birth date is unknown.
        """
        return compare_dates(self.birth_date, other.birth_date)

    def __eq__(self, other):
        if not isinstance(other, FamilyMember):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other):
        if not isinstance(other, FamilyMember):
            return NotImplemented
        return self.id < other.id

    def __hash__(self):
        return hash(self.id)

    def __str__(self):
        if self.name is None and self.first_name is None:
            return UNKNOWN_NAME
        return f"{self.first_name or UNKNOWN_NAME} {self.name or UNKNOWN_NAME}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "first_name": self.first_name,
            "display_name": str(self),
            "gender": self.gender.value,
            "birth_date": format_date(self.birth_date),
            "birth_location": self.birth_location,
            "death_date": format_date(self.death_date),
            "death_location": self.death_location,
            "has_image": self.image is not None,
        }

    def to_summary(self) -> dict:
        """Short summary for list views."""
        return {
            "id": self.id,
            "name": str(self),
            "birth_date": format_date(self.birth_date),
            "death_date": format_date(self.death_date),
        }


@dataclass(frozen=True, eq=False)
class DummyFamilyMember(FamilyMember):
    """Placeholder member known only by a label, e.g. an unidentified ancestor."""

    def __post_init__(self):
        if self.name is None:
            raise ValueError("a placeholder member needs a name")
        super().__post_init__()
        object.__setattr__(self, "gender", Gender.UNKNOWN)

    def __str__(self):
        return self.name


@dataclass(frozen=True, eq=False)
class Relationship:
    """A union between two distinct members, optionally with children.

    Two relationships are equal when they connect the same pair of members,
    whatever the partner order and whatever their other fields.
    """

    partner1: int
    partner2: int
    children: frozenset[int] = frozenset()
    date: date | None = None
    location: str | None = None
    is_wedding: bool = False
    has_ended: bool = False
    end_date: date | None = None

    def __post_init__(self):
        if self.partner1 == self.partner2:
            raise ValueError("partners must be different")
        seen = set()
        for child in self.children:
            if child in (self.partner1, self.partner2):
                raise ValueError(f"member {child} can't be their own child")
            if child in seen:
                raise ValueError(f"child {child} already present")
            seen.add(child)
        object.__setattr__(self, "children", frozenset(seen))
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "end_date", parse_date(self.end_date))
        # The end date is the source of truth for has_ended
        if self.end_date is not None:
            object.__setattr__(self, "has_ended", True)

    @property
    def partners(self) -> frozenset[int]:
        return frozenset((self.partner1, self.partner2))

    def other_partner(self, member_id: int) -> int | None:
        if member_id == self.partner1:
            return self.partner2
        if member_id == self.partner2:
            return self.partner1
        return None

    def is_in_relationship(self, member_id: int) -> bool:
        return member_id in (self.partner1, self.partner2)

    def is_child(self, member_id: int) -> bool:
        return member_id in self.children

    def with_child(self, member_id: int) -> "Relationship":
        """Return a copy with one more child.

        Raises:
            ValueError: If the member is a partner or already a child.
        """
        if self.is_in_relationship(member_id):
            raise ValueError(f"member {member_id} can't be their own child")
        if member_id in self.children:
            raise ValueError(f"child {member_id} already present")
        return dataclasses.replace(self, children=self.children | {member_id})

    def without_child(self, member_id: int) -> "Relationship":
        if member_id not in self.children:
            return self
        return dataclasses.replace(self, children=self.children - {member_id})

    def with_end_date(self, end_date: date | None) -> "Relationship":
        """Return a copy with the given end date; has_ended follows it."""
        return dataclasses.replace(self, end_date=end_date, has_ended=end_date is not None)

    def with_has_ended(self, has_ended: bool) -> "Relationship":
        # Ignored while an end date is recorded
        if self.end_date is not None:
            return self
        return dataclasses.replace(self, has_ended=has_ended)

    def with_changes(self, **changes) -> "Relationship":
        """Return a copy with the given fields replaced, partners excluded."""
        if "partner1" in changes or "partner2" in changes:
            raise ValueError("the partners of a relationship cannot be changed")
        return dataclasses.replace(self, **changes)

    def __eq__(self, other):
        if not isinstance(other, Relationship):
            return NotImplemented
        return self.partners == other.partners

    def __hash__(self):
        return hash(self.partners)

    def __str__(self):
        return f"{self.partner1} <-> {self.partner2}"

    def to_dict(self) -> dict:
        return {
            "partner1": self.partner1,
            "partner2": self.partner2,
            "children": sorted(self.children),
            "date": format_date(self.date),
            "location": self.location,
            "is_wedding": self.is_wedding,
            "has_ended": self.has_ended,
            "end_date": format_date(self.end_date),
        }
