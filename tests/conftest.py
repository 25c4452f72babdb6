"""Shared fixtures for family editor tests."""

import os
from datetime import date

import pytest

# Set env vars BEFORE importing genealogy_editor modules
# (load_dotenv won't override existing values)
os.environ["GENEALOGY_FAMILY_NAME"] = "Test family"
os.environ["PHOENIX_ENABLED"] = "false"

from genealogy_editor import initialize  # noqa: E402

initialize()

from genealogy_editor import state  # noqa: E402
from genealogy_editor.family import Family  # noqa: E402
from genealogy_editor.models import FamilyMember, Gender, Relationship  # noqa: E402


@pytest.fixture
def family():
    """An empty family."""
    return Family.create("Doe")


@pytest.fixture
def populated_family():
    """A small family: John and Jane with their daughter Alice.

    IDs: john=0, jane=1, alice=2, bob=3 (no birth date), carol=4 (born before both parents).
    """
    fam = Family.create("Doe")
    john = fam.add_member(
        FamilyMember(name="Doe", first_name="John", gender=Gender.MAN, birth_date=date(1960, 3, 10))
    )
    jane = fam.add_member(
        FamilyMember(name="Doe", first_name="Jane", gender=Gender.WOMAN, birth_date=date(1962, 7, 1))
    )
    alice = fam.add_member(
        FamilyMember(name="Doe", first_name="Alice", gender=Gender.WOMAN, birth_date=date(1990, 1, 1))
    )
    fam.add_member(FamilyMember(name="Roe", first_name="Bob", gender=Gender.MAN))
    fam.add_member(FamilyMember(name="Poe", first_name="Carol", birth_date=date(1955, 5, 5)))
    fam.add_relation(Relationship(john, jane, [alice], date=date(1985, 6, 1), is_wedding=True))
    return fam


@pytest.fixture
def open_family():
    """Reset the server's open document to an empty family."""
    return state.new_family("Test family")


@pytest.fixture
def open_couple(open_family):
    """Open document with a married couple; returns (family, husband_id, wife_id)."""
    husband = open_family.add_member(
        FamilyMember(name="Smith", first_name="Tom", gender=Gender.MAN, birth_date=date(1950, 2, 2))
    )
    wife = open_family.add_member(
        FamilyMember(name="Smith", first_name="Ann", gender=Gender.WOMAN, birth_date=date(1952, 8, 8))
    )
    open_family.add_relation(Relationship(husband, wife, is_wedding=True))
    return open_family, husband, wife
