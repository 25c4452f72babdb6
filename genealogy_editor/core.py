"""Core logic functions for querying and editing the open family document.

These functions are the read/write interface consumed by front ends (MCP
tools and resources). They take plain arguments, return plain dicts and
submit every edit as a full copy through the Family aggregate.
"""

import functools
import logging
from datetime import date

from . import state
from .dates import format_date, parse_date
from .helpers import clean_text, normalize_member_id, parse_gender, require_member_id
from .models import DummyFamilyMember, FamilyMember, Relationship
from .telemetry import MUTATION_SPAN_PREFIX, QUERY_SPAN_PREFIX, get_tracer
from .version import CURRENT_VERSION

logger = logging.getLogger(__name__)

_tracer = get_tracer()

MEMBER_TEXT_FIELDS = ("name", "first_name", "birth_location", "death_location")
MEMBER_DATE_FIELDS = ("birth_date", "death_date")
MEMBER_FIELDS = MEMBER_TEXT_FIELDS + MEMBER_DATE_FIELDS + ("gender",)

RELATION_FIELDS = ("date", "location", "is_wedding", "has_ended", "end_date", "children")


def _traced(span_name: str):
    """Run the wrapped function inside an OpenTelemetry span."""

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with _tracer.start_as_current_span(span_name):
                return func(*args, **kwargs)

        return wrapper

    return decorator


def _query(name: str):
    return _traced(QUERY_SPAN_PREFIX + name)


def _edit(name: str):
    return _traced(MUTATION_SPAN_PREFIX + name)


def _member_fields(changes: dict) -> dict:
    """Validate and coerce member field values coming from a front end."""
    unknown = set(changes) - set(MEMBER_FIELDS)
    if unknown:
        raise ValueError(f"Unknown member fields: {', '.join(sorted(unknown))}")

    fields = {}
    for key, value in changes.items():
        if key in MEMBER_TEXT_FIELDS:
            fields[key] = clean_text(value)
        elif key in MEMBER_DATE_FIELDS:
            fields[key] = parse_date(value)
        else:
            fields[key] = parse_gender(value)
    return fields


def _relation_fields(changes: dict) -> dict:
    """Validate and coerce relationship field values coming from a front end."""
    unknown = set(changes) - set(RELATION_FIELDS)
    if unknown:
        raise ValueError(f"Unknown relation fields: {', '.join(sorted(unknown))}")

    fields = {}
    for key, value in changes.items():
        if key in ("date", "end_date"):
            fields[key] = parse_date(value)
        elif key == "location":
            fields[key] = clean_text(value)
        elif key == "children":
            if value is None:
                value = []
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise ValueError(f"children must be a list of member IDs, got {value!r}")
            fields[key] = [require_member_id(c) for c in value]
        else:
            if not isinstance(value, bool):
                raise ValueError(f"{key} must be a boolean, got {value!r}")
            fields[key] = value
    return fields


def _member_detail(member: FamilyMember, reference: date | None = None) -> dict:
    family = state.get_family()
    result = member.to_dict()
    age = member.age(reference)
    result["age"] = age.years if age else None
    result["has_parents"] = family.has_parents(member.id)
    result["partners"] = sorted(
        r.other_partner(member.id) for r in family.get_relations(member.id)
    )
    return result


def _relation_detail(relation: Relationship) -> dict:
    family = state.get_family()
    result = relation.to_dict()

    # Add names for convenience
    for key in ("partner1", "partner2"):
        partner = family.get_member(result[key])
        result[f"{key}_name"] = str(partner) if partner else None

    return result


def _sorted_summaries(members) -> list[dict]:
    return [m.to_summary() for m in sorted(members)]


def _sorted_relations(relations) -> list[Relationship]:
    return sorted(relations, key=lambda r: tuple(sorted(r.partners)))


def _require_member(member_id) -> FamilyMember:
    lookup_id = require_member_id(member_id)
    member = state.get_family().get_member(lookup_id)
    if member is None:
        raise ValueError(f"Member {lookup_id} not found")
    return member


# ─────────────────────────────────────────
# Family document
# ─────────────────────────────────────────


@_query("info")
def _get_family_info() -> dict:
    family = state.get_family()
    return {
        "name": family.name,
        "counter": family.counter,
        "total_members": len(family.get_all_members()),
        "total_relations": len(family.get_all_relations()),
        "version": str(CURRENT_VERSION),
    }


@_edit("new_family")
def _new_family(name: str | None = None) -> dict:
    state.new_family(name)
    return _get_family_info()


@_edit("rename")
def _rename_family(name: str) -> dict:
    family = state.get_family()
    family.name = name
    logger.info(f"Renamed family to {name!r}")
    return _get_family_info()


@_query("statistics")
def _get_statistics() -> dict:
    family = state.get_family()
    members = family.get_all_members()
    relations = family.get_all_relations()

    birth_years = [m.birth_date.year for m in members if m.birth_date]
    men = sum(1 for m in members if m.is_man)
    women = sum(1 for m in members if m.is_woman)

    return {
        "total_members": len(members),
        "men": men,
        "women": women,
        "unknown_gender": len(members) - men - women,
        "deceased": sum(1 for m in members if m.death_date),
        "total_relations": len(relations),
        "weddings": sum(1 for r in relations if r.is_wedding),
        "ended_relations": sum(1 for r in relations if r.has_ended),
        "members_with_parents": sum(1 for m in members if family.has_parents(m.id)),
        "earliest_birth_year": min(birth_years) if birth_years else None,
        "latest_birth_year": max(birth_years) if birth_years else None,
    }


# ─────────────────────────────────────────
# Members
# ─────────────────────────────────────────


@_query("list_members")
def _list_members() -> list[dict]:
    return _sorted_summaries(state.get_family().get_all_members())


@_query("get_member")
def _get_member(member_id) -> dict | None:
    lookup_id = normalize_member_id(member_id)
    if lookup_id is None:
        return None
    member = state.get_family().get_member(lookup_id)
    return _member_detail(member) if member else None


@_edit("add_member")
def _add_member(**fields) -> dict:
    member = FamilyMember(**_member_fields(fields))
    member_id = state.get_family().add_member(member)
    logger.info(f"Added member {member_id}: {member}")
    return _get_member(member_id)


@_edit("add_placeholder")
def _add_placeholder_member(label: str) -> dict:
    text = clean_text(label)
    if text is None:
        raise ValueError("A placeholder member needs a label")
    member_id = state.get_family().add_member(DummyFamilyMember(name=text))
    logger.info(f"Added placeholder member {member_id}: {text}")
    return _get_member(member_id)


@_edit("update_member")
def _update_member(member_id, changes: dict) -> dict | None:
    """Apply field changes to a member; fields absent from `changes` are kept."""
    lookup_id = normalize_member_id(member_id)
    family = state.get_family()
    member = family.get_member(lookup_id) if lookup_id is not None else None
    if member is None:
        logger.warning(f"Ignoring update of unknown member {member_id!r}")
        return None
    family.update_member(member.with_changes(**_member_fields(changes)))
    logger.info(f"Updated member {lookup_id}: {', '.join(sorted(changes)) or 'no changes'}")
    return _get_member(lookup_id)


@_edit("remove_member")
def _remove_member(member_id) -> dict:
    lookup_id = normalize_member_id(member_id)
    family = state.get_family()
    if lookup_id is None or family.get_member(lookup_id) is None:
        return {"removed": False, "member_id": lookup_id}
    family.remove_member(lookup_id)
    logger.info(f"Removed member {lookup_id}")
    return {"removed": True, "member_id": lookup_id}


@_query("age")
def _get_age(member_id, reference_date: str | None = None) -> dict | None:
    lookup_id = normalize_member_id(member_id)
    member = state.get_family().get_member(lookup_id) if lookup_id is not None else None
    if member is None:
        return None
    reference = parse_date(reference_date) or date.today()
    age = member.age(reference)
    return {
        "member_id": member.id,
        "age": age.years if age else None,
        "as_of": format_date(member.death_date or reference),
        "deceased": member.death_date is not None,
    }


# ─────────────────────────────────────────
# Relationships
# ─────────────────────────────────────────


@_query("list_relations")
def _list_relations() -> list[dict]:
    relations = state.get_family().get_all_relations()
    return [_relation_detail(r) for r in _sorted_relations(relations)]


@_query("get_relation")
def _get_relation(partner1, partner2) -> dict | None:
    id1, id2 = normalize_member_id(partner1), normalize_member_id(partner2)
    if id1 is None or id2 is None:
        return None
    relation = state.get_family().get_relation(id1, id2)
    return _relation_detail(relation) if relation else None


@_query("get_relations")
def _get_relations(member_id) -> list[dict]:
    lookup_id = normalize_member_id(member_id)
    if lookup_id is None:
        return []
    relations = state.get_family().get_relations(lookup_id)
    return [_relation_detail(r) for r in _sorted_relations(relations)]


@_edit("add_relation")
def _add_relation(partner1, partner2, **fields) -> dict:
    """Connect two existing members.

    Returns the stored relation and whether it was added; an existing
    relation between the same partners is returned unchanged.
    """
    first = _require_member(partner1)
    second = _require_member(partner2)
    family = state.get_family()
    if family.are_in_relationship(first.id, second.id):
        logger.warning(f"Members {first.id} and {second.id} are already in a relationship")
        return {"added": False, "relation": _get_relation(first.id, second.id)}

    values = _relation_fields(fields)
    children = values.pop("children", [])
    relation = Relationship(first.id, second.id, children, **values)
    family.add_relation(relation)
    logger.info(f"Added relation {relation}")
    return {"added": True, "relation": _get_relation(first.id, second.id)}


@_edit("update_relation")
def _update_relation(partner1, partner2, changes: dict) -> dict | None:
    """Apply field changes to a relation; fields absent from `changes` are kept."""
    id1, id2 = normalize_member_id(partner1), normalize_member_id(partner2)
    family = state.get_family()
    relation = family.get_relation(id1, id2) if id1 is not None and id2 is not None else None
    if relation is None:
        logger.warning(f"Ignoring update of unknown relation {partner1!r} <-> {partner2!r}")
        return None

    values = _relation_fields(changes)
    if "end_date" in values:
        relation = relation.with_end_date(values.pop("end_date"))
    if "has_ended" in values:
        relation = relation.with_has_ended(values.pop("has_ended"))
    family.update_relation(relation.with_changes(**values))
    logger.info(f"Updated relation {relation}: {', '.join(sorted(changes)) or 'no changes'}")
    return _get_relation(id1, id2)


@_edit("remove_relation")
def _remove_relation(partner1, partner2) -> dict:
    id1, id2 = normalize_member_id(partner1), normalize_member_id(partner2)
    family = state.get_family()
    relation = family.get_relation(id1, id2) if id1 is not None and id2 is not None else None
    if relation is None:
        return {"removed": False}
    family.remove_relationship(relation)
    logger.info(f"Removed relation {relation}")
    return {"removed": True}


@_edit("add_child")
def _add_child(partner1, partner2, child_id) -> dict | None:
    """Attach an existing member as a child of a couple."""
    family = state.get_family()
    relation = family.get_relation(require_member_id(partner1), require_member_id(partner2))
    if relation is None:
        return None
    child = _require_member(child_id)
    family.update_relation(relation.with_child(child.id))
    logger.info(f"Added child {child.id} to relation {relation}")
    return _get_relation(relation.partner1, relation.partner2)


@_edit("remove_child")
def _remove_child(partner1, partner2, child_id) -> dict | None:
    family = state.get_family()
    relation = family.get_relation(require_member_id(partner1), require_member_id(partner2))
    if relation is None:
        return None
    family.update_relation(relation.without_child(require_member_id(child_id)))
    logger.info(f"Removed child {child_id} from relation {relation}")
    return _get_relation(relation.partner1, relation.partner2)


@_query("potential_children")
def _get_potential_children(partner1=None, partner2=None) -> list[dict]:
    """Members that can be attached as children of the couple.

    Without partners, every member is returned. With partners that are not
    (yet) in a relationship, the filter uses an empty children set.
    """
    family = state.get_family()
    if partner1 is None and partner2 is None:
        return _sorted_summaries(family.get_potential_children())

    id1, id2 = require_member_id(partner1), require_member_id(partner2)
    relation = family.get_relation(id1, id2) or Relationship(id1, id2)
    return _sorted_summaries(family.get_potential_children(relation))
