"""Utility functions for coercing tool arguments into model values."""

import re

from .models import Gender

_MEMBER_ID_PATTERN = re.compile(r"^#?(\d+)$")


def normalize_member_id(ref) -> int | None:
    """Normalize a member reference ("12", "#12", 12) to an integer ID."""
    if ref is None or isinstance(ref, bool):
        return None
    if isinstance(ref, int):
        return ref if ref >= 0 else None
    match = _MEMBER_ID_PATTERN.match(str(ref).strip())
    return int(match.group(1)) if match else None


def require_member_id(ref) -> int:
    """Like normalize_member_id, but raise ValueError for unusable references."""
    member_id = normalize_member_id(ref)
    if member_id is None:
        raise ValueError(f"Invalid member ID: {ref!r}")
    return member_id


def parse_gender(value) -> Gender:
    """Parse a gender argument, None meaning unknown."""
    if value is None:
        return Gender.UNKNOWN
    return Gender.parse(value)


def clean_text(value: str | None) -> str | None:
    """Strip a text argument, mapping blank strings to None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Expected text, got {value!r}")
    stripped = " ".join(value.split())
    return stripped or None

