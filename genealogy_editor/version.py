"""Application version value type.

Versions pack into a single integer as ``major << 16 | minor << 8 | patch``
with bit 31 flagging an in-development build.
"""

import re
from functools import total_ordering

_VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?(d?)$")


@total_ordering
class Version:
    __slots__ = ("major", "minor", "patch", "indev")

    def __init__(self, major: int, minor: int, patch: int = 0, indev: bool = False):
        self.major = major
        self.minor = minor
        self.patch = patch
        self.indev = indev

    @classmethod
    def from_value(cls, value: int) -> "Version":
        """Decode a packed version integer."""
        return cls(
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
            ((value >> 31) & 1) == 1,
        )

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse the `major.minor[.patch][d]` form produced by str()."""
        match = _VERSION_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid version string: {text!r}")
        major, minor, patch, dev = match.groups()
        return cls(int(major), int(minor), int(patch or 0), dev == "d")

    @property
    def value(self) -> int:
        """Packed value without the in-development bit."""
        return (self.major & 0xFF) << 16 | (self.minor & 0xFF) << 8 | (self.patch & 0xFF)

    @property
    def full_value(self) -> int:
        """Packed value including the in-development bit."""
        return self.value | (1 << 31 if self.indev else 0)

    def _sort_key(self) -> tuple[int, int]:
        # A development build precedes the release of the same number
        return (self.value, 0 if self.indev else 1)

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self):
        return hash(self._sort_key())

    def __repr__(self):
        return f"Version({self.major}, {self.minor}, {self.patch}, indev={self.indev})"

    def __str__(self):
        dev = "d" if self.indev else ""
        if self.patch != 0:
            return f"{self.major}.{self.minor}.{self.patch}{dev}"
        return f"{self.major}.{self.minor}{dev}"


CURRENT_VERSION = Version(1, 3, 0, indev=True)
