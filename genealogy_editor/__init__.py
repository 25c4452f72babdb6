"""Genealogy Editor - family graph model served over MCP.

This package holds the family graph model (members, relationships and the
Family aggregate enforcing their invariants) and an MCP server exposing its
query and edit surface to editor front ends.

Usage:
    genealogy-editor --family-name "Smith family"
    GENEALOGY_FAMILY_NAME="Smith family" python -m genealogy_editor
"""

from fastmcp import FastMCP

from .family import Family, FamilyIntegrityError
from .mcp_resources import register_resources
from .mcp_tools import register_tools
from .models import DummyFamilyMember, FamilyMember, Gender, Relationship
from .state import configure, new_family
from .telemetry import initialize_tracing

# Initialize tracing FIRST (before creating server)
# This is a no-op if PHOENIX_ENABLED is not set to 'true'
initialize_tracing()

# Initialize FastMCP server
mcp = FastMCP("Genealogy Editor")

# Register tools and resources
register_tools(mcp)
register_resources(mcp)

_initialized = False


def initialize():
    """Initialize the server: configure from env vars and open an empty family.

    Safe to call multiple times.
    """
    global _initialized
    if _initialized:
        return
    configure()
    new_family()
    _initialized = True


__all__ = [
    "DummyFamilyMember",
    "Family",
    "FamilyIntegrityError",
    "FamilyMember",
    "Gender",
    "Relationship",
    "initialize",
    "mcp",
]
