"""MCP resource definitions for the family editor server."""

from .core import _get_family_info, _get_member, _get_statistics, _list_members, _list_relations


def register_resources(mcp):
    """Register all MCP resources with the server."""

    @mcp.resource("family://info")
    def resource_info() -> str:
        """Get the family overview."""
        return str(_get_family_info())

    @mcp.resource("family://member/{id}")
    def resource_member(id: str) -> str:
        """Get member record by ID."""
        member = _get_member(id)
        if member:
            return str(member)
        return f"Member {id} not found"

    @mcp.resource("family://members")
    def resource_members() -> str:
        """Get list of all members."""
        lines = []
        for m in _list_members():
            born = m.get("birth_date") or "?"
            lines.append(f"{m['id']}: {m['name']} (born {born})")
        return "\n".join(lines)

    @mcp.resource("family://relations")
    def resource_relations() -> str:
        """Get list of all relations."""
        lines = []
        for r in _list_relations():
            kind = "wedding" if r["is_wedding"] else "union"
            children = ", ".join(str(c) for c in r["children"]) or "none"
            lines.append(
                f"{r['partner1_name']} <-> {r['partner2_name']} ({kind}), children: {children}"
            )
        return "\n".join(lines)

    @mcp.resource("family://stats")
    def resource_stats() -> str:
        """Get family statistics."""
        return str(_get_statistics())
