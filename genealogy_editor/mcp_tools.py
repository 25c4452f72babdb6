"""MCP tool definitions for the family editor server."""

from .core import (
    _add_child,
    _add_member,
    _add_placeholder_member,
    _add_relation,
    _get_age,
    _get_family_info,
    _get_member,
    _get_potential_children,
    _get_relation,
    _get_relations,
    _get_statistics,
    _list_members,
    _list_relations,
    _new_family,
    _remove_child,
    _remove_member,
    _remove_relation,
    _rename_family,
    _update_member,
    _update_relation,
)


def register_tools(mcp):
    """Register all MCP tools with the server."""

    # ============== DOCUMENT TOOLS (4) ==============

    @mcp.tool()
    def get_family_info() -> dict:
        """
        Get an overview of the open family document.

        Returns:
            Name, identifier counter, member and relation counts, model version
        """
        return _get_family_info()

    @mcp.tool()
    def get_statistics() -> dict:
        """
        Get statistics about the family graph.

        Returns:
            Counts by gender, deceased members, weddings, ended relations
            and the range of known birth years
        """
        return _get_statistics()

    @mcp.tool()
    def new_family(name: str | None = None) -> dict:
        """
        Discard the open document and start an empty family.

        Args:
            name: Family name (default: GENEALOGY_FAMILY_NAME or "New family")

        Returns:
            Overview of the new family
        """
        return _new_family(name)

    @mcp.tool()
    def rename_family(name: str) -> dict:
        """
        Rename the open family.

        Args:
            name: The new family name

        Returns:
            Overview of the family
        """
        return _rename_family(name)

    # ============== MEMBER TOOLS (7) ==============

    @mcp.tool()
    def list_members() -> list[dict]:
        """
        List every member of the family, ordered by ID.

        Returns:
            Member summaries with ID, display name, birth and death dates
        """
        return _list_members()

    @mcp.tool()
    def get_member(member_id: int) -> dict | None:
        """
        Get the full record of a member.

        Args:
            member_id: The member's ID

        Returns:
            Member record with current age, parent flag and partner IDs,
            or None if not found
        """
        return _get_member(member_id)

    @mcp.tool()
    def add_member(
        name: str | None = None,
        first_name: str | None = None,
        gender: str | None = None,
        birth_date: str | None = None,
        birth_location: str | None = None,
        death_date: str | None = None,
        death_location: str | None = None,
    ) -> dict:
        """
        Add a new member to the family. The ID is assigned by the family.

        Args:
            name: Family name (surname)
            first_name: Given name
            gender: "man", "woman" or "unknown" (also accepts M/F/U)
            birth_date: Birth date as YYYY-MM-DD
            birth_location: Birth place
            death_date: Death date as YYYY-MM-DD
            death_location: Death place

        Returns:
            The stored member record including its new ID
        """
        return _add_member(
            name=name,
            first_name=first_name,
            gender=gender,
            birth_date=birth_date,
            birth_location=birth_location,
            death_date=death_date,
            death_location=death_location,
        )

    @mcp.tool()
    def add_placeholder_member(label: str) -> dict:
        """
        Add a placeholder for a person known only by a label
        (e.g. "Unknown grandfather").

        Args:
            label: Text shown for the placeholder

        Returns:
            The stored member record
        """
        return _add_placeholder_member(label)

    @mcp.tool()
    def update_member(member_id: int, changes: dict) -> dict | None:
        """
        Change fields of a member. Fields not listed in `changes` are kept;
        a field set to null is cleared.

        Args:
            member_id: The member's ID
            changes: Mapping of field name to new value. Fields: name, first_name,
                gender, birth_date, birth_location, death_date, death_location

        Returns:
            The updated member record, or None if the member does not exist
        """
        return _update_member(member_id, changes)

    @mcp.tool()
    def remove_member(member_id: int) -> dict:
        """
        Remove a member. Relations where they are a partner are deleted,
        and they are removed from the children of other relations.

        Args:
            member_id: The member's ID

        Returns:
            {"removed": bool, "member_id": int}
        """
        return _remove_member(member_id)

    @mcp.tool()
    def get_age(member_id: int, reference_date: str | None = None) -> dict | None:
        """
        Get a member's age in whole years.

        The age of a deceased member is their age at death.

        Args:
            member_id: The member's ID
            reference_date: Date to compute the age at, YYYY-MM-DD (default: today)

        Returns:
            {"member_id", "age", "as_of", "deceased"} or None if not found
        """
        return _get_age(member_id, reference_date)

    # ============== RELATION TOOLS (9) ==============

    @mcp.tool()
    def list_relations() -> list[dict]:
        """
        List every relation (union) of the family.

        Returns:
            Relations with partners, children, dates and flags
        """
        return _list_relations()

    @mcp.tool()
    def get_relation(partner1: int, partner2: int) -> dict | None:
        """
        Get the relation between two members, in either order.

        Args:
            partner1: One partner's ID
            partner2: The other partner's ID

        Returns:
            The relation or None if they are not in a relationship
        """
        return _get_relation(partner1, partner2)

    @mcp.tool()
    def get_relations(member_id: int) -> list[dict]:
        """
        Get all relations where a member is one of the partners.

        Args:
            member_id: The member's ID

        Returns:
            List of relations
        """
        return _get_relations(member_id)

    @mcp.tool()
    def add_relation(
        partner1: int,
        partner2: int,
        children: list[int] | None = None,
        date: str | None = None,
        location: str | None = None,
        is_wedding: bool = False,
        has_ended: bool = False,
        end_date: str | None = None,
    ) -> dict:
        """
        Create a relation between two different members. Two members can only
        be connected by one relation, even after it ended.

        Args:
            partner1: One partner's ID
            partner2: The other partner's ID
            children: IDs of existing members who are their children
            date: Start (wedding) date, YYYY-MM-DD
            location: Where it started
            is_wedding: Whether this is a marriage
            has_ended: Whether the relation has ended
            end_date: End date, YYYY-MM-DD (implies has_ended)

        Returns:
            {"added": bool, "relation": dict}
        """
        return _add_relation(
            partner1,
            partner2,
            children=children,
            date=date,
            location=location,
            is_wedding=is_wedding,
            has_ended=has_ended,
            end_date=end_date,
        )

    @mcp.tool()
    def update_relation(partner1: int, partner2: int, changes: dict) -> dict | None:
        """
        Change fields of a relation. Fields not listed in `changes` are kept.

        Args:
            partner1: One partner's ID
            partner2: The other partner's ID
            changes: Mapping of field name to new value. Fields: date, location,
                is_wedding, has_ended, end_date, children

        Returns:
            The updated relation, or None if the relation does not exist
        """
        return _update_relation(partner1, partner2, changes)

    @mcp.tool()
    def remove_relation(partner1: int, partner2: int) -> dict:
        """
        Delete the relation between two members. The members are kept.

        Returns:
            {"removed": bool}
        """
        return _remove_relation(partner1, partner2)

    @mcp.tool()
    def add_child(partner1: int, partner2: int, child_id: int) -> dict | None:
        """
        Attach a member as a child of a couple.

        Use get_potential_children() to list eligible members.

        Args:
            partner1: One parent's ID
            partner2: The other parent's ID
            child_id: The child's member ID

        Returns:
            The updated relation, or None if the couple has no relation
        """
        return _add_child(partner1, partner2, child_id)

    @mcp.tool()
    def remove_child(partner1: int, partner2: int, child_id: int) -> dict | None:
        """
        Detach a child from a couple. The child stays in the family.

        Returns:
            The updated relation, or None if the couple has no relation
        """
        return _remove_child(partner1, partner2, child_id)

    @mcp.tool()
    def get_potential_children(partner1: int | None = None, partner2: int | None = None) -> list[dict]:
        """
        List members who can become children of a couple.

        Excludes the partners, anyone not born after the younger partner
        (members without a birth date are kept), current children of the
        couple and anyone who already has parents. Without partners, every
        member is listed.

        Args:
            partner1: One partner's ID
            partner2: The other partner's ID

        Returns:
            Member summaries
        """
        return _get_potential_children(partner1, partner2)
