"""Constants for the family graph model and its server configuration."""

# Identifier carried by a member that has not been admitted into a family yet
UNASSIGNED_ID = -1

# First identifier handed out by a fresh family
FIRST_MEMBER_ID = 0

# Display token used for missing name parts
UNKNOWN_NAME = "?"

DEFAULT_FAMILY_NAME = "New family"

# Environment variables read by state.configure()
ENV_FAMILY_NAME = "GENEALOGY_FAMILY_NAME"

# Accepted spellings for Gender.parse (lowercase)
GENDER_ALIASES = {
    "m": "MAN",
    "male": "MAN",
    "man": "MAN",
    "f": "WOMAN",
    "female": "WOMAN",
    "woman": "WOMAN",
    "u": "UNKNOWN",
    "unknown": "UNKNOWN",
    "?": "UNKNOWN",
    "": "UNKNOWN",
}
