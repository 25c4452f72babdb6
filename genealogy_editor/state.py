"""Process state: configuration and the family document being edited."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from .constants import DEFAULT_FAMILY_NAME, ENV_FAMILY_NAME
from .family import Family

logger = logging.getLogger(__name__)

# Configuration (set by configure() at startup)
FAMILY_NAME: str = DEFAULT_FAMILY_NAME

# The open document. Single writer: tools run one at a time.
family: Family | None = None


def _resolve_family_name() -> str:
    """Get the default family name from the GENEALOGY_FAMILY_NAME env var.

    Raises:
        ValueError: If the variable is set but blank.
    """
    env_name = os.getenv(ENV_FAMILY_NAME)
    if env_name is None:
        return DEFAULT_FAMILY_NAME
    name = env_name.strip()
    if not name:
        raise ValueError(
            f"{ENV_FAMILY_NAME} environment variable is blank.\n"
            "Unset it to use the default name, or set it to the family's name:\n"
            f"  export {ENV_FAMILY_NAME}='Smith family'"
        )
    return name


def configure() -> None:
    """Initialize configuration from environment. Called at startup.

    Loads .env file if present, then reads GENEALOGY_FAMILY_NAME.
    Note: load_dotenv() does NOT override existing env vars by default.
    """
    global FAMILY_NAME
    load_dotenv()
    FAMILY_NAME = _resolve_family_name()
    logger.info(f"Configured default family name: {FAMILY_NAME!r}")


def new_family(name: str | None = None) -> Family:
    """Replace the open document with an empty family."""
    global family
    family = Family.create(name if name is not None else FAMILY_NAME)
    logger.info(f"Opened new family {family.name!r}")
    return family


def get_family() -> Family:
    """Return the open document, creating an empty one on first use."""
    if family is None:
        return new_family()
    return family
