"""Entry point for running the family editor server as a module.

Usage:
    python -m genealogy_editor --family-name "Smith family"
    genealogy-editor --family-name "Smith family"
"""

import argparse
import os

from .constants import ENV_FAMILY_NAME


def main():
    """Main entry point for the family editor MCP server."""
    parser = argparse.ArgumentParser(
        description="Genealogy Editor - edit a family graph via MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  genealogy-editor
  genealogy-editor -n "Smith family"

Environment variables:
  {ENV_FAMILY_NAME}  Name of the family opened at startup (default: New family)
  PHOENIX_ENABLED        Set to 'true' to send traces to Arize Phoenix
""",
    )
    parser.add_argument(
        "--family-name",
        "-n",
        metavar="NAME",
        help=f"Name of the family opened at startup (or set {ENV_FAMILY_NAME} env var)",
    )
    args = parser.parse_args()

    # CLI args override env vars
    if args.family_name:
        os.environ[ENV_FAMILY_NAME] = args.family_name

    # Import and initialize AFTER setting env vars
    from . import initialize, mcp

    initialize()
    mcp.run()


if __name__ == "__main__":
    main()
