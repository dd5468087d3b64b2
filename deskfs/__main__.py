"""Main entry point for deskfs.

This allows the package to be run as:
    python -m deskfs
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
