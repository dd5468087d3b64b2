"""Command line interface for deskfs."""
