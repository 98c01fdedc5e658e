"""Command-line interface for pandoc export."""
