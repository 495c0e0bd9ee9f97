"""Command-line interface for khata."""
