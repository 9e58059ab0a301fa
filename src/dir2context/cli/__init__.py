"""Command-line interface for dir2context."""
