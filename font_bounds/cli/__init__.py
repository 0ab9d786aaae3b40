"""Command-line interface for font-bounds."""
