"""Command-line interface for NEOBUNDLE."""
