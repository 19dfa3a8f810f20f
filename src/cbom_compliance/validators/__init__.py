"""Command-line validators for compliance documents."""
