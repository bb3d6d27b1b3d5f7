"""Command-line interface for qodana-cli."""
