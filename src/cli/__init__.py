"""Command-line layer (Typer apps, Rich output)."""
