"""Domain types, configuration, errors and pure operations."""
