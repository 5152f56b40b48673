"""Domain models and type aliases.

Pure data structures (Pydantic v2); nothing here performs I/O.
"""
