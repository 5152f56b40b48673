"""Data operations behind the `data` tool.

Each module is one library: codec, text transforms, structured data and
formatters. They raise `core.errors` exceptions and never print; only
`structured.load_file` touches the filesystem.
"""
