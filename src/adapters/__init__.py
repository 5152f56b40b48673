"""I/O adapters: filesystem, HTTP client, demonstration servers."""
