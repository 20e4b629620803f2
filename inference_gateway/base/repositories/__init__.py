"""Repositories for gateway state held outside the request path."""
