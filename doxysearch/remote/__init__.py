"""
Remote client for doxysearch.

Provides an HTTP client for querying a doxysearch server.
"""

from doxysearch.remote.client import RemoteCatalog

__all__ = ["RemoteCatalog"]
