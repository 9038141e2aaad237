"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- http.py: Throttled httpx document fetcher
- edgar.py: Submissions-JSON filing index
- filesystem.py: Filesystem-based raw document cache
- export.py / firms.py: CSV output and firm list input
"""
from .http import HttpFetcher, RequestThrottle
from .edgar import EdgarFilingIndex
from .filesystem import FilesystemDocumentCache

__all__ = [
    "HttpFetcher",
    "RequestThrottle",
    "EdgarFilingIndex",
    "FilesystemDocumentCache",
]
