"""
Errors raised by the core and its adapters
"""
from typing import Optional


class LexiconError(ValueError):
    """A word list could not be turned into a usable lexicon"""


class FetchError(RuntimeError):
    """A remote document could not be retrieved"""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
