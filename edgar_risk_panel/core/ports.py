"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .domain import Filing, Firm


class DocumentSource(ABC):
    """Port for retrieving raw bytes from EDGAR"""

    @abstractmethod
    async def fetch(self, url: str) -> bytes:
        """Download a URL, raising FetchError on failure"""
        pass


class DocumentRepository(ABC):
    """Port for the local raw-document cache"""

    @abstractmethod
    def path_for(self, cik: str, accession_number: str, filename: str) -> Path:
        """Deterministic storage address for a filing's document"""
        pass

    @abstractmethod
    async def get_or_fetch(
        self,
        cik: str,
        accession_number: str,
        filename: str,
        overwrite: Optional[bool] = None
    ) -> Path:
        """Return local path, downloading on cache miss"""
        pass


class FilingIndex(ABC):
    """Port for resolving a firm's annual-report filings"""

    @abstractmethod
    async def list_filings(
        self,
        firm: Firm,
        start_year: int,
        end_year: int,
        include_amendments: bool = False
    ) -> list[Filing]:
        """One filing per calendar year, ascending by filing date"""
        pass
