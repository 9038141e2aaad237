"""
MCP Tool Handlers

Shared handlers used by the MCP server and the CLI. Every handler returns a
plain dict with a "success" flag instead of raising.
"""
import asyncio
import logging
from datetime import date
from typing import Any, Optional

from ...container import Container
from ...core.domain import Filing, Firm, PanelRow
from ..export import write_panel_csv
from ..firms import firms_from_ciks, load_firms

logger = logging.getLogger(__name__)


def _filing_dict(filing: Filing) -> dict[str, Any]:
    return {
        "cik": filing.cik,
        "form_type": filing.form_type,
        "accession_number": filing.accession_number,
        "filing_date": filing.filing_date.isoformat(),
        "report_date": filing.report_date.isoformat() if filing.report_date else None,
        "primary_document": filing.primary_document,
    }


def _row_dict(row: PanelRow) -> dict[str, Any]:
    return {
        "cik": row.cik,
        "ticker": row.ticker,
        "year": row.year,
        "filing_date": row.filing_date.isoformat(),
        "accession_number": row.accession_number,
        "item1a_word_count": row.item1a_word_count,
        "risk_count": row.risk_count,
        "risk_freq": row.risk_freq,
        "negative_count": row.negative_count,
        "negative_freq": row.negative_freq,
        "uncertainty_count": row.uncertainty_count,
        "uncertainty_freq": row.uncertainty_freq,
        "llm_risk_score": row.llm_risk_score,
        "path": str(row.local_path) if row.local_path else None,
    }


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    def _years(self, start_year: Optional[int], end_year: Optional[int]) -> tuple[int, int]:
        settings = self.container.settings
        return (start_year or settings.start_year, end_year or settings.end_year)

    async def _find_filing(self, firm: Firm, accession_number: Optional[str], year: Optional[int]) -> Filing:
        """Resolve a filing by exact accession number, or the selected filing for a year (latest if neither)"""
        if accession_number:
            filing = await self.container.index.find_filing(firm, accession_number)
            if filing is None:
                raise ValueError(f"No 10-K filing found for CIK {firm.cik} ({accession_number})")
            return filing

        start, end = (year, year) if year else self._years(None, None)
        filings = await self.container.index.list_filings(
            firm, start, end, self.container.settings.include_amendments
        )
        if not filings:
            wanted = str(year) if year else f"{start}-{end}"
            raise ValueError(f"No 10-K filing found for CIK {firm.cik} ({wanted})")
        return filings[-1]

    async def list_filings(
        self,
        cik: str,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        include_amendments: Optional[bool] = None
    ) -> dict[str, Any]:
        """List the one-per-year 10-K filings for a firm"""
        try:
            firm = Firm.from_cik(cik)
            start, end = self._years(start_year, end_year)
            if include_amendments is None:
                include_amendments = self.container.settings.include_amendments
            filings = await self.container.index.list_filings(firm, start, end, include_amendments)
            return {
                "success": True,
                "cik": firm.cik,
                "start_year": start,
                "end_year": end,
                "filings": [_filing_dict(f) for f in filings],
                "count": len(filings),
            }
        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to list filings: {str(e)}"
            }

    async def fetch_document(
        self,
        cik: str,
        accession_number: Optional[str] = None,
        year: Optional[int] = None,
        force_refetch: bool = False
    ) -> dict[str, Any]:
        """Download (or reuse) a filing's primary document and return its path"""
        try:
            firm = Firm.from_cik(cik)
            filing = await self._find_filing(firm, accession_number, year)
            cache = self.container.cache
            was_cached = cache.exists(filing.cik, filing.accession_number, filing.primary_document)
            path = await cache.get_or_fetch(
                filing.cik, filing.accession_number, filing.primary_document,
                overwrite=force_refetch or None
            )
            return {
                "success": True,
                "path": str(path),
                "cached": was_cached and not force_refetch,
                "size_bytes": path.stat().st_size,
                "filing": _filing_dict(filing),
            }
        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to fetch document: {str(e)}"
            }

    async def extract_sections(
        self,
        cik: str,
        accession_number: Optional[str] = None,
        year: Optional[int] = None,
        include_mdna: bool = False,
        preview_words: int = 60
    ) -> dict[str, Any]:
        """Extract Item 1A (and optionally Item 7) from a filing"""
        try:
            firm = Firm.from_cik(cik)
            filing = await self._find_filing(firm, accession_number, year)
            path, sections = await self.container.extract_sections.execute(filing, include_mdna)

            def describe(section):
                if section is None:
                    return None
                words = section.text.split()
                return {
                    "found": section.found,
                    "word_count": section.word_count,
                    "likely_toc": section.likely_toc,
                    "preview": " ".join(words[:preview_words]),
                }

            return {
                "success": True,
                "path": str(path),
                "filing": _filing_dict(filing),
                "likely_toc": sections.likely_toc,
                "method_version": sections.method_version,
                "item1a": describe(sections.risk_factors),
                "item7": describe(sections.mdna),
            }
        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to extract sections: {str(e)}"
            }

    async def score_filing(
        self,
        cik: str,
        accession_number: Optional[str] = None,
        year: Optional[int] = None
    ) -> dict[str, Any]:
        """Compute dictionary measures for one filing's Item 1A"""
        try:
            firm = Firm.from_cik(cik)
            filing = await self._find_filing(firm, accession_number, year)
            row = await self.container.score_filing.execute(firm, filing)
            if row is None:
                return {
                    "success": True,
                    "retained": False,
                    "filing": _filing_dict(filing),
                    "reason": f"Item 1A missing or under {self.container.settings.min_risk_words} words",
                }
            return {
                "success": True,
                "retained": True,
                "filing": _filing_dict(filing),
                "row": _row_dict(row),
            }
        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to score filing: {str(e)}"
            }

    async def build_panel(
        self,
        ciks: Optional[list[str]] = None,
        firms_csv: Optional[str] = None,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None,
        output_path: Optional[str] = None
    ) -> dict[str, Any]:
        """Build the firm-year panel and write it to CSV"""
        try:
            if firms_csv:
                firms = await asyncio.to_thread(load_firms, firms_csv)
            else:
                firms = firms_from_ciks(ciks or [])
            if not firms:
                raise ValueError("No firms given (pass CIKs or a firm list CSV)")

            start, end = self._years(start_year, end_year)
            # Fail fast on a broken lexicon before touching the network
            service = self.container.build_panel
            result = await service.execute(firms, start, end, self.container.settings.include_amendments)

            target = output_path or str(self.container.settings.output_dir / "risk_panel.csv")
            written = await asyncio.to_thread(write_panel_csv, result.rows, target)

            return {
                "success": True,
                "output_path": str(written) if written else None,
                "firms": len(firms),
                "start_year": start,
                "end_year": end,
                "rows": len(result.rows),
                "skipped": result.skipped,
                "failures": [
                    {"cik": f.cik, "accession_number": f.accession_number, "error": f.error}
                    for f in result.failures
                ],
                "generated": date.today().isoformat(),
            }
        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to build panel: {str(e)}"
            }
