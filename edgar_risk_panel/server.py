"""
edgar-risk-panel MCP Server

MCP delivery layer - exposes MCPHandlers as MCP tools.
Separation of concerns: this file only handles MCP protocol.
"""
import argparse
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .adapters.mcp import MCPHandlers
from .config import load_settings
from .container import Container

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)

mcp = FastMCP("edgar-risk-panel")

# One container per process so every tool call shares the same SEC throttle
_handlers: Optional[MCPHandlers] = None


def get_handlers() -> MCPHandlers:
    global _handlers
    if _handlers is None:
        settings = load_settings()
        settings.ensure_directories()
        _handlers = MCPHandlers(Container(settings))
    return _handlers


@mcp.tool()
async def list_filings(
    cik: str,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    include_amendments: Optional[bool] = None
) -> dict:
    """
    List a firm's annual 10-K filings, at most one per filing year.

    When a year has several filings (e.g. a 10-K and a later 10-K/A), the latest
    filed one is kept.

    Args:
        cik: SEC Central Index Key, with or without leading zeros (e.g., "320193")
        start_year: First filing year (default: EDGAR_START_YEAR, 2010)
        end_year: Last filing year (default: EDGAR_END_YEAR, 2023)
        include_amendments: Also accept 10-K/A (default: EDGAR_INCLUDE_AMENDMENTS)

    Returns:
        Dictionary with the selected filings in ascending date order

    Example:
        list_filings("320193", 2021, 2023)
        → {filings: [{accession_number: "0000320193-21-000105", ...}, ...], count: 3}
    """
    return await get_handlers().list_filings(cik, start_year, end_year, include_amendments)


@mcp.tool()
async def fetch_document(
    cik: str,
    accession_number: Optional[str] = None,
    year: Optional[int] = None,
    force_refetch: bool = False
) -> dict:
    """
    Download a filing's primary document to disk, return path.

    Documents are cached under <raw_dir>/<cik>/<accession without dashes>/
    and never downloaded twice unless force_refetch is set.

    Args:
        cik: SEC Central Index Key (e.g., "320193")
        accession_number: Exact filing (e.g., "0000320193-23-000106")
        year: Filing year, used when no accession number is given (default: latest)
        force_refetch: Re-download even if cached

    Returns:
        Dictionary with file path, size, and filing metadata. Use Read/Grep on the path.
    """
    return await get_handlers().fetch_document(cik, accession_number, year, force_refetch)


@mcp.tool()
async def extract_sections(
    cik: str,
    accession_number: Optional[str] = None,
    year: Optional[int] = None,
    include_mdna: bool = False,
    preview_words: int = 60
) -> dict:
    """
    Extract Item 1A (Risk Factors) and optionally Item 7 (MD&A) from a 10-K.

    Table-of-contents hits are skipped; "likely_toc" reports whether any was seen.

    Args:
        cik: SEC Central Index Key (e.g., "320193")
        accession_number: Exact filing (optional)
        year: Filing year (optional, default: latest)
        include_mdna: Also extract Item 7
        preview_words: Number of leading words to return per section

    Returns:
        Dictionary with found/word_count/likely_toc/preview per section and the document path
    """
    return await get_handlers().extract_sections(cik, accession_number, year, include_mdna, preview_words)


@mcp.tool()
async def score_filing(
    cik: str,
    accession_number: Optional[str] = None,
    year: Optional[int] = None
) -> dict:
    """
    Compute risk / negative / uncertainty word counts and frequencies for a 10-K's Item 1A.

    Filings whose Item 1A is missing or shorter than EDGAR_MIN_RISK_WORDS are
    reported with retained=False.

    Args:
        cik: SEC Central Index Key (e.g., "320193")
        accession_number: Exact filing (optional)
        year: Filing year (optional, default: latest)

    Returns:
        Dictionary with the panel row for the filing, or the exclusion reason
    """
    return await get_handlers().score_filing(cik, accession_number, year)


@mcp.tool()
async def build_panel(
    ciks: Optional[list[str]] = None,
    firms_csv: Optional[str] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
    output_path: Optional[str] = None
) -> dict:
    """
    Build the firm-year risk panel and write it as a ';'-delimited CSV.

    One firm's or one filing's failure is recorded and the run continues.

    Args:
        ciks: Firm CIKs (alternative to firms_csv)
        firms_csv: Path to a CSV with a "cik" column (optional "ticker", "name")
        start_year: First filing year (default: EDGAR_START_YEAR)
        end_year: Last filing year (default: EDGAR_END_YEAR)
        output_path: CSV path (default: <output_dir>/risk_panel.csv)

    Returns:
        Dictionary with the output path, row/skip counts, and per-filing failures
    """
    return await get_handlers().build_panel(ciks, firms_csv, start_year, end_year, output_path)


def main():
    """Main entry point for the MCP server."""
    parser = argparse.ArgumentParser(
        description="edgar-risk-panel: 10-K risk-factor text measures as MCP tools."
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio"],
        help="Transport method (default: stdio)"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S"
    )
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
