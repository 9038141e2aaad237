"""
EDGAR Adapter

Implements FilingIndex port on top of the official submissions JSON
(https://data.sec.gov/submissions/CIK##########.json).
"""
import json
import logging
from datetime import date, datetime
from itertools import groupby
from typing import Any, Optional

from ..core.domain import Filing, Firm
from ..core.errors import FetchError
from ..core.ports import DocumentSource, FilingIndex

logger = logging.getLogger(__name__)

SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK{cik10}.json"
ARCHIVE_URL = "https://www.sec.gov/Archives/edgar/data/{cik}/{accession}/{document}"

ANNUAL_FORMS = {"10-K"}
ANNUAL_FORMS_WITH_AMENDMENTS = {"10-K", "10-K/A"}


def submissions_url(cik10: str) -> str:
    return SUBMISSIONS_URL.format(cik10=cik10)


def accession_no_dashes(accession_number: str) -> str:
    return accession_number.replace("-", "")


def normalize_cik_for_archive(cik: str) -> str:
    """Archive paths use the CIK without leading zeros ("0000320193" → "320193")"""
    return cik.strip().lstrip("0") or "0"


def archive_url(cik: str, accession_number: str, document: str) -> str:
    """https://www.sec.gov/Archives/edgar/data/{cik}/{accession-no-dashes}/{document}"""
    return ARCHIVE_URL.format(
        cik=normalize_cik_for_archive(cik),
        accession=accession_no_dashes(accession_number),
        document=document,
    )


def _parse_date(value: str) -> Optional[date]:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        return None


def _strings(parent: dict, name: str) -> Optional[list[str]]:
    values = parent.get(name)
    if not isinstance(values, list):
        return None
    # SEC JSON occasionally has nulls in these arrays
    return [v if isinstance(v, str) else "" for v in values]


def parse_submissions(payload: dict[str, Any], cik: str) -> list[Filing]:
    """
    Turn filings.recent parallel arrays into Filing records.

    Arrays are zipped up to the shortest required one. An index with a blank
    required field or an unparseable filing date is skipped.
    """
    filings = payload.get("filings")
    recent = filings.get("recent") if isinstance(filings, dict) else None
    if not isinstance(recent, dict):
        return []

    forms = _strings(recent, "form") or []
    accessions = _strings(recent, "accessionNumber") or []
    dates = _strings(recent, "filingDate") or []
    documents = _strings(recent, "primaryDocument") or []
    report_dates = _strings(recent, "reportDate")

    n = min(len(forms), len(accessions), len(dates), len(documents))
    result = []
    for i in range(n):
        form, accession, date_str, document = forms[i], accessions[i], dates[i], documents[i]
        if not (form.strip() and accession.strip() and date_str.strip() and document.strip()):
            logger.debug(f"CIK {cik}: skipping record {i} with missing fields")
            continue

        filing_date = _parse_date(date_str)
        if filing_date is None:
            logger.debug(f"CIK {cik}: skipping record {i}, bad filingDate {date_str!r}")
            continue

        report_date = None
        if report_dates is not None and i < len(report_dates) and report_dates[i]:
            report_date = _parse_date(report_dates[i])

        result.append(Filing(
            cik=cik,
            form_type=form.strip(),
            accession_number=accession.strip(),
            filing_date=filing_date,
            primary_document=document.strip(),
            report_date=report_date,
        ))

    return result


def pick_one_per_year(filings: list[Filing]) -> list[Filing]:
    """
    Keep the latest filing in each calendar year, ascending by filing date.

    Same-date ties go to the greatest accession number.
    """
    by_year = sorted(filings, key=lambda f: f.year)
    kept = [
        max(group, key=lambda f: (f.filing_date, f.accession_number))
        for _, group in groupby(by_year, key=lambda f: f.year)
    ]
    kept.sort(key=lambda f: f.filing_date)
    return kept


class EdgarFilingIndex(FilingIndex):
    """Annual-report index backed by the submissions endpoint"""

    def __init__(self, source: DocumentSource):
        self.source = source

    async def fetch_submissions(self, firm: Firm) -> dict[str, Any]:
        url = submissions_url(firm.cik)
        raw = await self.source.fetch(url)
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise FetchError(f"Malformed submissions JSON for CIK {firm.cik}: {e}", url) from e
        if not isinstance(payload, dict):
            raise FetchError(f"Unexpected submissions payload for CIK {firm.cik}", url)
        return payload

    async def list_filings(
        self,
        firm: Firm,
        start_year: int,
        end_year: int,
        include_amendments: bool = False
    ) -> list[Filing]:
        """
        List the firm's 10-K filings in [start_year, end_year], one per year.

        A firm without filings in range yields an empty list.
        """
        if not firm.cik.strip():
            raise ValueError("Firm.cik is required")

        payload = await self.fetch_submissions(firm)
        filings = parse_submissions(payload, firm.cik)

        allowed = ANNUAL_FORMS_WITH_AMENDMENTS if include_amendments else ANNUAL_FORMS
        filings = [
            f for f in filings
            if f.form_type.upper() in allowed and start_year <= f.year <= end_year
        ]

        selected = pick_one_per_year(filings)
        logger.info(f"CIK {firm.cik}: {len(selected)} filing(s) selected for {start_year}-{end_year}")
        return selected

    async def find_filing(self, firm: Firm, accession_number: str) -> Optional[Filing]:
        """
        Look up one 10-K or 10-K/A by accession number.

        No year range or one-per-year selection applies.
        """
        wanted = accession_number.strip()
        payload = await self.fetch_submissions(firm)
        for filing in parse_submissions(payload, firm.cik):
            if filing.accession_number == wanted and filing.form_type.upper() in ANNUAL_FORMS_WITH_AMENDMENTS:
                return filing
        return None
