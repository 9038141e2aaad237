"""
Tests for the submissions-JSON filing index
"""
import asyncio
from datetime import date

import pytest

from edgar_risk_panel.adapters.edgar import (
    EdgarFilingIndex,
    normalize_cik_for_archive,
    parse_submissions,
    pick_one_per_year,
    submissions_url,
)
from edgar_risk_panel.core.domain import Filing, Firm
from edgar_risk_panel.core.errors import FetchError

FIRM = Firm.from_cik("320193")
URL = "https://data.sec.gov/submissions/CIK0000320193.json"


def filing(filing_date: str, accession: str, form: str = "10-K") -> Filing:
    return Filing(
        cik=FIRM.cik,
        form_type=form,
        accession_number=accession,
        filing_date=date.fromisoformat(filing_date),
        primary_document="doc.htm",
    )


class TestHelpers:
    """Test URL helpers."""

    def test_submissions_url(self):
        assert submissions_url("0000320193") == URL

    def test_archive_cik(self):
        assert normalize_cik_for_archive("0000320193") == "320193"
        assert normalize_cik_for_archive("0000000000") == "0"


class TestParseSubmissions:
    """Test parallel-array parsing."""

    def test_truncates_to_shortest_array(self):
        payload = {"filings": {"recent": {
            "form": ["10-K", "10-Q", "10-K"],
            "accessionNumber": ["0000320193-23-000106", "0000320193-23-000077"],
            "filingDate": ["2023-11-03", "2023-08-04", "2022-10-28"],
            "primaryDocument": ["a.htm", "b.htm", "c.htm"],
        }}}
        result = parse_submissions(payload, FIRM.cik)
        assert [f.accession_number for f in result] == ["0000320193-23-000106", "0000320193-23-000077"]
        assert result[0].report_date is None

    def test_skips_blank_and_bad_records(self):
        payload = {"filings": {"recent": {
            "form": ["10-K", "", "10-K", "10-K"],
            "accessionNumber": ["0000320193-23-000106", "0000320193-22-000001", None, "0000320193-21-000105"],
            "filingDate": ["2023-11-03", "2022-10-28", "2022-01-01", "not-a-date"],
            "primaryDocument": ["a.htm", "b.htm", "c.htm", "d.htm"],
            "reportDate": ["2023-09-30", "", "", ""],
        }}}
        result = parse_submissions(payload, FIRM.cik)
        assert len(result) == 1
        assert result[0].report_date == date(2023, 9, 30)
        assert result[0].filing_date == date(2023, 11, 3)

    def test_missing_recent(self):
        assert parse_submissions({}, FIRM.cik) == []
        assert parse_submissions({"filings": {}}, FIRM.cik) == []

    def test_non_object_filings(self):
        assert parse_submissions({"filings": ["x"]}, FIRM.cik) == []
        assert parse_submissions({"filings": {"recent": []}}, FIRM.cik) == []


class TestPickOnePerYear:
    """Test the one-filing-per-year selection rule."""

    def test_latest_in_year_wins(self):
        result = pick_one_per_year([
            filing("2023-11-03", "0000320193-23-000106"),
            filing("2023-02-01", "0000320193-23-000010"),
            filing("2022-10-28", "0000320193-22-000108"),
        ])
        assert [f.accession_number for f in result] == ["0000320193-22-000108", "0000320193-23-000106"]

    def test_same_date_tie_breaks_on_accession(self):
        result = pick_one_per_year([
            filing("2023-11-03", "0000320193-23-000200"),
            filing("2023-11-03", "0000320193-23-000106"),
        ])
        assert [f.accession_number for f in result] == ["0000320193-23-000200"]

    def test_ascending_order(self):
        result = pick_one_per_year([
            filing("2021-10-29", "a"),
            filing("2023-11-03", "c"),
            filing("2022-10-28", "b"),
        ])
        assert [f.year for f in result] == [2021, 2022, 2023]

    def test_empty(self):
        assert pick_one_per_year([]) == []


class TestEdgarFilingIndex:
    """Test list_filings against canned submissions."""

    RECORDS = [
        ("10-K", "0000320193-23-000106", "2023-11-03", "aapl-20230930.htm"),
        ("10-Q", "0000320193-23-000077", "2023-08-04", "aapl-20230701.htm"),
        ("10-K/A", "0000320193-23-000200", "2023-12-15", "aapl-20230930a.htm"),
        ("10-K", "0000320193-22-000108", "2022-10-28", "aapl-20220924.htm"),
        ("10-k", "0000320193-21-000105", "2021-10-29", "aapl-20210925.htm"),
        ("10-K", "0000320193-09-000010", "2009-10-27", "d10k.htm"),
    ]

    def test_filters_forms_and_years(self, fake_source, make_submissions):
        fake_source.responses[URL] = make_submissions(self.RECORDS)
        index = EdgarFilingIndex(fake_source)

        result = asyncio.run(index.list_filings(FIRM, 2010, 2023))

        assert [f.accession_number for f in result] == [
            "0000320193-21-000105",
            "0000320193-22-000108",
            "0000320193-23-000106",
        ]
        assert fake_source.calls == [URL]

    def test_amendments_included(self, fake_source, make_submissions):
        fake_source.responses[URL] = make_submissions(self.RECORDS)
        index = EdgarFilingIndex(fake_source)

        result = asyncio.run(index.list_filings(FIRM, 2023, 2023, include_amendments=True))

        assert len(result) == 1
        assert result[0].form_type == "10-K/A"
        assert result[0].accession_number == "0000320193-23-000200"

    def test_no_history(self, fake_source, make_submissions):
        fake_source.responses[URL] = make_submissions([])
        result = asyncio.run(EdgarFilingIndex(fake_source).list_filings(FIRM, 2010, 2023))
        assert result == []

    def test_nothing_in_range(self, fake_source, make_submissions):
        fake_source.responses[URL] = make_submissions(self.RECORDS)
        result = asyncio.run(EdgarFilingIndex(fake_source).list_filings(FIRM, 2015, 2020))
        assert result == []

    def test_malformed_json(self, fake_source):
        fake_source.responses[URL] = b"<html>Not JSON</html>"
        with pytest.raises(FetchError, match="Malformed"):
            asyncio.run(EdgarFilingIndex(fake_source).list_filings(FIRM, 2010, 2023))

    def test_non_object_json(self, fake_source):
        fake_source.responses[URL] = b"[]"
        with pytest.raises(FetchError):
            asyncio.run(EdgarFilingIndex(fake_source).list_filings(FIRM, 2010, 2023))

    def test_fetch_failure_propagates(self, fake_source):
        with pytest.raises(FetchError):
            asyncio.run(EdgarFilingIndex(fake_source).list_filings(FIRM, 2010, 2023))


class TestFindFiling:
    """Test accession-number lookup."""

    RECORDS = TestEdgarFilingIndex.RECORDS + [
        ("10-K", "0000320193-24-000123", "2024-11-01", "aapl-20240928.htm"),
    ]

    def find(self, fake_source, make_submissions, accession):
        fake_source.responses[URL] = make_submissions(self.RECORDS)
        return asyncio.run(EdgarFilingIndex(fake_source).find_filing(FIRM, accession))

    def test_outside_default_years(self, fake_source, make_submissions):
        result = self.find(fake_source, make_submissions, "0000320193-24-000123")
        assert result.filing_date == date(2024, 11, 1)
        assert result.primary_document == "aapl-20240928.htm"

    def test_filing_not_picked_for_its_year(self, fake_source, make_submissions):
        # With amendments included, list_filings keeps the later 10-K/A for 2023
        result = self.find(fake_source, make_submissions, " 0000320193-23-000106 ")
        assert result.accession_number == "0000320193-23-000106"

    def test_amendment(self, fake_source, make_submissions):
        result = self.find(fake_source, make_submissions, "0000320193-23-000200")
        assert result.form_type == "10-K/A"

    def test_other_form_not_returned(self, fake_source, make_submissions):
        assert self.find(fake_source, make_submissions, "0000320193-23-000077") is None

    def test_unknown_accession(self, fake_source, make_submissions):
        assert self.find(fake_source, make_submissions, "0000320193-99-000001") is None
