"""
Shared fixtures: an in-memory DocumentSource, submissions JSON and filing HTML builders.
"""
import json

import pytest

from edgar_risk_panel.core.errors import FetchError
from edgar_risk_panel.core.ports import DocumentSource


class FakeSource(DocumentSource):
    """Serves canned bytes by URL and records every request"""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.responses:
            raise FetchError(f"HTTP 404 for {url}", url, 404)
        value = self.responses[url]
        if isinstance(value, Exception):
            raise value
        return value


def submissions_json(records, report_dates=True) -> bytes:
    """records: (form, accession, filing_date, primary_document) tuples"""
    recent = {
        "form": [r[0] for r in records],
        "accessionNumber": [r[1] for r in records],
        "filingDate": [r[2] for r in records],
        "primaryDocument": [r[3] for r in records],
    }
    if report_dates:
        recent["reportDate"] = ["" for _ in records]
    return json.dumps({"cik": "320193", "name": "Test Co", "filings": {"recent": recent}}).encode()


def filing_html(body_words: int, word: str = "risk uncertainty exposure") -> bytes:
    """A minimal 10-K with an Item 1A of body_words * len(word.split()) words"""
    body = " ".join([word] * body_words)
    return (
        "<html><body>"
        "<p>ITEM 1A. Risk Factors</p>"
        f"<p>{body}</p>"
        "<p>ITEM 1B. Unresolved Staff Comments</p>"
        "<p>None.</p>"
        "</body></html>"
    ).encode()


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def dict_dir(tmp_path):
    """Tiny three-category word lists"""
    path = tmp_path / "dictionaries"
    path.mkdir()
    (path / "risk.txt").write_text("# risk words\nrisk\nrisks\n")
    (path / "negative.txt").write_text("loss\nadverse\n")
    (path / "uncertainty.txt").write_text("uncertainty\nmay\n")
    return path


@pytest.fixture
def make_submissions():
    return submissions_json


@pytest.fixture
def make_filing_html():
    return filing_html
