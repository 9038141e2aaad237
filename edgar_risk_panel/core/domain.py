"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts.
"""
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Firm:
    """A registered filer, identified by its 10-digit CIK"""
    cik: str  # zero-padded, e.g. "0000320193"
    ticker: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def from_cik(cls, value, ticker: Optional[str] = None, name: Optional[str] = None) -> "Firm":
        """Build a Firm from a raw CIK ("320193", 320193, "0000320193")"""
        cik = str(value).strip()
        if not cik.isdigit():
            raise ValueError(f"Invalid CIK: {value!r}")
        return cls(cik=cik.zfill(10), ticker=ticker or None, name=name or None)


@dataclass(frozen=True)
class Filing:
    """One 10-K (or 10-K/A) submission"""
    cik: str
    form_type: str
    accession_number: str  # with dashes, e.g. "0000320193-23-000106"
    filing_date: date
    primary_document: str  # e.g. "a10-k20230930.htm"
    report_date: Optional[date] = None

    @property
    def year(self) -> int:
        return self.filing_date.year

    @property
    def accession_no_dashes(self) -> str:
        return self.accession_number.replace("-", "")


@dataclass(frozen=True)
class ExtractedSection:
    """A narrative span cut out of a filing"""
    text: str = ""
    found: bool = False
    word_count: int = 0
    likely_toc: bool = False


@dataclass(frozen=True)
class ExtractedSections:
    """Item 1A (always attempted) and Item 7 (optional)"""
    risk_factors: ExtractedSection
    mdna: Optional[ExtractedSection] = None
    likely_toc: bool = False
    method_version: str = "v1"


@dataclass(frozen=True)
class Lexicon:
    """Loughran-McDonald style word lists, uppercase tokens"""
    risk: frozenset[str]
    negative: frozenset[str]
    uncertainty: frozenset[str]


@dataclass(frozen=True)
class ScoreResult:
    """Dictionary counts and frequencies for one text"""
    total_words: int = 0
    risk_count: int = 0
    risk_freq: float = 0.0
    negative_count: int = 0
    negative_freq: float = 0.0
    uncertainty_count: int = 0
    uncertainty_freq: float = 0.0


@dataclass(frozen=True)
class LlmScore:
    """Output of the (stubbed) LLM risk scorer"""
    score: float
    model: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class PanelRow:
    """One firm-filing observation, the unit exported to CSV"""
    cik: str
    year: int
    filing_date: date
    accession_number: str
    item1a_word_count: int
    risk_count: int
    risk_freq: float
    negative_count: int
    negative_freq: float
    uncertainty_count: int
    uncertainty_freq: float
    ticker: Optional[str] = None
    found_item1a: bool = True
    llm_risk_score: Optional[float] = None
    local_path: Optional[Path] = None


@dataclass(frozen=True)
class FilingFailure:
    """A filing (or a whole firm, when accession is None) that could not be processed"""
    cik: str
    accession_number: Optional[str]
    error: str


@dataclass
class PanelResult:
    """Outcome of a panel build"""
    rows: list[PanelRow] = field(default_factory=list)
    failures: list[FilingFailure] = field(default_factory=list)
    skipped: int = 0  # filings dropped by the quality filter
