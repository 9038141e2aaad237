"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from .domain import ExtractedSections, Filing, FilingFailure, Firm, PanelResult, PanelRow
from .extractor import SectionExtractor
from .llm import LlmRiskScorer
from .normalizer import normalize
from .ports import DocumentRepository, FilingIndex
from .scorer import LexiconScorer

logger = logging.getLogger(__name__)


def _read_and_extract(path: Path, extractor: SectionExtractor, want_secondary: bool) -> ExtractedSections:
    return extractor.extract(normalize(path.read_bytes()), want_secondary)


class ExtractSectionsService:
    """Use case: Cached document → extracted item sections"""

    def __init__(self, repository: DocumentRepository, extractor: SectionExtractor):
        self.repository = repository
        self.extractor = extractor

    async def execute(self, filing: Filing, want_secondary: bool = False) -> tuple[Path, ExtractedSections]:
        path = await self.repository.get_or_fetch(filing.cik, filing.accession_number, filing.primary_document)
        sections = await asyncio.to_thread(_read_and_extract, path, self.extractor, want_secondary)
        return path, sections


class ScoreFilingService:
    """Use case: Download, extract and score one filing"""

    def __init__(
        self,
        extract_service: ExtractSectionsService,
        scorer: LexiconScorer,
        min_words: int = 200,
        want_secondary: bool = False,
        llm_scorer: Optional[LlmRiskScorer] = None
    ):
        self.extract_service = extract_service
        self.scorer = scorer
        self.min_words = min_words
        self.want_secondary = want_secondary
        self.llm_scorer = llm_scorer

    async def execute(self, firm: Firm, filing: Filing) -> Optional[PanelRow]:
        """
        Build the panel row for a filing.

        Returns None when Item 1A is missing or shorter than min_words.
        """
        path, sections = await self.extract_service.execute(filing, self.want_secondary)

        item1a = sections.risk_factors
        if not item1a.found or item1a.word_count < self.min_words:
            logger.info(
                f"Skipping {firm.cik} {filing.accession_number}: "
                f"item1a found={item1a.found} words={item1a.word_count} toc_hit={sections.likely_toc}"
            )
            return None

        scores = await asyncio.to_thread(self.scorer.score, item1a.text)

        llm_score = None
        if self.llm_scorer is not None:
            result = await self.llm_scorer.score(item1a.text)
            llm_score = result.score if result else None

        return PanelRow(
            cik=firm.cik,
            ticker=firm.ticker,
            year=filing.year,
            filing_date=filing.filing_date,
            accession_number=filing.accession_number,
            item1a_word_count=item1a.word_count,
            risk_count=scores.risk_count,
            risk_freq=scores.risk_freq,
            negative_count=scores.negative_count,
            negative_freq=scores.negative_freq,
            uncertainty_count=scores.uncertainty_count,
            uncertainty_freq=scores.uncertainty_freq,
            llm_risk_score=llm_score,
            local_path=path,
        )


class BuildPanelService:
    """Use case: Firm list → firm-year panel"""

    def __init__(
        self,
        index: FilingIndex,
        score_service: ScoreFilingService,
        max_concurrency: int = 4
    ):
        self.index = index
        self.score_service = score_service
        self.max_concurrency = max(1, max_concurrency)

    async def execute(
        self,
        firms: list[Firm],
        start_year: int,
        end_year: int,
        include_amendments: bool = False
    ) -> PanelResult:
        """
        Process every firm's filings.

        A failing firm or filing is logged and recorded; the rest of the
        batch carries on. Cancellation is not caught.
        """
        result = PanelResult()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        for firm in firms:
            logger.info(f"Processing firm {firm.cik}")
            try:
                filings = await self.index.list_filings(firm, start_year, end_year, include_amendments)
            except Exception as e:
                logger.warning(f"Error {firm.cik}: failed to list filings: {e}")
                result.failures.append(FilingFailure(firm.cik, None, str(e)))
                continue

            async def process(filing: Filing) -> Optional[PanelRow | FilingFailure]:
                async with semaphore:
                    try:
                        return await self.score_service.execute(firm, filing)
                    except Exception as e:
                        logger.warning(f"Error {firm.cik} {filing.accession_number}: {e}")
                        return FilingFailure(firm.cik, filing.accession_number, str(e))

            outcomes = await asyncio.gather(*(process(f) for f in filings))
            for outcome in outcomes:
                if isinstance(outcome, FilingFailure):
                    result.failures.append(outcome)
                elif outcome is None:
                    result.skipped += 1
                else:
                    result.rows.append(outcome)

        logger.info(
            f"Panel complete: {len(result.rows)} row(s), {result.skipped} skipped, "
            f"{len(result.failures)} failure(s)"
        )
        return result
