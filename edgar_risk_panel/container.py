"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from typing import Optional

from .adapters import EdgarFilingIndex, FilesystemDocumentCache, HttpFetcher, RequestThrottle
from .config import Settings
from .core import (
    BuildPanelService,
    ExtractSectionsService,
    Lexicon,
    LexiconScorer,
    LlmRiskScorer,
    ScoreFilingService,
    SectionExtractor,
    load_lexicon,
)
from .core.ports import DocumentSource


class Container:
    """Dependency injection container for the application"""

    def __init__(self, settings: Settings, source: Optional[DocumentSource] = None):
        self.settings = settings

        # Adapters (infrastructure); one throttle for the whole process
        self.throttle = RequestThrottle(settings.min_interval_seconds)
        self.fetcher = source or HttpFetcher(
            settings.user_agent,
            throttle=self.throttle,
            timeout=settings.timeout_seconds
        )
        self.cache = FilesystemDocumentCache(settings.raw_dir, self.fetcher, overwrite=settings.overwrite_raw)
        self.index = EdgarFilingIndex(self.fetcher)

        # Pure components
        self.extractor = SectionExtractor(settings.toc)
        self.llm_scorer = LlmRiskScorer() if settings.llm_stub else None
        self._lexicon: Optional[Lexicon] = None

        # Services (use cases)
        self.extract_sections = ExtractSectionsService(
            repository=self.cache,
            extractor=self.extractor
        )

    @property
    def lexicon(self) -> Lexicon:
        """Loaded on first use; raises LexiconError/FileNotFoundError if unusable"""
        if self._lexicon is None:
            self._lexicon = load_lexicon(self.settings.dict_dir)
        return self._lexicon

    @property
    def score_filing(self) -> ScoreFilingService:
        return ScoreFilingService(
            extract_service=self.extract_sections,
            scorer=LexiconScorer(self.lexicon),
            min_words=self.settings.min_risk_words,
            want_secondary=self.settings.extract_mdna,
            llm_scorer=self.llm_scorer
        )

    @property
    def build_panel(self) -> BuildPanelService:
        return BuildPanelService(
            index=self.index,
            score_service=self.score_filing,
            max_concurrency=self.settings.max_concurrency
        )

    async def aclose(self) -> None:
        if isinstance(self.fetcher, HttpFetcher):
            await self.fetcher.aclose()

    async def __aenter__(self) -> "Container":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
