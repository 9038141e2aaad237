"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- ports.py: Port interfaces (abstractions for external dependencies)
- normalizer.py, extractor.py, scorer.py, llm.py: Pure text processing
- services.py: Application services (use cases)
"""
from .domain import (
    Firm,
    Filing,
    ExtractedSection,
    ExtractedSections,
    Lexicon,
    ScoreResult,
    LlmScore,
    PanelRow,
    FilingFailure,
    PanelResult,
)
from .errors import FetchError, LexiconError
from .ports import DocumentSource, DocumentRepository, FilingIndex
from .normalizer import normalize
from .extractor import SectionExtractor, SectionPatterns, TocHeuristics, ITEM_1A, ITEM_7
from .scorer import LexiconScorer, load_lexicon, load_word_set
from .llm import LlmRiskScorer
from .services import ExtractSectionsService, ScoreFilingService, BuildPanelService

__all__ = [
    # Domain models
    "Firm",
    "Filing",
    "ExtractedSection",
    "ExtractedSections",
    "Lexicon",
    "ScoreResult",
    "LlmScore",
    "PanelRow",
    "FilingFailure",
    "PanelResult",
    # Errors
    "FetchError",
    "LexiconError",
    # Ports
    "DocumentSource",
    "DocumentRepository",
    "FilingIndex",
    # Text processing
    "normalize",
    "SectionExtractor",
    "SectionPatterns",
    "TocHeuristics",
    "ITEM_1A",
    "ITEM_7",
    "LexiconScorer",
    "load_lexicon",
    "load_word_set",
    "LlmRiskScorer",
    # Services
    "ExtractSectionsService",
    "ScoreFilingService",
    "BuildPanelService",
]
