"""
Item section extraction

Cuts Item 1A (Risk Factors) and, optionally, Item 7 (MD&A) out of
normalized 10-K text. Every heading appears at least twice in a typical
filing (table of contents, then the body), so candidates are enumerated,
TOC-looking ones are skipped, and the first start with a plausible end wins.
"""
import logging
import re
from dataclasses import dataclass
from typing import Optional

from .domain import ExtractedSection, ExtractedSections

logger = logging.getLogger(__name__)

FLAGS = re.IGNORECASE | re.DOTALL


@dataclass(frozen=True)
class SectionPatterns:
    """Start/end boundary patterns for one item"""
    name: str
    start: re.Pattern
    end: re.Pattern


ITEM_1A = SectionPatterns(
    name="item1a",
    start=re.compile(r"\bitem\s*1a\b\s*[.\-:–—]?\s*(?:risk\s*factors)?\b", FLAGS),
    end=re.compile(r"\bitem\s*1b\b|\bitem\s*2\b|\bpart\s*ii\b", FLAGS),
)

ITEM_7 = SectionPatterns(
    name="item7",
    start=re.compile(
        r"\bitem\s*7\b\s*[.\-:–—]?\s*(?:management['’]?s\s*discussion\s*and\s*analysis)?\b",
        FLAGS,
    ),
    end=re.compile(r"\bitem\s*7a\b|\bitem\s*8\b", FLAGS),
)

TOC_PHRASE = re.compile(r"table\s+of\s+contents", FLAGS)
ANY_ITEM_HEADING = re.compile(r"\bitem\s*\d+\s*[a-z]?\b", FLAGS)
WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class TocHeuristics:
    """
    Tunable thresholds for table-of-contents detection.

    The values are empirical; none of them is a contract.
    """
    early_cap_chars: int = 25_000
    early_cap_divisor: int = 8
    phrase_radius: int = 3_000
    heading_radius: int = 4_000
    heading_density: int = 6
    dot_radius: int = 2_500
    dot_threshold: int = 300
    min_span_chars: int = 500


def _window(text: str, center: int, radius: int) -> str:
    return text[max(0, center - radius):min(len(text), center + radius)]


def count_words(text: str) -> int:
    return len(text.split())


class SectionExtractor:
    """Extracts item sections from normalized filing text"""

    def __init__(self, heuristics: Optional[TocHeuristics] = None):
        self.heuristics = heuristics or TocHeuristics()

    def extract(self, text: str, want_secondary: bool = False) -> ExtractedSections:
        """
        Extract Item 1A and optionally Item 7.

        A section that cannot be located comes back with found=False; that is
        a quality signal for the caller, not an error.
        """
        if not text or text.isspace():
            return ExtractedSections(
                risk_factors=ExtractedSection(),
                mdna=ExtractedSection() if want_secondary else None,
            )

        risk_factors = self.extract_section(text, ITEM_1A)
        mdna = self.extract_section(text, ITEM_7) if want_secondary else None

        return ExtractedSections(
            risk_factors=risk_factors,
            mdna=mdna,
            likely_toc=risk_factors.likely_toc,
        )

    def extract_section(self, text: str, patterns: SectionPatterns) -> ExtractedSection:
        """Run candidate enumeration → TOC filter → accept-or-fallback for one item"""
        starts = list(patterns.start.finditer(text))
        if not starts:
            return ExtractedSection()

        likely_toc = False
        chosen: Optional[re.Match] = None

        for start in starts:
            if self.is_likely_toc(text, start.start()):
                likely_toc = True
                continue

            end = patterns.end.search(text, start.end())
            if end is None:
                continue

            span = end.start() - start.start()
            if span <= 0 or span < self.heuristics.min_span_chars:
                continue

            chosen = start
            break

        if chosen is None:
            # The body heading usually comes after the TOC entry
            chosen = starts[-1]
            logger.debug(f"{patterns.name}: no candidate accepted, falling back to last of {len(starts)}")

        end = patterns.end.search(text, chosen.end())
        if end is None or end.start() <= chosen.start():
            return ExtractedSection(likely_toc=likely_toc)

        section = WHITESPACE.sub(" ", text[chosen.start():end.start()]).strip()
        if not section:
            return ExtractedSection(likely_toc=likely_toc)

        return ExtractedSection(
            text=section,
            found=True,
            word_count=count_words(section),
            likely_toc=likely_toc,
        )

    def is_likely_toc(self, text: str, index: int) -> bool:
        """Heuristic check whether a heading match sits in a table of contents"""
        h = self.heuristics

        if index < min(h.early_cap_chars, len(text) // h.early_cap_divisor):
            if TOC_PHRASE.search(_window(text, index, h.phrase_radius)):
                return True

            headings = ANY_ITEM_HEADING.findall(_window(text, index, h.heading_radius))
            if len(headings) >= h.heading_density:
                return True

        # Dot leaders ("Risk Factors ........ 12")
        return _window(text, index, h.dot_radius).count(".") > h.dot_threshold
