"""
Tests for Item 1A / Item 7 extraction and TOC detection
"""
from edgar_risk_panel.core.extractor import (
    ITEM_1A,
    SectionExtractor,
    TocHeuristics,
    count_words,
)


def words(n: int, word: str = "exposure") -> str:
    return " ".join([word] * n)


def filing_text(body_words: int = 600) -> str:
    return (
        "ITEM 1A. Risk Factors\n\n"
        f"The Company faces substantial uncertainty {words(body_words)}\n\n"
        "ITEM 1B. Unresolved Staff Comments\n\nNone"
    )


def toc_then_body(filler_words: int = 1500, body_words: int = 600) -> str:
    toc = (
        "TABLE OF CONTENTS\n\n"
        "Item 1. Business 3\n"
        "Item 1A. Risk Factors 12\n"
        "Item 1B. Unresolved Staff Comments 20\n"
        "Item 2. Properties 21\n"
        "Item 3. Legal Proceedings 22\n"
        "Item 7. Management's Discussion and Analysis 30\n"
        "Item 8. Financial Statements 45\n\n"
    )
    return (
        toc
        + words(filler_words, "business") + "\n\n"
        + "ITEM 1A. Risk Factors\n\n"
        + words(body_words) + "\n\n"
        + "ITEM 1B. Unresolved Staff Comments\n\nNone"
    )


class TestExtractRiskFactors:
    """Test Item 1A extraction."""

    def test_simple_section(self):
        """A lone heading followed by body and Item 1B is accepted."""
        result = SectionExtractor().extract(filing_text())

        item1a = result.risk_factors
        assert item1a.found is True
        assert item1a.word_count >= 200
        assert item1a.likely_toc is False
        assert result.likely_toc is False
        assert item1a.text.startswith("ITEM 1A. Risk Factors The Company")
        assert "Unresolved" not in item1a.text

    def test_whitespace_collapsed(self):
        result = SectionExtractor().extract(filing_text())
        assert "\n" not in result.risk_factors.text
        assert "  " not in result.risk_factors.text

    def test_word_count_matches_text(self):
        item1a = SectionExtractor().extract(filing_text(300)).risk_factors
        assert item1a.word_count == count_words(item1a.text)
        # "ITEM 1A. Risk Factors" + "The Company faces substantial uncertainty" + body
        assert item1a.word_count == 4 + 5 + 300

    def test_toc_entry_skipped(self):
        """The TOC hit is passed over and the body section is returned."""
        text = toc_then_body()
        body_start = text.index("ITEM 1A. Risk Factors\n\n" + "exposure")
        assert body_start > len(text) // 8

        result = SectionExtractor().extract(text)

        item1a = result.risk_factors
        assert item1a.found is True
        assert item1a.likely_toc is True
        assert result.likely_toc is True
        assert item1a.word_count == 4 + 600
        assert "business" not in item1a.text

    def test_part_ii_ends_section(self):
        text = "Item 1A Risk Factors " + words(300) + " PART II Item 5 Market"
        item1a = SectionExtractor().extract(text).risk_factors
        assert item1a.found is True
        assert "PART" not in item1a.text

    def test_no_heading(self):
        item1a = SectionExtractor().extract("Annual report " + words(500)).risk_factors
        assert item1a.found is False
        assert item1a.word_count == 0

    def test_no_end_boundary(self):
        item1a = SectionExtractor().extract("Item 1A. Risk Factors " + words(500)).risk_factors
        assert item1a.found is False

    def test_empty_text(self):
        result = SectionExtractor().extract("", want_secondary=True)
        assert result.risk_factors.found is False
        assert result.mdna is not None
        assert result.mdna.found is False

    def test_short_span_falls_back_to_last_candidate(self):
        """When no candidate clears the minimum span, the last start is used."""
        text = "Item 1A. Risk Factors " + words(20) + " Item 1B. Unresolved"
        item1a = SectionExtractor().extract(text).risk_factors
        assert item1a.found is True
        assert item1a.word_count == 4 + 20

    def test_all_candidates_toc_falls_back_to_last(self):
        """Dot leaders flag every heading; the last one is still extracted."""
        def dotted(name):
            return "Item 1A. Risk Factors " + name + " " + words(100) + " " + "." * 400 + " Item 1B. Unresolved "

        text = words(6000, "lorem") + " " + dotted("alpha") + words(600, "lorem") + " " + dotted("omega") + "end"
        item1a = SectionExtractor().extract(text).risk_factors

        assert item1a.found is True
        assert item1a.likely_toc is True
        assert item1a.text.startswith("Item 1A. Risk Factors omega")
        assert "alpha" not in item1a.text

    def test_fallback_without_end_is_not_found(self):
        """The earlier candidate has an end but is TOC-flagged; the last has none."""
        text = (
            words(6000, "lorem")
            + " Item 1A. Risk Factors alpha " + words(100) + " " + "." * 400 + " Item 1B. Unresolved "
            + words(600, "lorem")
            + " Item 1A. Risk Factors omega " + words(300)
        )
        item1a = SectionExtractor().extract(text).risk_factors

        assert item1a.found is False
        assert item1a.likely_toc is True
        assert item1a.word_count == 0

    def test_method_version(self):
        assert SectionExtractor().extract(filing_text()).method_version == "v1"


class TestExtractMdna:
    """Test optional Item 7 extraction."""

    def mdna_text(self) -> str:
        return (
            filing_text() + "\n\n"
            "ITEM 7. Management's Discussion and Analysis of Financial Condition\n\n"
            + words(300, "revenue") + "\n\n"
            "ITEM 7A. Quantitative and Qualitative Disclosures About Market Risk\n\n"
            + words(50, "rates")
        )

    def test_not_extracted_by_default(self):
        assert SectionExtractor().extract(self.mdna_text()).mdna is None

    def test_extracted_when_requested(self):
        result = SectionExtractor().extract(self.mdna_text(), want_secondary=True)
        assert result.risk_factors.found is True
        assert result.mdna.found is True
        assert "revenue" in result.mdna.text
        assert "rates" not in result.mdna.text
        assert "exposure" not in result.mdna.text

    def test_missing_mdna(self):
        result = SectionExtractor().extract(filing_text(), want_secondary=True)
        assert result.risk_factors.found is True
        assert result.mdna.found is False


class TestIsLikelyToc:
    """Test TOC heuristics."""

    def test_toc_phrase_near_early_heading(self):
        text = "Table of Contents\n\nItem 1A. Risk Factors 12\n\n" + words(3000)
        index = text.index("Item 1A")
        assert SectionExtractor().is_likely_toc(text, index) is True

    def test_dense_item_headings(self):
        listing = " ".join(f"Item {n}. Heading" for n in range(1, 9))
        text = listing + " " + words(3000)
        index = text.index("Item 1")
        assert SectionExtractor().is_likely_toc(text, index) is True

    def test_dot_leaders_anywhere(self):
        text = words(6000) + " Item 1A. Risk Factors " + "." * 400 + " 12 " + words(100)
        index = text.index("Item 1A")
        assert index > 25_000
        assert SectionExtractor().is_likely_toc(text, index) is True

    def test_body_heading_not_toc(self):
        text = words(6000) + " Item 1A. Risk Factors " + words(600)
        index = text.index("Item 1A")
        assert SectionExtractor().is_likely_toc(text, index) is False

    def test_thresholds_are_tunable(self):
        text = words(6000) + " Item 1A. Risk Factors " + "." * 100 + " " + words(100)
        index = text.index("Item 1A")
        assert SectionExtractor().is_likely_toc(text, index) is False
        strict = SectionExtractor(TocHeuristics(dot_threshold=50))
        assert strict.is_likely_toc(text, index) is True


class TestPatterns:
    """Test heading patterns."""

    def test_item_1a_variants(self):
        for heading in ("ITEM 1A. RISK FACTORS", "Item 1A: Risk Factors", "Item1A", "item 1a — risk factors"):
            assert ITEM_1A.start.search(heading), heading

    def test_item_1a_does_not_match_item_11(self):
        assert ITEM_1A.start.search("Item 11. Executive Compensation") is None
