"""
BBG Lite formatters for handler results

Format handler results as Bloomberg Terminal-inspired text output.
Used by both CLI and MCP adapters for consistent presentation.
"""

from typing import Any

RULE = "─" * 70


def _error(result: dict[str, Any]) -> str:
    return f"ERROR: {result.get('error', 'Unknown error')}"


def format_list_filings(result: dict[str, Any]) -> str:
    """Format list_filings result as BBG Lite text.

    Example output:
        CIK 0000320193 10-K FILINGS | 2021-2023

        FILED        ACCESSION               DOCUMENT
        ──────────────────────────────────────────────────────────────────────
        2021-10-29   0000320193-21-000105    aapl-20210925.htm
        2022-10-28   0000320193-22-000108    aapl-20220924.htm
        2023-11-03   0000320193-23-000106    aapl-20230930.htm

        3 filing(s), one per year
    """
    if not result.get("success"):
        return _error(result)

    lines = [f"CIK {result['cik']} 10-K FILINGS | {result['start_year']}-{result['end_year']}", ""]

    if not result['filings']:
        lines.append("NO FILINGS IN RANGE")
        return "\n".join(lines)

    lines.append(f"{'FILED':<12} {'ACCESSION':<23} DOCUMENT")
    lines.append(RULE)
    for f in result['filings']:
        form = "" if f['form_type'].upper() == "10-K" else f"  ({f['form_type']})"
        lines.append(f"{f['filing_date']:<12} {f['accession_number']:<23} {f['primary_document']}{form}")
    lines.append("")
    lines.append(f"{result['count']} filing(s), one per year")
    return "\n".join(lines)


def format_fetch_document(result: dict[str, Any]) -> str:
    """Format fetch_document result as BBG Lite text.

    Example output:
        CIK 0000320193 10-K | 2023-11-03 | FETCHED (cached)

        ACCESSION:   0000320193-23-000106
        DOCUMENT:    aapl-20230930.htm
        SIZE:        1,482 KB

        PATH: data/raw/0000320193/000032019323000106/aapl-20230930.htm
    """
    if not result.get("success"):
        return _error(result)

    filing = result['filing']
    cached_indicator = "(cached)" if result.get('cached') else "(downloaded)"
    size_kb = result['size_bytes'] / 1024

    lines = [
        f"CIK {filing['cik']} {filing['form_type'].upper()} | {filing['filing_date']} | FETCHED {cached_indicator}",
        "",
        f"ACCESSION:   {filing['accession_number']}",
        f"DOCUMENT:    {filing['primary_document']}",
        f"SIZE:        {size_kb:,.0f} KB",
        "",
        f"PATH: {result['path']}",
    ]
    return "\n".join(lines)


def format_extract_sections(result: dict[str, Any]) -> str:
    """Format extract_sections result as BBG Lite text."""
    if not result.get("success"):
        return _error(result)

    filing = result['filing']
    lines = [
        f"CIK {filing['cik']} {filing['form_type'].upper()} | {filing['filing_date']} | SECTIONS ({result['method_version']})",
        "",
    ]

    for label, key in (("ITEM 1A  RISK FACTORS", "item1a"), ("ITEM 7   MD&A", "item7")):
        section = result.get(key)
        if section is None:
            continue
        status = f"{section['word_count']:,} words" if section['found'] else "NOT FOUND"
        toc = "  [TOC hit]" if section['likely_toc'] else ""
        lines.append(f"{label:<24} {status}{toc}")
        if section['found'] and section['preview']:
            lines.append(RULE)
            lines.append(f"  {section['preview']} ...")
        lines.append("")

    lines.append(f"PATH: {result['path']}")
    return "\n".join(lines)


def format_score_filing(result: dict[str, Any]) -> str:
    """Format score_filing result as BBG Lite text.

    Example output:
        CIK 0000320193 10-K | 2023-11-03 | SCORED

        ITEM 1A WORDS:  14,322
        CATEGORY        COUNT      FREQ
        ──────────────────────────────────────────────────────────────────────
        risk              512   0.035749
        negative          388   0.027091
        uncertainty       297   0.020737
    """
    if not result.get("success"):
        return _error(result)

    filing = result['filing']
    header = f"CIK {filing['cik']} {filing['form_type'].upper()} | {filing['filing_date']}"
    if not result['retained']:
        return f"{header} | EXCLUDED\n\n{result['reason']}"

    row = result['row']
    lines = [
        f"{header} | SCORED",
        "",
        f"ITEM 1A WORDS:  {row['item1a_word_count']:,}",
        f"{'CATEGORY':<14} {'COUNT':>7} {'FREQ':>9}",
        RULE,
    ]
    for category in ("risk", "negative", "uncertainty"):
        lines.append(f"{category:<14} {row[f'{category}_count']:>7,} {row[f'{category}_freq']:>9.6f}")
    if row.get('llm_risk_score') is not None:
        lines.append(f"{'llm (stub)':<14} {'':>7} {row['llm_risk_score']:>9.2f}")
    return "\n".join(lines)


def format_build_panel(result: dict[str, Any]) -> str:
    """Format build_panel result as BBG Lite text."""
    if not result.get("success"):
        return _error(result)

    lines = [
        f"RISK PANEL | {result['start_year']}-{result['end_year']} | {result['firms']} firm(s)",
        "",
        f"ROWS:        {result['rows']:,}",
        f"EXCLUDED:    {result['skipped']:,}",
        f"FAILURES:    {len(result['failures']):,}",
    ]
    if result['failures']:
        lines.append(RULE)
        for f in result['failures']:
            lines.append(f"  {f['cik']} {f['accession_number'] or '(index)'}: {f['error']}")
    lines.append("")
    lines.append(f"OUTPUT: {result['output_path'] or '(nothing written)'}")
    return "\n".join(lines)
