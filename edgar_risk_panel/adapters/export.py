"""
CSV Export Adapter

Writes panel rows as a ';'-delimited CSV for regression workflows.
"""
import logging
from pathlib import Path

import pandas as pd

from ..core.domain import PanelRow

logger = logging.getLogger(__name__)

DELIMITER = ";"

COLUMNS = [
    "cik",
    "ticker",
    "year",
    "filing_date",
    "accession_number",
    "item1a_word_count",
    "risk_count",
    "risk_freq",
    "negative_count",
    "negative_freq",
    "uncertainty_count",
    "uncertainty_freq",
    "llm_risk_score",
]


def rows_to_frame(rows: list[PanelRow]) -> pd.DataFrame:
    """Panel rows → DataFrame with the export column order"""
    records = [
        {
            "cik": r.cik,
            "ticker": r.ticker,
            "year": r.year,
            "filing_date": r.filing_date.isoformat(),
            "accession_number": r.accession_number,
            "item1a_word_count": r.item1a_word_count,
            "risk_count": r.risk_count,
            "risk_freq": r.risk_freq,
            "negative_count": r.negative_count,
            "negative_freq": r.negative_freq,
            "uncertainty_count": r.uncertainty_count,
            "uncertainty_freq": r.uncertainty_freq,
            "llm_risk_score": r.llm_risk_score,
        }
        for r in rows
    ]
    return pd.DataFrame.from_records(records, columns=COLUMNS)


def write_panel_csv(rows: list[PanelRow], output_path: str | Path, overwrite: bool = True) -> Path | None:
    """
    Write rows to output_path.

    Nothing is written for an empty row set. With overwrite=False rows are
    appended and the header is only written to a new file.
    """
    if not rows:
        logger.info("No panel rows to export")
        return None

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    write_header = overwrite or not output_path.exists()
    frame = rows_to_frame(rows)
    frame.to_csv(
        output_path,
        sep=DELIMITER,
        index=False,
        header=write_header,
        mode="w" if overwrite else "a",
        encoding="utf-8",
    )
    logger.info(f"Wrote {len(frame)} row(s) to {output_path}")
    return output_path
