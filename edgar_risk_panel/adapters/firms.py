"""
Firm list loading

Reads the firm universe from a CSV with a "cik" column and optional
"ticker" and "name" columns.
"""
import logging
from pathlib import Path

import pandas as pd

from ..core.domain import Firm

logger = logging.getLogger(__name__)


def load_firms(path: str | Path) -> list[Firm]:
    """Load firms from CSV; duplicate CIKs keep their first row"""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Firm list not found: {path}")

    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    frame.columns = [c.strip().lower() for c in frame.columns]
    if "cik" not in frame.columns:
        raise ValueError(f"Firm list {path} has no 'cik' column")

    firms = []
    seen = set()
    for record in frame.to_dict("records"):
        raw = record["cik"].strip()
        if not raw:
            continue
        firm = Firm.from_cik(raw, ticker=record.get("ticker", "").strip(), name=record.get("name", "").strip())
        if firm.cik in seen:
            continue
        seen.add(firm.cik)
        firms.append(firm)

    logger.info(f"Loaded {len(firms)} firm(s) from {path}")
    return firms


def firms_from_ciks(ciks: list[str]) -> list[Firm]:
    return [Firm.from_cik(cik) for cik in ciks]
