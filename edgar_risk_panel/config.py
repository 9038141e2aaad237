"""
Configuration

Everything is read from the environment with sensible defaults; the CLI can
override individual values. Paths default to a data/ directory relative to
the working directory.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path

from .core.extractor import TocHeuristics

DEFAULT_USER_AGENT = ""  # SEC.gov wants "Name contact@example.com"; no anonymous default


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, str(default))
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid {name} value: {value}") from None


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name, str(default))
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid {name} value: {value}") from None


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_data_dir() -> Path:
    """Get data root from env or use fallback"""
    return Path(os.environ.get("EDGAR_DATA_DIR", "data"))


def get_user_agent() -> str:
    """Get user agent from env"""
    return os.environ.get("EDGAR_USER_AGENT", DEFAULT_USER_AGENT)


@dataclass
class Settings:
    data_dir: Path
    raw_dir: Path
    dict_dir: Path
    output_dir: Path

    # Sample period
    start_year: int = 2010
    end_year: int = 2023

    # SEC / EDGAR
    user_agent: str = DEFAULT_USER_AGENT
    min_interval_seconds: float = 0.2
    timeout_seconds: float = 60.0
    max_concurrency: int = 4

    # Extraction
    extract_mdna: bool = False
    include_amendments: bool = False
    overwrite_raw: bool = False
    min_risk_words: int = 200
    toc: TocHeuristics = field(default_factory=TocHeuristics)

    llm_stub: bool = False

    def ensure_directories(self) -> None:
        for path in (self.data_dir, self.raw_dir, self.dict_dir, self.output_dir):
            path.mkdir(parents=True, exist_ok=True)


def load_settings() -> Settings:
    data_dir = get_data_dir()
    settings = Settings(
        data_dir=data_dir,
        raw_dir=Path(os.environ.get("EDGAR_RAW_DIR", data_dir / "raw")),
        dict_dir=Path(os.environ.get("EDGAR_DICT_DIR", data_dir / "dictionaries")),
        output_dir=Path(os.environ.get("EDGAR_OUTPUT_DIR", data_dir / "output")),
        start_year=_env_int("EDGAR_START_YEAR", 2010),
        end_year=_env_int("EDGAR_END_YEAR", 2023),
        user_agent=get_user_agent(),
        min_interval_seconds=_env_float("EDGAR_MIN_INTERVAL", 0.2),
        timeout_seconds=_env_float("EDGAR_TIMEOUT", 60.0),
        max_concurrency=_env_int("EDGAR_MAX_CONCURRENCY", 4),
        extract_mdna=_env_bool("EDGAR_EXTRACT_MDNA"),
        include_amendments=_env_bool("EDGAR_INCLUDE_AMENDMENTS"),
        overwrite_raw=_env_bool("EDGAR_OVERWRITE_RAW"),
        min_risk_words=_env_int("EDGAR_MIN_RISK_WORDS", 200),
        toc=TocHeuristics(
            heading_density=_env_int("EDGAR_TOC_HEADING_DENSITY", 6),
            dot_threshold=_env_int("EDGAR_TOC_DOT_THRESHOLD", 300),
        ),
        llm_stub=_env_bool("EDGAR_LLM_STUB"),
    )
    if settings.start_year > settings.end_year:
        raise ValueError(f"EDGAR_START_YEAR ({settings.start_year}) is after EDGAR_END_YEAR ({settings.end_year})")
    return settings
