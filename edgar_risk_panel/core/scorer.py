"""
Dictionary-based text measures

Counts risk, negative and uncertainty words (Loughran-McDonald style lists)
in a section of text. Word lists live in the dictionary directory:

- risk.txt
- negative.txt
- uncertainty.txt

One word per line, case-insensitive, "#" starts a comment line.
"""
import logging
import re
from pathlib import Path
from typing import Iterator

from .domain import Lexicon, ScoreResult
from .errors import LexiconError

logger = logging.getLogger(__name__)

TOKEN = re.compile(r"[A-Za-z]+")
NON_LETTER = re.compile(r"[^A-Z]")

LEXICON_FILES = {
    "risk": "risk.txt",
    "negative": "negative.txt",
    "uncertainty": "uncertainty.txt",
}


def load_word_set(path: str | Path) -> frozenset[str]:
    """
    Read one word list.

    Entries are uppercased and reduced to A-Z, so "Write-down" is stored as
    "WRITEDOWN" and multi-word entries collapse into one token.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    words = set()
    with path.open(encoding="utf-8") as fh:
        for line in fh:
            word = line.strip()
            if not word or word.startswith("#"):
                continue
            word = NON_LETTER.sub("", word.upper())
            if word:
                words.add(word)
    return frozenset(words)


def load_lexicon(dict_dir: str | Path) -> Lexicon:
    """Load all three word lists; an empty list is a startup error"""
    if not str(dict_dir).strip():
        raise LexiconError("Dictionary directory is required")
    dict_dir = Path(dict_dir)

    sets = {}
    for category, filename in LEXICON_FILES.items():
        path = dict_dir / filename
        words = load_word_set(path)
        if not words:
            raise LexiconError(f"{filename} loaded 0 words (check {path})")
        sets[category] = words
        logger.info(f"Loaded {len(words)} {category} words from {path}")

    return Lexicon(**sets)


def tokenize(text: str) -> Iterator[str]:
    """Uppercase alphabetic tokens; digits and punctuation split words"""
    for match in TOKEN.finditer(text):
        yield match.group(0).upper()


def _freq(count: int, total: int) -> float:
    return count / total if total > 0 else 0.0


class LexiconScorer:
    """Scores text against a loaded Lexicon"""

    def __init__(self, lexicon: Lexicon):
        self.lexicon = lexicon

    def score(self, text: str) -> ScoreResult:
        if not text or text.isspace():
            return ScoreResult()

        total = risk = negative = uncertainty = 0
        for token in tokenize(text):
            total += 1
            # Categories overlap, so each list is checked on its own
            if token in self.lexicon.risk:
                risk += 1
            if token in self.lexicon.negative:
                negative += 1
            if token in self.lexicon.uncertainty:
                uncertainty += 1

        return ScoreResult(
            total_words=total,
            risk_count=risk,
            risk_freq=_freq(risk, total),
            negative_count=negative,
            negative_freq=_freq(negative, total),
            uncertainty_count=uncertainty,
            uncertainty_freq=_freq(uncertainty, total),
        )
