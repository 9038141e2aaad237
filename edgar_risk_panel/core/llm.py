"""
LLM risk scorer (stub)

No provider call is made. The chunking and prompt are fixed so that a real
implementation can drop in without changing how text is split.
"""
import asyncio
import math
from typing import Iterator, Optional

from .domain import LlmScore

PROMPT_TEMPLATE = """You are scoring the severity and forward-looking content of risk disclosures.

Task:
Given the text from ITEM 1A (Risk Factors) of a firm's 10-K, produce a single numeric score.

Requirements:
- Output MUST be valid JSON with keys: score, notes
- score must be a number between 0 and 100
- Consider specificity, severity, and forward-looking nature; handle negation properly.

TEXT:
{text}"""


def chunk_text(text: str, max_chars: int) -> Iterator[str]:
    """
    Split text into chunks of at most max_chars.

    Breaks on whitespace when one is available past 60% of the chunk,
    otherwise splits hard.
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    text = text.strip()
    if len(text) <= max_chars:
        yield text
        return

    i = 0
    while i < len(text):
        end = min(i + max_chars, len(text))
        if end < len(text):
            back = end
            while back > i and not text[back - 1].isspace():
                back -= 1
            if back > i + max_chars * 0.6:
                end = back
        chunk = text[i:end].strip()
        if chunk:
            yield chunk
        i = end


class LlmRiskScorer:
    """Placeholder for a context-aware LLM risk score"""

    def __init__(self, model_name: str = "LLM-TBD", max_chars_per_chunk: int = 12_000):
        self.model_name = model_name
        self.max_chars_per_chunk = max_chars_per_chunk

    def build_prompt(self, chunk: str) -> str:
        return PROMPT_TEMPLATE.format(text=chunk)

    async def score(self, text: str) -> Optional[LlmScore]:
        if not text or text.isspace():
            return None

        chunks = list(chunk_text(text, self.max_chars_per_chunk))
        await asyncio.sleep(0)

        # Length-based placeholder, only useful for wiring the pipeline
        pseudo = min(100.0, math.log10(len(text) + 1) * 25.0)
        return LlmScore(
            score=pseudo,
            model=self.model_name,
            notes=f"STUB score from {len(chunks)} chunk(s). Replace with real LLM scoring.",
        )
