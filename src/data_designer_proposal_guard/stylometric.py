"""Statistical text measures: sentence-length spread and vocabulary diversity.

Both measures report ``None`` statistics when the text is too short to say
anything, and are never flagged in that case.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from data_designer_proposal_guard.hyperparameters import DEFAULT_HYPERPARAMETERS, Hyperparameters

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_NON_WORD_RE = re.compile(r"[^\w\s]")


@dataclass(frozen=True)
class SentenceVariance:
    sentence_count: int
    mean_length: float | None = None
    std_dev: float | None = None
    flagged: bool = False
    reason: str | None = None

    @property
    def insufficient(self) -> bool:
        return self.std_dev is None

    def to_payload(self) -> dict[str, object]:
        return {
            "sentence_count": self.sentence_count,
            "mean_length": self.mean_length,
            "std_dev": self.std_dev,
            "flagged": self.flagged,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class TypeTokenRatio:
    word_count: int
    ttr: float | None = None
    flagged: bool = False
    reason: str | None = None

    @property
    def insufficient(self) -> bool:
        return self.ttr is None

    def to_payload(self) -> dict[str, object]:
        return {
            "ttr": self.ttr,
            "word_count": self.word_count,
            "flagged": self.flagged,
            "reason": self.reason,
        }


def split_sentences(text: str) -> list[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def tokenize(text: str) -> list[str]:
    return _NON_WORD_RE.sub("", text.lower()).split()


def analyze_sentence_variance(text: str, hyperparameters: Hyperparameters | None = None) -> SentenceVariance:
    """Population standard deviation of words per sentence.

    Uniform sentence length is a machine-writing tell, so a spread below
    ``variance_std_dev_threshold`` raises the flag.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    sentences = split_sentences(text)
    if len(sentences) < hp.variance_min_sentences:
        return SentenceVariance(sentence_count=len(sentences), reason="Too few sentences")

    lengths = [len(s.split()) for s in sentences]
    mean = sum(lengths) / len(lengths)
    std_dev = math.sqrt(sum((n - mean) ** 2 for n in lengths) / len(lengths))
    flagged = std_dev < hp.variance_std_dev_threshold
    return SentenceVariance(
        sentence_count=len(sentences),
        mean_length=round(mean, 1),
        std_dev=round(std_dev, 1),
        flagged=flagged,
        reason=f"Low sentence variance (σ={std_dev:.1f}, target >{hp.variance_std_dev_threshold:g})" if flagged else None,
    )


def analyze_type_token_ratio(text: str, hyperparameters: Hyperparameters | None = None) -> TypeTokenRatio:
    """Unique/total word ratio averaged over fixed, non-overlapping windows.

    A trailing partial window is ignored. Texts with no full window fall back
    to a single ratio over every token.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    words = tokenize(text)
    if len(words) < hp.ttr_min_words:
        return TypeTokenRatio(word_count=len(words), reason="Too few words")

    size = hp.ttr_window_size
    ratios = [len(set(words[i : i + size])) / size for i in range(0, len(words) - size + 1, size)]
    ttr = sum(ratios) / len(ratios) if ratios else len(set(words)) / len(words)

    flagged = ttr < hp.ttr_threshold
    return TypeTokenRatio(
        word_count=len(words),
        ttr=round(ttr, 2),
        flagged=flagged,
        reason=f"Low vocabulary diversity (TTR={ttr:.2f}, target >{hp.ttr_threshold:g})" if flagged else None,
    )
