"""
Match Scoring.

Responsibilities:
- Compute a weighted compatibility score for one (invention, factory) pair.
- Emit the evidence behind the score, in the order it was found.
- Rescore under alternate weight profiles to derive a stability index.

Non-Responsibilities:
- No database access.
- No filtering or ranking.
- No clamping (the ranking pipeline clamps to 100).

Invariant:
Given identical inputs, this module must always return
the same score and reasons.
"""

from dataclasses import dataclass
from typing import List, Tuple

from factorymatch.models import DEFAULT_WEIGHTS, FactoryRecord, InventionQuery, ScoreResult, Weights

from .industry import industry_keywords, resolve_industry
from .signals import extract_signals

KEYWORD_POINTS = 15
STABILITY_TOLERANCE = 20

ALTERNATE_WEIGHTS: Tuple[Weights, ...] = (
    Weights(industry=50, keywords=30, type=10, country=10),
    Weights(industry=20, keywords=60, type=10, country=10),
)

REASON_INDUSTRY = "industry sector match"
REASON_KEYWORDS = "keyword overlap"
REASON_SCALE = "production-scale fit"
REASON_COUNTRY = "preferred geography"


@dataclass(frozen=True)
class InventionProfile:
    """What the scorer needs from an invention, derived once per ranking call."""

    industry: str
    keywords: Tuple[str, ...]
    signals: Tuple[str, ...]

    @classmethod
    def from_invention(cls, invention: InventionQuery) -> "InventionProfile":
        industry = resolve_industry(invention.industry, invention.text)
        return cls(
            industry=industry,
            keywords=tuple(industry_keywords(industry)),
            signals=tuple(extract_signals(invention.text)),
        )


def _contains_either_way(a: str, b: str) -> bool:
    if not a or not b:
        return False
    a, b = a.lower(), b.lower()
    return a in b or b in a


def factory_metadata(factory: FactoryRecord) -> str:
    parts = [factory.capabilities, factory.notes, factory.name, " ".join(factory.industries)]
    return " ".join(parts).lower()


class MatchScorer:
    """Scores factories against a single invention."""

    def __init__(self, invention: InventionQuery):
        self.invention = invention
        self.profile = InventionProfile.from_invention(invention)

    def score(self, factory: FactoryRecord, weights: Weights = DEFAULT_WEIGHTS) -> ScoreResult:
        score = 0
        reasons: List[str] = []
        profile = self.profile

        # Industry
        industry_hit = any(
            any(k in label for k in profile.keywords) or profile.industry in label
            for label in (ind.lower() for ind in factory.industries)
        )
        if industry_hit:
            score += weights.industry
            reasons.append(REASON_INDUSTRY)

        # Keywords: shared signals plus raw industry keywords, counted
        # additively even when both sources saw the same term.
        metadata = factory_metadata(factory)
        factory_signals = set(extract_signals(metadata))
        common = [s for s in profile.signals if s in factory_signals]
        extra = [k for k in profile.keywords if k in metadata]
        match_count = len(common) + len(extra)
        if match_count > 0:
            score += min(weights.keywords, match_count * KEYWORD_POINTS)
            if common:
                reasons.append(f"technical fit ({', '.join(common)})")
            else:
                reasons.append(REASON_KEYWORDS)

        # Scale / production type
        if _contains_either_way(factory.scale, self.invention.type):
            score += weights.type
            reasons.append(REASON_SCALE)

        # Geography
        if _contains_either_way(factory.country, self.invention.country):
            score += weights.country
            reasons.append(REASON_COUNTRY)

        return ScoreResult(score=score, reasons=reasons)

    def stability_index(self, factory: FactoryRecord, base_score: int) -> float:
        """
        Fraction of alternate weight profiles under which the factory's score
        stays within STABILITY_TOLERANCE points of base_score.
        """
        stable = sum(
            1
            for weights in ALTERNATE_WEIGHTS
            if abs(self.score(factory, weights).score - base_score) < STABILITY_TOLERANCE
        )
        return stable / len(ALTERNATE_WEIGHTS)


def score(factory: FactoryRecord, invention: InventionQuery, weights: Weights = DEFAULT_WEIGHTS) -> ScoreResult:
    """Score one pair without reusing a derived invention profile."""
    return MatchScorer(invention).score(factory, weights)
