"""
Ranking Pipeline.

Responsibilities:
- Fetch the approved roster once.
- Score every factory, apply tiered filtering, sort and truncate.

Non-Responsibilities:
- No persistence of results (the host stores the invention and its matches).
- No retries: a failed fetch propagates to the caller.

Invariant:
A non-empty approved roster never produces an empty result.
"""

from typing import Any, Callable, Dict, Iterable, List, Tuple

from factorymatch.logger import get_logger
from factorymatch.models import FactoryRecord, InventionQuery, MatchResult

from .scorer import MatchScorer
from .signals import extract_signals, material_keys

logger = get_logger()

MAX_RESULTS = 5
STRICT_MIN_SCORE = 15
FALLBACK_SIZE = 3
FALLBACK_SCORE = 5
MAX_SCORE = 100

GENERAL_FIT_EXPLANATION = "This factory was suggested for its general fit with your requirements."
FALLBACK_EXPLANATION = (
    "No close match was found; this factory is offered as an alternative option "
    "that may be able to serve your project."
)

Tier = Tuple[str, Callable[[List[MatchResult]], List[MatchResult]]]


def _strict(scored: List[MatchResult]) -> List[MatchResult]:
    return [r for r in scored if r.match_score >= STRICT_MIN_SCORE]


def _lenient(scored: List[MatchResult]) -> List[MatchResult]:
    return [r for r in scored if r.match_score > 0]


def _fallback(scored: List[MatchResult]) -> List[MatchResult]:
    # sorted() is stable, so equal stability keeps roster order
    picked = sorted(scored, key=lambda r: r.stability_index, reverse=True)[:FALLBACK_SIZE]
    for r in picked:
        r.match_score = FALLBACK_SCORE
        r.explanation = FALLBACK_EXPLANATION
    return picked


# Evaluated in order; the first tier with members wins.
TIERS: Tuple[Tier, ...] = (
    ("strict", _strict),
    ("lenient", _lenient),
    ("fallback", _fallback),
)


def explain(factory: FactoryRecord, reasons: List[str]) -> str:
    if not reasons:
        return GENERAL_FIT_EXPLANATION
    return f"{factory.name or 'This factory'} was selected based on {' and '.join(reasons)}."


def score_roster(scorer: MatchScorer, factories: Iterable[FactoryRecord]) -> List[MatchResult]:
    """Score every factory with default weights, in roster order."""
    results = []
    for factory in factories:
        scored = scorer.score(factory)
        results.append(
            MatchResult(
                factory=factory,
                match_score=min(scored.score, MAX_SCORE),
                match_reasons=scored.reasons,
                explanation=explain(factory, scored.reasons),
                stability_index=scorer.stability_index(factory, scored.score),
            )
        )
    return results


def apply_tiers(scored: List[MatchResult]) -> Tuple[str, List[MatchResult]]:
    """
    Run the tiers in order and return the first non-empty selection.

    Returns:
        Tuple of (tier name, selected results). ("none", []) only when
        scored is empty.
    """
    for name, select in TIERS:
        selected = select(scored)
        if selected:
            return name, selected
    return "none", []


def rank_factories(invention: InventionQuery, rows: Iterable[Dict[str, Any]]) -> List[MatchResult]:
    """
    Rank an already-fetched roster against an invention.

    Args:
        invention: The query to match
        rows: Factory rows in fetch order; rows not approved are ignored

    Returns:
        At most MAX_RESULTS results, highest score first
    """
    factories = [f for f in (FactoryRecord.from_row(row) for row in rows) if f.approved]
    if not factories:
        logger.info("Ranking skipped: approved roster is empty", invention=invention.name)
        return []

    scorer = MatchScorer(invention)
    scored = score_roster(scorer, factories)
    tier, selected = apply_tiers(scored)
    logger.record_ranking(tier)

    ranked = sorted(selected, key=lambda r: r.match_score, reverse=True)[:MAX_RESULTS]
    logger.info(
        "Ranking complete",
        invention=invention.name,
        industry=scorer.profile.industry,
        roster=len(factories),
        tier=tier,
        returned=len(ranked),
    )
    return ranked


def invention_materials(invention: InventionQuery) -> List[str]:
    """Declared materials, or the material signals found in the invention text."""
    if invention.materials:
        return list(invention.materials)
    return material_keys(extract_signals(invention.text))


def find_top_factories(invention: InventionQuery, repository) -> List[MatchResult]:
    """
    Fetch the approved roster and rank it.

    Args:
        invention: The query to match
        repository: Storage collaborator exposing fetch_all(approved=...)
    """
    rows = repository.fetch_all(approved=True)
    return rank_factories(invention, rows)
