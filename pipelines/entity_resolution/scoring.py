"""
Scoring Logic for Entity Resolution.

Responsibilities:
- Compute a deterministic duplicate score between two factories.
- Emit the reason for the score.

Non-Responsibilities:
- No database access.
- No candidate selection.
- No threshold decisions.

Invariant:
Rules are evaluated in priority order and the first rule that fires
decides the score. Differing phones on both records do not stop the
name rule: a same-city pair with phones that disagree can still match
by name.
"""

from dataclasses import dataclass
from typing import Optional

from factorymatch.models import FactoryRecord

from .features import same_city, same_email, same_phone, similarity

EMAIL_SCORE = 100
PHONE_SCORE = 95
NAME_SIMILARITY_MIN = 85


@dataclass(frozen=True)
class PairScore:
    score: int
    reason: str


def _email_rule(a: FactoryRecord, b: FactoryRecord) -> Optional[PairScore]:
    if same_email(a.email, b.email):
        return PairScore(EMAIL_SCORE, "identical email")
    return None


def _phone_rule(a: FactoryRecord, b: FactoryRecord) -> Optional[PairScore]:
    if same_phone(a.phone, b.phone):
        return PairScore(PHONE_SCORE, "identical phone")
    return None


def _name_city_rule(a: FactoryRecord, b: FactoryRecord) -> Optional[PairScore]:
    if not (a.name and b.name and same_city(a.city, b.city)):
        return None
    name_similarity = similarity(a.name, b.name)
    if name_similarity > NAME_SIMILARITY_MIN:
        return PairScore(name_similarity, f"similar name ({name_similarity}%) in the same city")
    return None


RULES = (_email_rule, _phone_rule, _name_city_rule)


def score_pair(a: FactoryRecord, b: FactoryRecord) -> Optional[PairScore]:
    """
    Score two factories as potential duplicates.

    Returns:
        PairScore from the first rule that fires, or None
    """
    for rule in RULES:
        result = rule(a, b)
        if result is not None:
            return result
    return None
