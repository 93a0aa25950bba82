"""
Candidate Selection Logic.

Responsibilities:
- Decide cheaply whether a pair of factories is worth comparing.

Non-Responsibilities:
- No scoring.
- No similarity computation.
- No resolution decisions.

Invariant:
Candidate selection must never exclude a pair the scoring rules could
match. It may include pairs that end up not matching.
"""

from factorymatch.models import FactoryRecord

from .features import same_city


def is_candidate_pair(a: FactoryRecord, b: FactoryRecord) -> bool:
    """True when both records carry comparable contact info or share a city."""
    has_contact = bool(a.email and b.email) or bool(a.phone and b.phone)
    return has_contact or same_city(a.city, b.city)
