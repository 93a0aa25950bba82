"""
Feature Extraction for Entity Resolution.

Responsibilities:
- Compare individual fields of two factory records.
- Fuzzy name similarity (normalized edit distance) and exact
  email / phone comparison.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No persistence.

Invariant:
Missing data must never be treated as a match.
"""

import math

from rapidfuzz.distance import Levenshtein

from factorymatch.normalize import normalize_email, normalize_phone

MIN_PHONE_DIGITS = 6


def similarity(a: str, b: str) -> int:
    """
    Similarity of two strings on a 0..100 scale.

    Both strings are trimmed and lower-cased. Identical strings score 100,
    otherwise 1 - distance / longest length, rounded half up.

    Example:
        similarity("abc", "abd") -> 67
    """
    al = (a or "").strip().lower()
    bl = (b or "").strip().lower()
    if al == bl:
        return 100
    distance = Levenshtein.distance(al, bl)
    ratio = 1 - distance / max(len(al), len(bl))
    return int(math.floor(ratio * 100 + 0.5))


def same_email(a: str, b: str) -> bool:
    if not a or not b:
        return False
    ea, eb = normalize_email(a), normalize_email(b)
    return bool(ea) and ea == eb


def same_phone(a: str, b: str) -> bool:
    """Digits-only equality; short numbers are too ambiguous to count."""
    if not a or not b:
        return False
    pa, pb = normalize_phone(a), normalize_phone(b)
    return pa == pb and len(pa) >= MIN_PHONE_DIGITS


def same_city(a: str, b: str) -> bool:
    if not a or not b:
        return False
    ca, cb = a.strip(), b.strip()
    return bool(ca) and ca == cb
