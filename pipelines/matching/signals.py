"""
Signal Extraction.

Responsibilities:
- Detect material and process mentions in free text.
- Emit normalized tags ("material:<key>", "process:<key>").

Non-Responsibilities:
- No scoring.
- No industry inference.

Invariant:
Each key is emitted at most once, in vocabulary declaration order.
"""

from typing import Dict, List, Optional

# Surface forms are matched as lower-cased substrings, so Arabic stems
# also catch prefixed forms ("بالحقن" contains "حقن"). English forms must
# not occur inside common words ("iron" is in "environment").
MATERIALS: Dict[str, List[str]] = {
    "plastic": ["بلاستيك", "بوليمر", "plastic", "بولي", "لدائن"],
    "steel": ["حديد", "صلب", "ستيل", "steel", "cast iron", "معادن"],
    "aluminum": ["ألمنيوم", "ألومنيوم", "aluminum", "aluminium"],
    "wood": ["خشب", "wood", "نجارة"],
    "textile": ["قماش", "نسيج", "textile", "ملابس"],
    "electrical": ["كهرباء", "electrical", "إلكترونيات", "electronics", "سلك", "كابل"],
}

PROCESSES: Dict[str, List[str]] = {
    "cnc": ["cnc", "سي ان سي", "خرط", "فريزة"],
    "injection_molding": ["حقن", "قوالب", "injection"],
    "welding": ["لحام", "welding"],
    "assembly": ["تجميع", "تركيب", "assembly"],
    "printing": ["طباعة", "printing", "ثلاثية"],
}


def _scan(text: str, prefix: str, vocabulary: Dict[str, List[str]]) -> List[str]:
    return [
        f"{prefix}:{key}"
        for key, variants in vocabulary.items()
        if any(v in text for v in variants)
    ]


def extract_signals(text: Optional[str]) -> List[str]:
    """
    Extract material and process tags from free text.

    Args:
        text: Arbitrary text, may be empty or None

    Returns:
        Material tags followed by process tags, e.g.
        ["material:aluminum", "process:injection_molding"]
    """
    if not text:
        return []
    low = text.lower()
    return _scan(low, "material", MATERIALS) + _scan(low, "process", PROCESSES)


def material_keys(signals: List[str]) -> List[str]:
    """Return the material keys from a list of tags."""
    return [s.split(":", 1)[1] for s in signals if s.startswith("material:")]
