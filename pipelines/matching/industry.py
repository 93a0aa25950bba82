"""
Industry Classification.

Responsibilities:
- Infer one canonical industry key from free text by keyword voting.

Non-Responsibilities:
- No scoring.

Invariant:
Ties go to the industry declared first. "general" is declared first with no
keywords, so text matching nothing always classifies as "general".
"""

from typing import Dict, List, Optional

GENERAL = "general"

# Declaration order is significant: it breaks ties.
INDUSTRY_KEYWORDS: Dict[str, List[str]] = {
    GENERAL: [],
    "electronics": ["كهرباء", "إلكترونيات", "معدات كهربائية", "electronic", "electrical"],
    "plastic": ["بلاستيك", "مطاط", "لدائن", "بوليمر", "plastic", "rubber", "polymer"],
    "metal": ["معادن", "حديد", "صلب", "ألمنيوم", "metal", "steel", "cast iron", "aluminum"],
    "textile": ["منسوجات", "قماش", "ملابس", "textile", "fabrics", "garment"],
    "food": ["غذائية", "أغذية", "مشروبات", "food", "beverage"],
    "machinery": ["آلات", "معدات", "ميكانيكا", "machinery", "equipment"],
    "automotive": ["سيارات", "مركبات", "automotive", "vehicle"],
    "aquaculture": ["استزراع", "مائي", "أسماك", "aquaculture", "fish"],
}


def industry_keywords(industry: str) -> List[str]:
    return INDUSTRY_KEYWORDS.get(industry, [])


def infer_industry(text: Optional[str]) -> str:
    """
    Return the industry whose keywords occur most often in the text.

    Each keyword variant counts once if it is a substring of the
    lower-cased text. Only a strictly higher count replaces the current
    best, so earlier industries win ties.
    """
    low = (text or "").lower()
    best, best_count = GENERAL, 0
    for industry, keywords in INDUSTRY_KEYWORDS.items():
        count = sum(1 for k in keywords if k in low)
        if count > best_count:
            best, best_count = industry, count
    return best


def resolve_industry(declared: Optional[str], text: Optional[str]) -> str:
    """Use a declared industry when it is a known key, else infer it."""
    key = (declared or "").strip().lower()
    if key in INDUSTRY_KEYWORDS:
        return key
    return infer_industry(text)
