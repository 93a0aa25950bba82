"""
Tests for signal extraction and industry classification.
"""

import pytest
from pipelines.matching.signals import extract_signals, material_keys
from pipelines.matching.industry import (
    GENERAL,
    INDUSTRY_KEYWORDS,
    industry_keywords,
    infer_industry,
    resolve_industry,
)


class TestExtractSignals:
    """Test material/process tag extraction."""

    def test_empty_text(self):
        """Empty or missing text yields no signals."""
        assert extract_signals("") == []
        assert extract_signals(None) == []

    def test_arabic_text(self):
        """Arabic stems are found inside prefixed words."""
        signals = extract_signals("نحتاج تصنيع قطع من الألمنيوم بالحقن")
        assert signals == ["material:aluminum", "process:injection_molding"]

    def test_english_text(self):
        """Materials come before processes, each in vocabulary order."""
        signals = extract_signals("CNC machined steel brackets with welding and assembly")
        assert signals == ["material:steel", "process:cnc", "process:welding", "process:assembly"]

    def test_each_key_once(self):
        """Several synonyms of one key emit a single tag."""
        assert extract_signals("plastic polymer PLASTIC بلاستيك") == ["material:plastic"]

    def test_case_insensitive(self):
        assert extract_signals("ALUMINUM Injection") == ["material:aluminum", "process:injection_molding"]

    def test_no_match(self):
        assert extract_signals("a consulting firm") == []

    def test_no_match_inside_common_words(self):
        assert extract_signals("an environmental sensor") == []

    def test_material_keys(self):
        assert material_keys(["material:wood", "process:printing", "material:steel"]) == ["wood", "steel"]


class TestInferIndustry:
    """Test keyword-vote industry classification."""

    def test_empty_text_is_general(self):
        assert infer_industry("") == GENERAL
        assert infer_industry(None) == GENERAL

    def test_no_keywords_is_general(self):
        """Zero matching keywords must fall back to general."""
        assert infer_industry("a smart bookmark for readers") == "general"

    def test_general_declared_first(self):
        assert list(INDUSTRY_KEYWORDS)[0] == GENERAL
        assert industry_keywords(GENERAL) == []

    def test_single_industry(self):
        assert infer_industry("نحتاج تصنيع قطع من الألمنيوم بالحقن") == "metal"

    def test_highest_count_wins(self):
        """metal scores 2 (steel, cast iron) against machinery's 1."""
        assert infer_industry("steel and cast iron machinery") == "metal"

    def test_keywords_inside_common_words_ignored(self):
        assert infer_industry("an environmental sensor") == GENERAL
        assert infer_industry("metal fabrication shop") == "metal"

    def test_tie_goes_to_first_declared_arabic(self):
        """'معدات كهربائية' hits electronics and machinery once each."""
        assert infer_industry("معدات كهربائية") == "electronics"

    def test_tie_goes_to_first_declared_english(self):
        """food is declared before machinery."""
        assert infer_industry("machinery for food processing") == "food"

    def test_unknown_industry_keywords(self):
        assert industry_keywords("space") == []


class TestResolveIndustry:
    """Test declared-vs-inferred industry selection."""

    def test_declared_known_industry(self):
        assert resolve_industry("Textile", "steel frames") == "textile"

    def test_declared_unknown_industry_infers(self):
        assert resolve_industry("gadgets", "plastic housing") == "plastic"

    @pytest.mark.parametrize("declared", [None, "", "   "])
    def test_missing_declared_infers(self, declared):
        assert resolve_industry(declared, "fish farming tanks") == "aquaculture"
