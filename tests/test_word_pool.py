"""Tests for word_pool.py and clue_templates.py."""

import random

from clue_templates import CLUE_TEMPLATES, available_clues, pick_clue
from models import ChemicalElement
from word_pool import build_candidates, is_usable_length, normalize_name, sort_for_placement

from conftest import make_element


class TestNormalizeName:
    def test_diacritics_and_punctuation(self):
        assert normalize_name("Uranio-238 (U)") == "URANIOU"

    def test_accents(self):
        assert normalize_name("Niòbio") == "NIOBIO"
        assert normalize_name("Ëlio") == "ELIO"

    def test_spaces(self):
        assert normalize_name("terre rare") == "TERRERARE"

    def test_empty(self):
        assert normalize_name("") == ""


class TestLengthFilter:
    def test_bounds(self):
        assert not is_usable_length("ORO")
        assert is_usable_length("BORO")
        assert is_usable_length("A" * 14)
        assert not is_usable_length("A" * 15)


class TestBuildCandidates:
    def test_filters_by_length(self):
        elements = [
            make_element("Oro", 79),
            make_element("Ferro", 26),
            make_element("Rutherfordiooooo", 104),
        ]
        candidates = build_candidates(elements, random.Random(1))
        assert [c.word for c in candidates] == ["FERRO"]

    def test_keeps_order_and_element(self, elements):
        candidates = build_candidates(elements, random.Random(1))
        assert [c.word for c in candidates][:3] == ["IDROGENO", "ELIO", "LITIO"]
        assert candidates[0].element is elements[0]

    def test_clue_comes_from_templates(self, elements):
        candidates = build_candidates(elements, random.Random(7))
        for candidate in candidates:
            assert candidate.clue_text in available_clues(candidate.element)

    def test_skips_duplicates(self):
        elements = [make_element("Neon", 10), make_element("Néon", 10)]
        assert len(build_candidates(elements, random.Random(0))) == 1

    def test_skips_unclueable(self):
        elements = [ChemicalElement(name="Mistero")]
        assert build_candidates(elements, random.Random(0)) == []

    def test_sort_longest_first_is_stable(self, elements):
        candidates = build_candidates(elements, random.Random(1))
        ordered = sort_for_placement(candidates)
        lengths = [len(c.word) for c in ordered]
        assert lengths == sorted(lengths, reverse=True)
        four = [c.word for c in ordered if len(c.word) == 4]
        assert four == ["ELIO", "BORO", "NEON"]


class TestClueTemplates:
    def test_seven_templates(self):
        assert len(CLUE_TEMPLATES) == 7

    def test_only_non_empty_attributes(self):
        element = make_element("Ferro", 26, "Fe")
        assert available_clues(element) == [
            "Elemento con numero atomico 26",
            "Il suo simbolo è Fe",
        ]

    def test_whitespace_counts_as_empty(self):
        element = ChemicalElement(name="Ferro", symbol="   ")
        assert available_clues(element) == []

    def test_exclusion(self):
        element = make_element("Ferro", 26, "Fe")
        rng = random.Random(3)
        assert pick_clue(element, rng, exclude=["Elemento con numero atomico 26"]) == (
            "Il suo simbolo è Fe"
        )

    def test_exhausted(self):
        element = make_element("Ferro", 26, "Fe")
        assert pick_clue(element, random.Random(3), exclude=available_clues(element)) is None
