"""Tests for the lexicon."""

import pytest

from modules.words.exceptions import LexiconLoadError
from modules.words.interfaces import ILexicon
from modules.words.lexicon import Lexicon, load_default_lexicon, load_lexicon, normalize_word


class TestNormalizeWord:
    def test_trims_and_uppercases(self):
        assert normalize_word("  kedi \n") == "KEDİ"

    def test_turkish_dotted_and_dotless_i(self):
        assert normalize_word("ırmak") == "IRMAK"
        assert normalize_word("istanbul") == "İSTANBUL"

    def test_other_turkish_letters(self):
        assert normalize_word("çiçek") == "ÇİÇEK"
        assert normalize_word("öğretmen") == "ÖĞRETMEN"
        assert normalize_word("şeker") == "ŞEKER"


class TestLexicon:
    def test_implements_interface(self):
        assert isinstance(Lexicon(["KEDİ"]), ILexicon)

    def test_contains_is_normalized(self):
        lexicon = Lexicon(["kedi", "KÖPEK"])
        assert lexicon.contains("KEDİ")
        assert lexicon.contains("  kedi ")
        assert lexicon.contains("köpek")
        assert not lexicon.contains("KEDI")  # dotless I is a different letter

    def test_dunder_helpers(self):
        lexicon = Lexicon(["ev", "su", "ev", ""])
        assert len(lexicon) == 2
        assert "ev" in lexicon
        assert 42 not in lexicon


class TestLoading:
    def test_load_skips_comments_and_blank_lines(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# header\nKEDİ\n\n  masa  \n# ELMA\n", encoding="utf-8")

        lexicon = load_lexicon(path)

        assert len(lexicon) == 2
        assert lexicon.contains("MASA")
        assert not lexicon.contains("ELMA")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(LexiconLoadError) as exc_info:
            load_lexicon(tmp_path / "nope.txt")
        assert exc_info.value.code == "LEXICON_LOAD_ERROR"

    def test_default_lexicon_is_cached_and_populated(self):
        first = load_default_lexicon()
        second = load_default_lexicon()

        assert first is second
        assert len(first) > 300
        for word in ["KEDİ", "KİTAP", "ÖĞRETMEN", "PENCERE"]:
            assert first.contains(word)
