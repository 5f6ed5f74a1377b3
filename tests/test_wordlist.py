"""Tests for word list parsing."""
from __future__ import annotations

import io
from pathlib import Path

import pytest

from bin_anki.types import Category
from bin_anki.wordlist import DEFAULT_DEFINITION, WordListError, load_wordlist, parse_category

DATA_DIR = Path(__file__).parent / "data"


class TestParseCategory:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("noun", Category.NOUN),
            ("Nouns", Category.NOUN),
            ("ADJECTIVE", Category.ADJECTIVE),
            ("verbs", Category.VERB),
            (" pronoun ", Category.PRONOUN),
            ("phrase", Category.PHRASE),
        ],
    )
    def test_supported(self, text: str, expected: Category):
        assert parse_category(text) == expected

    def test_unsupported_raises(self):
        with pytest.raises(ValueError, match="unsupported category"):
            parse_category("adverb")


class TestLoadWordlist:
    def test_loads_entries_in_order(self):
        wl = load_wordlist(io.StringIO("foo\tnoun\tdefinition of foo\nbar\tverb\tdefinition of bar\nbaz\tadjective\tdefinition of baz\n"))

        assert [(e.lemma, e.category) for e in wl] == [
            ("foo", Category.NOUN),
            ("bar", Category.VERB),
            ("baz", Category.ADJECTIVE),
        ]
        assert [e.definition for e in wl] == ["definition of foo", "definition of bar", "definition of baz"]
        assert wl.invalid == []

    def test_missing_definition_gets_default(self):
        wl = load_wordlist(io.StringIO("hestur\tnoun\n"))
        assert wl.entries[0].definition == DEFAULT_DEFINITION

    def test_skips_comments_and_blank_lines(self):
        wl = load_wordlist(io.StringIO("# header\n\n   \nhestur\tnoun\thorse\n"))
        assert len(wl) == 1
        assert wl.entries[0].line_no == 4
        assert wl.invalid == []

    def test_quotes_are_literal(self):
        wl = load_wordlist(io.StringIO('segja\tverb\tto "say"\n'))
        assert wl.entries[0].definition == 'to "say"'

    def test_invalid_lines_are_collected(self):
        wl = load_wordlist(io.StringIO("hestur\tnoun\thorse\nbrotið\nvel\tadverb\twell\nhestur\tnoun\tagain\n"))

        assert len(wl) == 1
        assert [it["line"] for it in wl.invalid] == [2, 3, 4]
        assert wl.invalid[0]["reason"] == "missing category"
        assert "unsupported category" in wl.invalid[1]["reason"]
        assert wl.invalid[2]["reason"].startswith("duplicate")

    def test_same_lemma_different_category_is_not_duplicate(self):
        wl = load_wordlist(io.StringIO("tala\tverb\tto speak\ntala\tnoun\tnumber\n"))
        assert len(wl) == 2
        assert wl.invalid == []

    def test_strict_raises_with_line_number(self):
        with pytest.raises(WordListError) as exc:
            load_wordlist(io.StringIO("hestur\tnoun\thorse\nvel\tadverb\twell\n"), strict=True)
        assert exc.value.line_no == 2

    def test_loads_from_path(self):
        wl = load_wordlist(DATA_DIR / "wordlist.tsv")

        assert len(wl) == 10
        assert len(wl.invalid) == 1
        assert wl.invalid[0]["line"] == 13
        assert wl.entries[1].lemma == "aðalhenda"
        assert wl.entries[1].category == Category.NOUN
        assert wl.entries[7].definition == "good morning"

    def test_fields_are_stripped(self):
        wl = load_wordlist(io.StringIO("  hestur \t Noun \t horse \n"))

        entry = wl.entries[0]
        assert (entry.lemma, entry.category, entry.definition) == ("hestur", Category.NOUN, "horse")

    def test_empty_lemma_is_invalid(self):
        wl = load_wordlist(io.StringIO("\tnoun\tdef\nhestur\tnoun\thorse\n"))

        assert [e.lemma for e in wl] == ["hestur"]
        assert wl.invalid == [{"line": 1, "reason": "empty lemma", "text": "\tnoun\tdef"}]

    def test_lookup_lemmas_skip_phrases(self):
        wl = load_wordlist(io.StringIO("tala\tverb\nég\tpronoun\ngóðan daginn\tphrase\tgood morning\n"))
        assert wl.lookup_lemmas() == {"tala", "ég"}
