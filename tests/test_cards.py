"""Tests for card models and note field rendering."""
from __future__ import annotations

from pathlib import Path

import genanki
import pytest

from bin_anki.bindata import BinData, InflectionTable
from bin_anki.cards import FIELDS, MISSING, CardModels, build_note, note_fields, render_table
from bin_anki.config import DeckConfig
from bin_anki.types import Category, WordListEntry

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="module")
def bin_data() -> BinData:
    return BinData.from_path(DATA_DIR / "bin_sample.csv")


def _entry(lemma: str, category: Category, definition: str = "def") -> WordListEntry:
    return WordListEntry(lemma=lemma, category=category, definition=definition, line_no=1)


class TestRenderTable:
    def test_missing_cells_and_escaping(self):
        out = render_table(["A", "B"], [("<x>", ["a&b", None])])
        assert out.startswith('<table class="inflection">')
        assert "<th>&lt;x&gt;</th>" in out
        assert "<td>a&amp;b</td>" in out
        assert f"<td>{MISSING}</td>" in out


class TestNoteFields:
    def test_noun(self, bin_data: BinData):
        fields = note_fields(_entry("aðalhenda", Category.NOUN, "main rhyme"), bin_data.noun("aðalhenda"))

        assert len(fields) == len(FIELDS[Category.NOUN])
        lemma, gender, plural, definition, declension = fields
        assert lemma == "aðalhenda"
        assert gender == "fem."
        assert plural == "aðalhendur"
        assert definition == "main rhyme"
        assert "<td>aðalhendunnar</td>" in declension
        assert "<th>Gen.</th>" in declension

    def test_noun_missing_forms(self):
        table = InflectionTable(lemma="hestur", bin_id=1, word_class="kk", forms={"NFET": "hestur"})
        fields = note_fields(_entry("hestur", Category.NOUN), table)
        assert fields[2] == MISSING
        assert fields[4].count(f"<td>{MISSING}</td>") == 15

    def test_adjective(self, bin_data: BinData):
        fields = note_fields(_entry("fallegur", Category.ADJECTIVE), bin_data.adjective("fallegur"))

        assert len(fields) == len(FIELDS[Category.ADJECTIVE])
        _, _, comparative, superlative, strong, weak = fields
        assert comparative == "fallegri"
        assert superlative == "fallegastur"
        assert "<td>fallegan</td>" in strong
        assert "<td>fallegi</td>" in weak
        assert "<td>fallegi</td>" not in strong

    def test_verb(self, bin_data: BinData):
        fields = note_fields(_entry("tala", Category.VERB), bin_data.verb("tala"))

        _, _, parts, present, past = fields
        assert parts == "tala – talaði – töluðum – talað"
        assert "<td>tölum</td>" in present
        assert "<td>töluðuð</td>" in past

    def test_pronouns(self, bin_data: BinData):
        personal = note_fields(_entry("ég", Category.PRONOUN), bin_data.pronoun("ég"))[2]
        assert "<td>mér</td>" in personal
        assert "m. Sg." not in personal

        gendered = note_fields(_entry("þessi", Category.PRONOUN), bin_data.pronoun("þessi"))[2]
        assert "<th>m. Sg.</th>" in gendered
        assert "<td>þennan</td>" in gendered

    def test_phrase_needs_no_table(self):
        assert note_fields(_entry("góðan daginn", Category.PHRASE, "good <b>morning</b>"), None) == [
            "góðan daginn",
            "good &lt;b&gt;morning&lt;/b&gt;",
        ]

    def test_word_without_table_raises(self):
        with pytest.raises(ValueError, match="no inflection data"):
            note_fields(_entry("óþekkt", Category.NOUN), None)


class TestModels:
    def test_one_model_per_category(self):
        models = CardModels.from_config(DeckConfig())
        ids = {models[c].model_id for c in Category}
        assert len(ids) == len(Category)
        for c in Category:
            assert [f["name"] for f in models[c].fields] == FIELDS[c]

    def test_stable_ids(self):
        a = CardModels.from_config(DeckConfig())
        b = CardModels.from_config(DeckConfig(deck_name="Other"))
        assert a[Category.NOUN].model_id == b[Category.NOUN].model_id

    def test_model_id_override(self):
        models = CardModels.from_config(DeckConfig(model_id=1000))
        assert [models[c].model_id for c in Category] == [1000, 1001, 1002, 1003, 1004]

    def test_build_note(self, bin_data: BinData):
        models = CardModels.from_config(DeckConfig())
        entry = _entry("aðalhellir", Category.NOUN)
        note = build_note(entry, bin_data.noun("aðalhellir"), models, ["icelandic"])

        assert note.model is models[Category.NOUN]
        assert note.tags == ["noun", "icelandic"]
        assert note.guid == genanki.guid_for("aðalhellir", "noun")
