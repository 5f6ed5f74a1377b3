"""Card models and note fields for each word-list category.

Every category gets its own genanki model. Inflection tables are rendered
as small HTML tables; forms missing from BÍN show as MISSING.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Sequence

import genanki

from .bindata import InflectionTable
from .config import DeckConfig
from .types import Category, WordListEntry
from .utils import stable_int_id

MISSING = "—"

CASES = [("NF", "Nom."), ("ÞF", "Acc."), ("ÞGF", "Dat."), ("EF", "Gen.")]
NUMBERS = [("ET", "Sg."), ("FT", "Pl.")]
GENDERS = [("KK", "m."), ("KVK", "f."), ("HK", "n.")]
PERSONS = [("1P", "1st"), ("2P", "2nd"), ("3P", "3rd")]

_FRONT = "<h1>{{Lemma}}</h1>"

FIELDS: dict[Category, list[str]] = {
    Category.NOUN: ["Lemma", "Gender", "Plural", "Definition", "Declension"],
    Category.ADJECTIVE: ["Lemma", "Definition", "Comparative", "Superlative", "Strong", "Weak"],
    Category.VERB: ["Lemma", "Definition", "PrincipalParts", "Present", "Past"],
    Category.PRONOUN: ["Lemma", "Definition", "Declension"],
    Category.PHRASE: ["Phrase", "Definition"],
}

TEMPLATES: dict[Category, tuple[str, str]] = {
    Category.NOUN: (
        _FRONT,
        '{{FrontSide}}<hr id="answer"><h2>{{Plural}} ({{Gender}})</h2><p>{{Definition}}</p>{{Declension}}',
    ),
    Category.ADJECTIVE: (
        _FRONT,
        '{{FrontSide}}<hr id="answer"><p>{{Definition}}</p>'
        "<p>{{Comparative}} / {{Superlative}}</p>"
        "<h3>Strong</h3>{{Strong}}<h3>Weak</h3>{{Weak}}",
    ),
    Category.VERB: (
        _FRONT,
        '{{FrontSide}}<hr id="answer"><h2>{{PrincipalParts}}</h2><p>{{Definition}}</p>'
        "<h3>Present</h3>{{Present}}<h3>Past</h3>{{Past}}",
    ),
    Category.PRONOUN: (
        _FRONT,
        '{{FrontSide}}<hr id="answer"><p>{{Definition}}</p>{{Declension}}',
    ),
    Category.PHRASE: (
        "<h1>{{Phrase}}</h1>",
        '{{FrontSide}}<hr id="answer"><p>{{Definition}}</p>',
    ),
}


def _text(v: str | None) -> str:
    return html.escape(v) if v else MISSING


def render_table(headers: Sequence[str], rows: Sequence[tuple[str, Sequence[str | None]]]) -> str:
    head = "".join(f"<th>{html.escape(h)}</th>" for h in ["", *headers])
    body = "".join(
        "<tr><th>{}</th>{}</tr>".format(html.escape(label), "".join(f"<td>{_text(v)}</td>" for v in cells))
        for label, cells in rows
    )
    return f'<table class="inflection"><tr>{head}</tr>{body}</table>'


def noun_declension(table: InflectionTable) -> str:
    headers = ["Sg.", "Sg. def.", "Pl.", "Pl. def."]
    rows = []
    for case, label in CASES:
        rows.append(
            (
                label,
                [
                    table.form(f"{case}ET"),
                    table.form(f"{case}ETgr"),
                    table.form(f"{case}FT"),
                    table.form(f"{case}FTgr"),
                ],
            )
        )
    return render_table(headers, rows)


def gendered_declension(table: InflectionTable, prefix: str = "") -> str:
    # prefix is the degree for adjectives (e.g. "FSB-"), empty for pronouns.
    headers = [f"{g} {n}" for _, n in NUMBERS for _, g in GENDERS]
    rows = []
    for case, label in CASES:
        cells = [table.form(f"{prefix}{g}-{case}{num}") for num, _ in NUMBERS for g, _ in GENDERS]
        rows.append((label, cells))
    return render_table(headers, rows)


def pronoun_declension(table: InflectionTable) -> str:
    if table.has_prefix("KK-"):
        return gendered_declension(table)
    rows = [(label, [table.form(f"{case}{num}") for num, _ in NUMBERS]) for case, label in CASES]
    return render_table([n for _, n in NUMBERS], rows)


def conjugation(table: InflectionTable, tense: str) -> str:
    rows = [
        (label, [table.form(f"GM-FH-{tense}-{person}-{num}") for num, _ in NUMBERS])
        for person, label in PERSONS
    ]
    return render_table([n for _, n in NUMBERS], rows)


def principal_parts(table: InflectionTable) -> str:
    parts = [
        table.form("GM-NH"),
        table.form("GM-FH-ÞT-1P-ET"),
        table.form("GM-FH-ÞT-1P-FT"),
        table.form("GM-SAGNB"),
    ]
    return " – ".join(_text(p) for p in parts)


def note_fields(entry: WordListEntry, table: InflectionTable | None) -> list[str]:
    """Field values for entry, in FIELDS order for its category."""
    lemma = html.escape(entry.lemma)
    definition = html.escape(entry.definition)
    category = entry.category

    if category == Category.PHRASE:
        return [lemma, definition]

    if table is None:
        raise ValueError(f"no inflection data for {entry.lemma} ({category.value})")

    if category == Category.NOUN:
        gender = table.gender
        return [
            lemma,
            gender.label if gender else MISSING,
            _text(table.form("NFFT")),
            definition,
            noun_declension(table),
        ]

    if category == Category.ADJECTIVE:
        return [
            lemma,
            definition,
            _text(table.form("MST-KK-NFET")),
            _text(table.form("ESB-KK-NFET")),
            gendered_declension(table, "FSB-"),
            gendered_declension(table, "FVB-"),
        ]

    if category == Category.VERB:
        return [
            lemma,
            definition,
            principal_parts(table),
            conjugation(table, "NT"),
            conjugation(table, "ÞT"),
        ]

    if category == Category.PRONOUN:
        return [lemma, definition, pronoun_declension(table)]

    raise ValueError(f"unsupported category: {category}")


@dataclass
class CardModels:
    models: dict[Category, genanki.Model]

    @classmethod
    def from_config(cls, cfg: DeckConfig) -> "CardModels":
        models: dict[Category, genanki.Model] = {}
        for offset, category in enumerate(Category):
            if cfg.model_id is not None:
                model_id = cfg.model_id + offset
            else:
                model_id = stable_int_id(f"bin_anki:model:{category.value}")
            qfmt, afmt = TEMPLATES[category]
            models[category] = genanki.Model(
                model_id,
                f"BÍN {category.value.capitalize()}",
                fields=[{"name": name} for name in FIELDS[category]],
                templates=[{"name": "Card 1", "qfmt": qfmt, "afmt": afmt}],
                css=cfg.css,
            )
        return cls(models=models)

    def __getitem__(self, category: Category) -> genanki.Model:
        return self.models[category]


def build_note(
    entry: WordListEntry,
    table: InflectionTable | None,
    models: CardModels,
    tags: Sequence[str] = (),
) -> genanki.Note:
    # GUID from lemma+category so a rebuilt deck updates notes on re-import.
    return genanki.Note(
        model=models[entry.category],
        fields=note_fields(entry, table),
        tags=[entry.category.value, *tags],
        guid=genanki.guid_for(entry.lemma, entry.category.value),
    )
