from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(str, Enum):
    NOUN = "noun"
    ADJECTIVE = "adjective"
    VERB = "verb"
    PRONOUN = "pronoun"
    PHRASE = "phrase"

    @property
    def word_classes(self) -> frozenset[str]:
        return WORD_CLASSES[self]


# BÍN word classes (orðflokkar) matched by each word-list category.
WORD_CLASSES: dict[Category, frozenset[str]] = {
    Category.NOUN: frozenset(("kk", "kvk", "hk")),
    Category.ADJECTIVE: frozenset(("lo",)),
    Category.VERB: frozenset(("so",)),
    Category.PRONOUN: frozenset(("fn", "pfn")),
    Category.PHRASE: frozenset(),
}


class Gender(str, Enum):
    MASCULINE = "kk"
    FEMININE = "kvk"
    NEUTER = "hk"

    @property
    def label(self) -> str:
        return {"kk": "masc.", "kvk": "fem.", "hk": "neut."}[self.value]


@dataclass(frozen=True)
class WordListEntry:
    lemma: str
    category: Category
    definition: str
    line_no: int  # 1-based line in the word list


@dataclass(frozen=True)
class BinEntry:
    lemma: str
    bin_id: int
    word_class: str  # e.g. kk, lo, so
    classification: str  # e.g. alm
    form: str
    tag: str  # e.g. NFETgr, FSB-KK-NFET
