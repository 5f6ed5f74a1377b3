from __future__ import annotations

import csv
import io
import logging
import zipfile
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Collection, Iterator, TextIO

from tqdm import tqdm

from .types import BinEntry, Category, Gender

logger = logging.getLogger("bin_anki.bindata")

# Sigrúnarsnið: lemma;id;word_class;classification;form;tag
_MIN_FIELDS = 6

GENERAL_VOCABULARY = "alm"


class BinDataError(ValueError):
    pass


@dataclass
class InflectionTable:
    """All forms of one BÍN headword, keyed by grammatical tag."""

    lemma: str
    bin_id: int
    word_class: str
    forms: dict[str, str] = field(default_factory=dict)

    def form(self, tag: str) -> str | None:
        return self.forms.get(tag)

    def has_prefix(self, prefix: str) -> bool:
        return any(t.startswith(prefix) for t in self.forms)

    @property
    def gender(self) -> Gender | None:
        try:
            return Gender(self.word_class)
        except ValueError:
            return None


@contextmanager
def open_bin_data(path: str | Path) -> Iterator[TextIO]:
    """Open a BÍN CSV, either plain or as the first .csv member of a zip."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"BÍN data not found: {path}")

    if zipfile.is_zipfile(path):
        with zipfile.ZipFile(path, "r") as z:
            members = [n for n in z.namelist() if n.lower().endswith(".csv")]
            if not members:
                raise BinDataError(f"no .csv member in {path}")
            logger.info("reading %s from %s", members[0], path)
            with z.open(members[0], "r") as raw:
                yield io.TextIOWrapper(raw, encoding="utf-8", newline="")
        return

    with open(path, "r", encoding="utf-8", newline="") as f:
        yield f


class BinData:
    def __init__(self) -> None:
        self.data: dict[str, list[BinEntry]] = {}

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, lemma: object) -> bool:
        return lemma in self.data

    def entries(self, lemma: str) -> list[BinEntry]:
        return self.data.get(lemma, [])

    @classmethod
    def load(
        cls,
        stream: TextIO,
        *,
        lemmas: Collection[str] | None = None,
        progress: bool = False,
    ) -> "BinData":
        """Read Sigrúnarsnið rows, grouped by lemma in file order.

        If lemmas is given, rows for other lemmas are dropped while reading.
        """
        bin_data = cls()
        wanted = set(lemmas) if lemmas is not None else None
        rows_read = 0

        reader = csv.reader(stream, delimiter=";", quoting=csv.QUOTE_NONE)
        for row in tqdm(reader, desc="BÍN", unit=" rows", disable=not progress):
            rows_read += 1
            if not row:
                continue
            if len(row) < _MIN_FIELDS:
                raise BinDataError(f"line {reader.line_num}: expected {_MIN_FIELDS} fields, got {len(row)}")

            try:
                bin_id = int(row[1])
            except ValueError:
                raise BinDataError(f"line {reader.line_num}: invalid id {row[1]!r}") from None

            lemma = row[0]
            if wanted is not None and lemma not in wanted:
                continue

            bin_data.data.setdefault(lemma, []).append(
                BinEntry(
                    lemma=lemma,
                    bin_id=bin_id,
                    word_class=row[2],
                    classification=row[3],
                    form=row[4],
                    tag=row[5],
                )
            )

        logger.info("read %d BÍN rows, kept %d lemmas", rows_read, len(bin_data.data))
        return bin_data

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        *,
        lemmas: Collection[str] | None = None,
        progress: bool = False,
    ) -> "BinData":
        with open_bin_data(path) as f:
            return cls.load(f, lemmas=lemmas, progress=progress)

    def table(self, lemma: str, word_classes: Collection[str]) -> InflectionTable | None:
        """Forms of the best matching headword, or None.

        A lemma can have several headwords (BÍN ids). General vocabulary
        (classification 'alm') is preferred; ties go to file order. For each
        tag the first row wins.
        """
        candidates = [e for e in self.entries(lemma) if e.word_class in word_classes]
        if not candidates:
            return None

        chosen = next((e for e in candidates if e.classification == GENERAL_VOCABULARY), candidates[0])

        table = InflectionTable(lemma=lemma, bin_id=chosen.bin_id, word_class=chosen.word_class)
        for e in candidates:
            if e.bin_id != chosen.bin_id:
                continue
            table.forms.setdefault(e.tag, e.form)
        return table

    def noun(self, lemma: str) -> InflectionTable | None:
        return self.table(lemma, Category.NOUN.word_classes)

    def adjective(self, lemma: str) -> InflectionTable | None:
        return self.table(lemma, Category.ADJECTIVE.word_classes)

    def verb(self, lemma: str) -> InflectionTable | None:
        return self.table(lemma, Category.VERB.word_classes)

    def pronoun(self, lemma: str) -> InflectionTable | None:
        return self.table(lemma, Category.PRONOUN.word_classes)

    def lookup(self, lemma: str, category: Category) -> InflectionTable | None:
        if category == Category.PHRASE:
            return None
        return self.table(lemma, category.word_classes)
