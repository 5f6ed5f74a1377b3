from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, TextIO

from .types import Category, WordListEntry

logger = logging.getLogger("bin_anki.wordlist")

DEFAULT_DEFINITION = "—"

_CATEGORY_ALIASES: dict[str, Category] = {}
for _c in Category:
    _CATEGORY_ALIASES[_c.value] = _c
    _CATEGORY_ALIASES[_c.value + "s"] = _c


class WordListError(ValueError):
    def __init__(self, line_no: int, reason: str) -> None:
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


def parse_category(text: str) -> Category:
    try:
        return _CATEGORY_ALIASES[text.strip().lower()]
    except KeyError:
        raise ValueError(f"unsupported category: {text.strip()!r}") from None


@dataclass
class WordList:
    entries: list[WordListEntry] = field(default_factory=list)
    invalid: list[dict[str, Any]] = field(default_factory=list)

    def __iter__(self) -> Iterator[WordListEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup_lemmas(self) -> set[str]:
        # Phrases are never looked up in BÍN.
        return {e.lemma for e in self.entries if e.category != Category.PHRASE}


def _read_rows(f: TextIO) -> Iterator[tuple[int, list[str]]]:
    # Definitions are free text; quotes must not be interpreted.
    reader = csv.reader(f, delimiter="\t", quoting=csv.QUOTE_NONE)
    for row in reader:
        yield reader.line_num, row


def load_wordlist(source: str | Path | TextIO, *, strict: bool = False) -> WordList:
    """Parse a tab-separated word list: lemma<TAB>category<TAB>definition.

    Blank lines and '#' comments are skipped. Malformed lines (missing
    category, empty lemma, unsupported category, duplicate lemma/category)
    are collected in WordList.invalid, or raise WordListError when strict.
    Entries keep their file order.
    """
    if isinstance(source, (str, Path)):
        with open(source, "r", encoding="utf-8-sig", newline="") as f:
            return _load(f, strict=strict)
    return _load(source, strict=strict)


def _load(f: TextIO, *, strict: bool) -> WordList:
    wordlist = WordList()
    seen: set[tuple[str, Category]] = set()

    def reject(line_no: int, reason: str, raw: list[str]) -> None:
        if strict:
            raise WordListError(line_no, reason)
        logger.warning("skipping word list line %d: %s", line_no, reason)
        wordlist.invalid.append({"line": line_no, "reason": reason, "text": "\t".join(raw)})

    for line_no, row in _read_rows(f):
        fields = [c.strip() for c in row]
        if not fields or not any(fields) or fields[0].startswith("#"):
            continue

        if len(fields) < 2:
            reject(line_no, "missing category", row)
            continue

        lemma = fields[0]
        if not lemma:
            reject(line_no, "empty lemma", row)
            continue

        try:
            category = parse_category(fields[1])
        except ValueError as e:
            reject(line_no, str(e), row)
            continue

        key = (lemma, category)
        if key in seen:
            reject(line_no, f"duplicate: {lemma} ({category.value})", row)
            continue
        seen.add(key)

        definition = fields[2] if len(fields) > 2 and fields[2] else DEFAULT_DEFINITION
        wordlist.entries.append(WordListEntry(lemma=lemma, category=category, definition=definition, line_no=line_no))

    return wordlist
