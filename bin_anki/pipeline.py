from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import genanki

from .bindata import BinData
from .cards import CardModels, build_note
from .config import DeckConfig
from .exporters.apkg import write_apkg
from .types import Category
from .utils import utc_now_iso
from .wordlist import load_wordlist
from .writer import ReportWriter

logger = logging.getLogger("bin_anki.pipeline")


@dataclass
class RunOptions:
    wordlist_path: str
    out_path: str
    bin_data_path: str | None = None
    tags: tuple[str, ...] = ()
    strict: bool = False
    progress: bool = False
    report_path: str | None = None


@dataclass
class BuildStats:
    entries: int = 0
    invalid_lines: int = 0
    matched: int = 0
    phrases: int = 0
    notes_exported: int = 0
    unmatched: list[dict[str, Any]] = field(default_factory=list)
    out_path: str | None = None

    def as_metrics(self) -> dict[str, Any]:
        return {
            "entries": self.entries,
            "invalid_lines": self.invalid_lines,
            "matched": self.matched,
            "unmatched": len(self.unmatched),
            "phrases": self.phrases,
            "notes_exported": self.notes_exported,
        }


class DeckPipeline:
    """word list -> BÍN lookup -> notes -> .apkg"""

    def __init__(self, cfg: DeckConfig, opts: RunOptions):
        self.cfg = cfg
        self.opts = opts
        self.models = CardModels.from_config(cfg)

    def _load_bin_data(self, lemmas: set[str]) -> BinData:
        if not lemmas:
            # Phrase-only word list; nothing to look up.
            return BinData()
        if not self.opts.bin_data_path:
            raise ValueError("BÍN data path is required (use --bin-data or set BIN_DATA)")
        return BinData.from_path(self.opts.bin_data_path, lemmas=lemmas, progress=self.opts.progress)

    def run(self) -> BuildStats:
        created_at = utc_now_iso()
        stats = BuildStats(out_path=self.opts.out_path)

        wordlist = load_wordlist(self.opts.wordlist_path, strict=self.opts.strict)
        stats.entries = len(wordlist)
        stats.invalid_lines = len(wordlist.invalid)
        logger.info("loaded %d word list entries (%d invalid lines)", stats.entries, stats.invalid_lines)

        lookup_lemmas = wordlist.lookup_lemmas()
        bin_data = self._load_bin_data(lookup_lemmas)

        notes: list[genanki.Note] = []
        for entry in wordlist:
            if entry.category == Category.PHRASE:
                stats.phrases += 1
                table = None
            else:
                table = bin_data.lookup(entry.lemma, entry.category)
                if table is None:
                    logger.warning("no BÍN %s found for %s (line %d)", entry.category.value, entry.lemma, entry.line_no)
                    stats.unmatched.append(
                        {"lemma": entry.lemma, "category": entry.category.value, "line": entry.line_no}
                    )
                    continue

            logger.debug("adding %s...", entry.lemma)
            notes.append(build_note(entry, table, self.models, self.opts.tags))
            stats.matched += 1

        export = write_apkg(notes, out_path=self.opts.out_path, cfg=self.cfg)
        stats.notes_exported = export.notes_exported

        if self.opts.report_path:
            ReportWriter(path=Path(self.opts.report_path)).write_final(
                {
                    "created_at": created_at,
                    "wordlist": str(self.opts.wordlist_path),
                    "bin_data": str(self.opts.bin_data_path) if self.opts.bin_data_path else None,
                    "out": str(self.opts.out_path),
                    "deck_name": export.deck_name,
                    "deck_id": export.deck_id,
                },
                stats.unmatched,
                wordlist.invalid,
                stats.as_metrics(),
            )

        return stats


def build_deck(opts: RunOptions, cfg: DeckConfig | None = None) -> BuildStats:
    return DeckPipeline(cfg=cfg or DeckConfig(), opts=opts).run()
