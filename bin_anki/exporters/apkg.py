from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import genanki

from ..config import DeckConfig

logger = logging.getLogger("bin_anki.exporters.apkg")


@dataclass
class ApkgExportStats:
    notes_exported: int = 0
    deck_id: int | None = None
    deck_name: str | None = None
    out_path: str | None = None


def write_apkg(
    notes: Iterable[genanki.Note],
    *,
    out_path: str | Path,
    cfg: DeckConfig,
) -> ApkgExportStats:
    """Write notes into a single-deck Anki .apkg.

    Notes are added in the order given. Raises RuntimeError when there is
    nothing to export.
    """
    out_path = Path(out_path)
    deck_id = cfg.resolved_deck_id()

    deck = genanki.Deck(deck_id, cfg.deck_name, description=cfg.deck_description)
    stats = ApkgExportStats(deck_id=deck_id, deck_name=cfg.deck_name, out_path=str(out_path))

    for note in notes:
        deck.add_note(note)
        stats.notes_exported += 1

    if stats.notes_exported <= 0:
        raise RuntimeError("No notes to export (no word list entry matched BÍN data)")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    genanki.Package(deck).write_to_file(str(out_path))
    logger.info("wrote %d notes to %s (deck %s, id %d)", stats.notes_exported, out_path, cfg.deck_name, deck_id)
    return stats
