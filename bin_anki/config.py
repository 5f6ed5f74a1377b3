from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .utils import load_json, stable_int_id

DEFAULT_CSS = (
    ".card { font-family: arial; font-size: 20px; text-align: center; color: black; background-color: white; }\n"
    "table.inflection { margin: 0 auto; border-collapse: collapse; font-size: 16px; }\n"
    "table.inflection th, table.inflection td { border: 1px solid #ccc; padding: 2px 8px; }\n"
    "table.inflection th { background-color: #f0f0f0; }\n"
)


@dataclass(frozen=True)
class DeckConfig:
    deck_name: str = "Icelandic Vocabulary"
    deck_description: str = "Deck for studying Icelandic inflections, generated from BÍN"
    deck_id: int | None = None
    model_id: int | None = None
    css: str = DEFAULT_CSS

    def resolved_deck_id(self) -> int:
        if self.deck_id is not None:
            return self.deck_id
        return stable_int_id(f"bin_anki:deck:{self.deck_name}")

    def with_overrides(self, **overrides: Any) -> "DeckConfig":
        # None means "not given on the command line".
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _int_or_none(v: Any, key: str) -> int | None:
    if v is None:
        return None
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"config field {key} must be an integer")
    return v


def load_config(config_path: str | Path | None = None) -> DeckConfig:
    if config_path is None:
        return DeckConfig()

    data = load_json(config_path)
    if not isinstance(data, dict):
        raise ValueError(f"config must be a JSON object: {config_path}")

    defaults = DeckConfig()
    deck = data.get("deck", {})
    if not isinstance(deck, dict):
        raise ValueError("config field deck must be a JSON object")
    return DeckConfig(
        deck_name=str(deck.get("name", defaults.deck_name)),
        deck_description=str(deck.get("description", defaults.deck_description)),
        deck_id=_int_or_none(deck.get("id"), "deck.id"),
        model_id=_int_or_none(data.get("model_id"), "model_id"),
        css=str(data.get("css", defaults.css)),
    )
