from __future__ import annotations

import argparse
import logging
import os

from dotenv import find_dotenv, load_dotenv

from .config import load_config
from .pipeline import RunOptions, build_deck
from .utils import parse_tags
from .validator import validate_apkg


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bin_anki",
        description="Build an Anki deck from an Icelandic word list using BÍN inflection data",
    )
    p.add_argument("wordlist", help="Word list: lemma<TAB>category<TAB>definition, one per line")
    p.add_argument("-o", "--out", default="deck.apkg", help="Anki deck output file (default: deck.apkg)")
    p.add_argument(
        "--bin-data",
        default=os.getenv("BIN_DATA"),
        help="BÍN CSV in Sigrúnarsnið, plain or zipped (default: $BIN_DATA)",
    )
    p.add_argument("--config", default=os.getenv("BIN_ANKI_CONFIG"), help="JSON config path")
    p.add_argument("--deck-name", default=None)
    p.add_argument("--deck-description", default=None)
    p.add_argument("--deck-id", type=int, default=None, help="Numeric deck id (default: hash of deck name)")
    p.add_argument(
        "--model-id",
        type=int,
        default=None,
        help="Base numeric model id; categories use consecutive ids (default: hash of model name)",
    )
    p.add_argument("--tags", default=None, help="Comma-separated tags added to every note")
    p.add_argument("--strict", action="store_true", help="Abort on malformed word list lines")
    p.add_argument("--report", default=None, help="Write a JSON build report to this path")
    p.add_argument("--validate", action="store_true", help="Re-open the written deck and check its note count")
    p.add_argument("--progress", action="store_true", help="Show a progress bar while reading BÍN data")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    # .env is looked up from the working directory, not the package location.
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config(args.config or None).with_overrides(
            deck_name=args.deck_name,
            deck_description=args.deck_description,
            deck_id=args.deck_id,
            model_id=args.model_id,
        )
        opts = RunOptions(
            wordlist_path=args.wordlist,
            out_path=args.out,
            bin_data_path=args.bin_data or None,
            tags=tuple(parse_tags(args.tags)),
            strict=bool(args.strict),
            progress=bool(args.progress),
            report_path=args.report,
        )
        stats = build_deck(opts, cfg)
    except Exception as e:
        print(f"build_failed: {e}")
        return 1

    print(
        f"entries={stats.entries} matched={stats.matched} unmatched={len(stats.unmatched)} "
        f"phrases={stats.phrases} invalid_lines={stats.invalid_lines} exported={stats.notes_exported}"
    )

    if args.validate:
        ok, summary = validate_apkg(args.out, expected_notes=stats.notes_exported)
        if not ok:
            for m in summary["errors"]:
                print(m)
            return 1
        print("OK")

    print(str(args.out))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
