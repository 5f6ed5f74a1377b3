"""Entry point for running bin_anki as a module.

Usage:
    python -m bin_anki <wordlist> [options]
"""
from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
