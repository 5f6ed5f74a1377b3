"""Icelandic word list to Anki deck converter.

Looks up each word of a tab-separated word list in BÍN (Beygingarlýsing
íslensks nútímamáls, Sigrúnarsnið CSV) and writes one note per matched
word, with its inflections, into an .apkg deck.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
