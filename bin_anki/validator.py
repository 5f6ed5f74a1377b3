from __future__ import annotations

import sqlite3
import tempfile
import zipfile
from pathlib import Path
from typing import Any


def read_apkg_notes(apkg_path: str | Path) -> list[dict[str, Any]]:
    """Return notes stored in an .apkg as dicts with guid, fields, tags."""
    with zipfile.ZipFile(apkg_path, "r") as z:
        col_bytes = z.read("collection.anki2")

    with tempfile.NamedTemporaryFile(prefix="apkg_collection_", suffix=".anki2", delete=False) as tf:
        tf.write(col_bytes)
        tmp_path = Path(tf.name)

    try:
        conn = sqlite3.connect(str(tmp_path))
        try:
            rows = conn.execute("SELECT guid, flds, tags FROM notes ORDER BY id").fetchall()
        finally:
            conn.close()
    finally:
        tmp_path.unlink(missing_ok=True)

    return [
        {"guid": guid, "fields": str(flds).split("\x1f"), "tags": str(tags).split()}
        for guid, flds, tags in rows
    ]


def validate_apkg(apkg_path: str | Path, expected_notes: int | None = None) -> tuple[bool, dict[str, Any]]:
    """Validate a written .apkg.

    Rules:
    - File exists and is a valid zip
    - Contains collection.anki2 and the media mapping
    - Notes table is readable; note count equals expected_notes when given
    """
    apkg_path = Path(apkg_path)
    errors: list[str] = []
    notes: list[dict[str, Any]] = []

    if not apkg_path.is_file():
        errors.append(f"apkg_missing: {apkg_path}")
        return False, {"notes": 0, "errors": errors}

    try:
        with zipfile.ZipFile(apkg_path, "r") as z:
            names = set(z.namelist())
        if "collection.anki2" not in names:
            errors.append("apkg_missing_collection.anki2")
        if "media" not in names:
            errors.append("apkg_missing_media_mapping")
        if not errors:
            notes = read_apkg_notes(apkg_path)
    except zipfile.BadZipFile:
        errors.append("apkg_invalid_zip")
    except sqlite3.Error as e:
        errors.append(f"apkg_sqlite_read_failed: {e}")

    if not errors and expected_notes is not None and len(notes) != expected_notes:
        errors.append(f"apkg_note_count_mismatch: expected={expected_notes} actual={len(notes)}")

    return not errors, {"notes": len(notes), "errors": errors}
