from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .utils import utc_now_iso, write_json


@dataclass
class ReportWriter:
    path: Path

    def write_final(
        self,
        build_meta: dict[str, Any],
        unmatched: list[dict[str, Any]],
        invalid_lines: list[dict[str, Any]],
        metrics: dict[str, Any],
    ) -> None:
        # Written only after the deck itself was written successfully.
        build_out = dict(build_meta)
        build_out["finished"] = True
        build_out["completed_at"] = utc_now_iso()

        write_json(
            self.path,
            {
                "build": build_out,
                "metrics": metrics,
                "unmatched": unmatched,
                "invalid_lines": invalid_lines,
            },
        )
