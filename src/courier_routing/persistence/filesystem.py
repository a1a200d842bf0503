"""File-based persistence helpers for optimized route outputs."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from ..config import settings

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class FileStorage:
    """Thin wrapper around the data root for storing JSON, CSV and GeoJSON outputs."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.output_root = self.root / "outputs"
        self.output_root.mkdir(parents=True, exist_ok=True)

    def make_run_directory(self, prefix: str = "route") -> Path:
        """Create a fresh timestamped directory under ``outputs/``.

        Characters outside ``[A-Za-z0-9_-]`` in ``prefix`` are replaced with
        underscores, so the directory always lands directly in ``output_root``.
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        safe_prefix = _UNSAFE_NAME_CHARS.sub("_", prefix) or "route"
        path = (self.output_root / f"{safe_prefix}_{timestamp}").resolve()
        if path.parent != self.output_root.resolve():
            raise ValueError(f"Run directory {path} escapes {self.output_root}")
        path.mkdir(parents=True, exist_ok=False)
        return path

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)

    def write_csv(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
