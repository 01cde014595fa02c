"""Atomic and deterministic file I/O helpers."""

from __future__ import annotations

import json
import os
import uuid
from contextlib import suppress
from pathlib import Path
from typing import Any


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".tmp-{path.name}-{uuid.uuid4().hex}")
    try:
        with tmp_path.open("wb") as handle:
            handle.write(data)
        os.replace(tmp_path, path)
    except OSError:
        with suppress(FileNotFoundError):
            tmp_path.unlink()
        raise


def atomic_write_text(path: Path, text: str) -> None:
    _atomic_write_bytes(path, text.encode("utf-8"))


def dumps_json(payload: Any) -> str:
    return json.dumps(payload, sort_keys=True, ensure_ascii=True, indent=2) + "\n"


def atomic_write_json(path: Path, payload: Any) -> None:
    atomic_write_text(path, dumps_json(payload))
