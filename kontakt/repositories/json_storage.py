"""
JSON-file persistence adapter.

Holds cards (keyed by slug), saved signatures (keyed by id) and the
instance settings (key -> string). Services read plain dicts from here and
turn them into domain objects; nothing in the rendering core touches it.
"""

from __future__ import annotations

from pathlib import Path
import json

from kontakt.core.config import get_settings


def _data_file() -> Path:
    return Path(get_settings().data_file)


def load() -> dict:
    data_file = _data_file()
    if data_file.exists():
        with data_file.open("r", encoding="utf-8") as f:
            return json.load(f)
    return {
        "cards": {},
        "signatures": {},
        "settings": {},
    }


def save(db: dict) -> None:
    data_file = _data_file()
    data_file.parent.mkdir(parents=True, exist_ok=True)
    data_file.write_text(json.dumps(db, ensure_ascii=False, indent=2), encoding="utf-8")


def db_defaults(db: dict) -> dict:
    db.setdefault("cards", {})
    db.setdefault("signatures", {})
    db.setdefault("settings", {})
    return db
