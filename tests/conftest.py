"""
Shared fixtures: a throwaway JSON store and upload directory per test.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from PIL import Image

# Make the kontakt package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kontakt.core import config as core_config  # noqa: E402
from kontakt.repositories import json_storage  # noqa: E402

BASE_URL = "https://kontakt.example.com"

JOHN = {
    "name": "John Doe",
    "jobTitle": "Engineer",
    "company": "Acme Corp",
    "phones": [{"number": "+1234567890", "label": "work"}],
    "emails": [{"email": "john@acme.com", "label": "work"}],
    "websites": [{"url": "https://acme.com", "label": "Acme"}],
    "socialLinks": [{"platform": "linkedin", "url": "https://linkedin.com/in/johndoe"}],
    "calendarUrl": "https://cal.com/johndoe",
    "avatarPath": "/uploads/avatars/john.png",
    "primaryColor": "#0066cc",
    "visibility": "PUBLIC",
}


@pytest.fixture()
def store(tmp_path, monkeypatch):
    """Point the app at a temporary data file seeded with a few cards and signatures."""
    data_file = tmp_path / "data.json"
    upload_dir = tmp_path / "uploads"
    (upload_dir / "avatars").mkdir(parents=True)
    Image.new("RGB", (400, 300), (200, 30, 30)).save(upload_dir / "avatars" / "john.png")

    monkeypatch.setenv("DATA_FILE", str(data_file))
    monkeypatch.setenv("UPLOAD_DIR", str(upload_dir))
    monkeypatch.setenv("PUBLIC_BASE_URL", BASE_URL)
    monkeypatch.delenv("AVATAR_MAX_SIZE", raising=False)
    # force a re-read of the environment
    core_config.get_settings.cache_clear()

    json_storage.save(
        {
            "cards": {
                "john-doe": dict(JOHN),
                "hidden": {"name": "Hidden Person", "visibility": "DISABLED"},
                "unlisted": {"name": "Quiet Person", "visibility": "UNLISTED"},
            },
            "signatures": {
                "sig-1": {
                    "cardSlug": "john-doe",
                    "layout": "MINIMAL",
                    "config": {"disclaimer": "Confidential"},
                },
                "sig-orphan": {"cardSlug": "deleted-card", "layout": "CLASSIC", "config": {}},
            },
            "settings": {},
        }
    )

    yield upload_dir

    core_config.get_settings.cache_clear()


@pytest.fixture()
def update_store(store):
    """Write one entry into a section of the temporary store."""

    def _update(section: str, key: str, value) -> None:
        db = json_storage.db_defaults(json_storage.load())
        db[section][key] = value
        json_storage.save(db)

    return _update
