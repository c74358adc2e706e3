"""
Utility helpers shared across routers/services.
"""

from typing import Optional

from .config import get_settings


def is_absolute_url(path: str | None) -> bool:
    p = path or ""
    return p.startswith("http://") or p.startswith("https://")


def absolute_url(path: str, base: Optional[str] = None) -> str:
    """
    Turn a root-relative path into an absolute URL using the public base.

    Paths that already carry an http(s) scheme are returned untouched.
    """
    base_url = (base if base is not None else get_settings().public_base_url).rstrip("/")
    if not path:
        return base_url + "/"
    if is_absolute_url(path):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path
