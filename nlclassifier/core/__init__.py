from __future__ import annotations

from .config import ClientSettings, get_settings  # noqa: F401

__all__: list[str] = [
    "ClientSettings",
    "get_settings",
]
