# oltradius/config/__init__.py
from __future__ import annotations

"""
oltradius.config holds static identity defaults.

- Company fallbacks + settings seed live in: oltradius.config.company
- Runtime settings (env driven) live in: oltradius.settings
"""

from .company import (
    DEFAULT_COMPANY_NAME,
    DEFAULT_COMPANY_SETTINGS,
    DEFAULT_LOCALE,
    SETTINGS_STORAGE_KEY,
)

__all__ = [
    "DEFAULT_COMPANY_NAME",
    "DEFAULT_COMPANY_SETTINGS",
    "DEFAULT_LOCALE",
    "SETTINGS_STORAGE_KEY",
]
