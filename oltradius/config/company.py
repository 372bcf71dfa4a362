# oltradius/config/company.py
from __future__ import annotations

"""
Fallback company identity and the seed values of the app settings store.

These are used whenever the real company row is missing or the database
cannot be reached, and on first start before any settings were persisted.
"""

# -----------------------------
# Fallback identity
# -----------------------------
DEFAULT_COMPANY_NAME = "OLT RADIUS"

# Env var consulted (at call time) for the fallback base URL
BASE_URL_ENV_VAR = "PUBLIC_BASE_URL"


# -----------------------------
# Settings store seed
# -----------------------------
DEFAULT_COMPANY_EMAIL = "admin@olt.com"
DEFAULT_COMPANY_PHONE = "+62 812-3456-7890"
DEFAULT_COMPANY_ADDRESS = "Jakarta, Indonesia"
DEFAULT_ADMIN_PHONE = DEFAULT_COMPANY_PHONE

DEFAULT_COMPANY_SETTINGS = {
    "name": DEFAULT_COMPANY_NAME,
    "email": DEFAULT_COMPANY_EMAIL,
    "phone": DEFAULT_COMPANY_PHONE,
    "address": DEFAULT_COMPANY_ADDRESS,
    "base_url": "",
    "admin_phone": DEFAULT_ADMIN_PHONE,
    "logo": None,
}

DEFAULT_LOCALE = "id"

# Persistence namespace. Keep stable: renaming it drops every saved setting.
SETTINGS_STORAGE_KEY = "olt-settings"
