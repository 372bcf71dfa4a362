# oltradius/services/company_info.py
from __future__ import annotations

import os

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from oltradius.config.company import BASE_URL_ENV_VAR, DEFAULT_COMPANY_NAME
from oltradius.extensions import db
from oltradius.models import Company


# =========================================================
# Fallbacks
# =========================================================
def _fallback_base_url() -> str:
    # Read at call time, not at import/config time
    return (os.getenv(BASE_URL_ENV_VAR) or "").strip()


def fallback_company_info() -> dict:
    """Minimal identity used when no company row is available."""
    return {
        "name": DEFAULT_COMPANY_NAME,
        "base_url": _fallback_base_url(),
    }


def _rollback_quietly() -> None:
    try:
        db.session.rollback()
    except SQLAlchemyError:
        current_app.logger.warning("Session rollback failed after company lookup error.")


# =========================================================
# Lookups (never raise)
# =========================================================
def get_company_name() -> str:
    """
    Display name of the company.

    First company row wins. Empty/missing name or any query failure
    falls back to DEFAULT_COMPANY_NAME.
    """
    try:
        row = (
            db.session.query(Company.name)
            .order_by(Company.id.asc())
            .first()
        )
    except Exception:
        current_app.logger.exception("Error fetching company name")
        _rollback_quietly()
        return DEFAULT_COMPANY_NAME

    name = row.name if row is not None else None
    return name or DEFAULT_COMPANY_NAME


def get_company_info() -> dict:
    """
    Full company record as a dict, or fallback_company_info() when the
    table is empty or unreachable. Callers can't tell the two apart
    except by looking at the returned values.
    """
    try:
        company = (
            db.session.query(Company)
            .order_by(Company.id.asc())
            .first()
        )
    except Exception:
        current_app.logger.exception("Error fetching company info")
        _rollback_quietly()
        return fallback_company_info()

    if company is None:
        return fallback_company_info()
    return company.to_dict()
