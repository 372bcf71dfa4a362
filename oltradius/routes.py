# oltradius/routes.py
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from oltradius.extensions import limiter
from oltradius.services.app_settings import get_app_settings
from oltradius.services.company_info import get_company_info, get_company_name

main = Blueprint("main", __name__, url_prefix="/api")


def _settings_rate_limit() -> str:
    return current_app.config.get("SETTINGS_RATE_LIMIT") or "30 per minute"


def _bad_request(message: str):
    return jsonify({"error": message}), 400


# ======================
# Company identity (read-only)
# ======================
@main.route("/company", methods=["GET"])
def company_info():
    return jsonify(get_company_info())


@main.route("/company/name", methods=["GET"])
def company_name():
    return jsonify({"name": get_company_name()})


# ======================
# App settings
# ======================
@main.route("/settings", methods=["GET"])
def settings_state():
    return jsonify(get_app_settings().get_state().to_dict())


@main.route("/settings/locale", methods=["PUT", "POST"])
@limiter.limit(_settings_rate_limit)
def update_locale():
    data = request.get_json(silent=True)
    raw = data.get("locale") if isinstance(data, dict) else None
    locale = raw.strip().lower() if isinstance(raw, str) else ""
    if not locale:
        return _bad_request("locale is required.")

    try:
        state = get_app_settings().set_locale(locale)
    except ValueError:
        return _bad_request(f"Unsupported locale: {locale}")

    return jsonify(state.to_dict())


@main.route("/settings/company", methods=["PATCH", "POST"])
@limiter.limit(_settings_rate_limit)
def update_company():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _bad_request("Expected a JSON object of company settings.")

    try:
        state = get_app_settings().set_company(data)
    except TypeError as exc:
        return _bad_request(str(exc))

    return jsonify(state.to_dict())
