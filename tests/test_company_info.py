from __future__ import annotations

import logging

from oltradius.extensions import db
from oltradius.models import Company
from oltradius.services.company_info import get_company_info, get_company_name


def _error_records(caplog, app):
    return [r for r in caplog.records if r.name == app.logger.name and r.levelno == logging.ERROR]


def _add_company(**fields) -> Company:
    company = Company(**fields)
    db.session.add(company)
    db.session.commit()
    return company


def test_company_name_defaults_when_table_empty(app):
    assert get_company_name() == "OLT RADIUS"


def test_company_name_returns_stored_name(app):
    _add_company(name="Acme")
    assert get_company_name() == "Acme"


def test_company_name_uses_first_row(app):
    _add_company(name="First Net")
    _add_company(name="Second Net")
    assert get_company_name() == "First Net"


def test_company_name_defaults_when_name_empty(app):
    _add_company(name="")
    assert get_company_name() == "OLT RADIUS"


def test_company_name_defaults_and_logs_once_on_query_failure(app, caplog):
    db.drop_all()

    with caplog.at_level(logging.ERROR):
        assert get_company_name() == "OLT RADIUS"

    records = _error_records(caplog, app)
    assert len(records) == 1
    assert records[0].getMessage() == "Error fetching company name"
    assert records[0].exc_info is not None


def test_company_name_lookup_recovers_after_failure(app):
    db.drop_all()
    assert get_company_name() == "OLT RADIUS"

    db.create_all()
    _add_company(name="Back Online")
    assert get_company_name() == "Back Online"


def test_company_info_fallback_uses_base_url_env(app, monkeypatch):
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://radius.example.net")
    assert get_company_info() == {"name": "OLT RADIUS", "base_url": "https://radius.example.net"}


def test_company_info_fallback_base_url_empty_without_env(app, monkeypatch):
    monkeypatch.delenv("PUBLIC_BASE_URL", raising=False)
    assert get_company_info() == {"name": "OLT RADIUS", "base_url": ""}


def test_company_info_returns_record(app):
    _add_company(
        name="Acme",
        email="noc@acme.net",
        phone="+62 811-0000-0000",
        address="Bandung",
        logo="/static/acme.png",
        base_url="https://acme.net",
        admin_phone="+62 811-1111-1111",
    )

    info = get_company_info()

    assert info["name"] == "Acme"
    assert info["email"] == "noc@acme.net"
    assert info["logo"] == "/static/acme.png"
    assert info["base_url"] == "https://acme.net"
    assert info["admin_phone"] == "+62 811-1111-1111"
    assert info["id"] is not None


def test_company_info_falls_back_and_logs_on_query_failure(app, caplog, monkeypatch):
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://fallback.example")
    db.drop_all()

    with caplog.at_level(logging.ERROR):
        info = get_company_info()

    assert info == {"name": "OLT RADIUS", "base_url": "https://fallback.example"}
    records = _error_records(caplog, app)
    assert len(records) == 1
    assert records[0].getMessage() == "Error fetching company info"


def test_missing_record_is_not_logged(app, caplog):
    with caplog.at_level(logging.ERROR):
        get_company_name()
        get_company_info()

    assert _error_records(caplog, app) == []
