from __future__ import annotations

import pytest

from oltradius.settings import _normalize_db_url


@pytest.mark.parametrize(
    "url, expected",
    [
        (None, None),
        ("", None),
        ("postgres://u:p@db:5432/olt", "postgresql+psycopg2://u:p@db:5432/olt"),
        (" postgresql://u:p@db/olt ", "postgresql+psycopg2://u:p@db/olt"),
        ("postgresql+psycopg2://u:p@db/olt", "postgresql+psycopg2://u:p@db/olt"),
        ("sqlite:///local.db", "sqlite:///local.db"),
    ],
)
def test_normalize_db_url(url, expected):
    assert _normalize_db_url(url) == expected
