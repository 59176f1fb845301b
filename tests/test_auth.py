"""Tests for the admin predicate and input validators."""

import pytest

from afriwiki.auth import is_admin_email
from afriwiki.config import Settings
from afriwiki.utils.validation import is_valid_url, is_valid_uuid


def test_admin_email_case_insensitive(settings):
    assert is_admin_email("admin@afriwiki.org", settings)
    assert is_admin_email("  Admin@AfriWiki.org ", settings)
    assert not is_admin_email("someone@afriwiki.org", settings)


def test_admin_email_empty(settings):
    assert not is_admin_email(None, settings)
    assert not is_admin_email("", settings)


def test_admin_email_unconfigured():
    assert not is_admin_email("admin@afriwiki.org", Settings(admin_email=None))


def test_admin_email_from_environment(monkeypatch):
    monkeypatch.setenv("AFRIWIKI_ADMIN_EMAIL", "ops@afriwiki.org")
    assert is_admin_email("OPS@afriwiki.org")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("5f0c6a4e-1d2b-4c3a-9e8f-0a1b2c3d4e5f", True),
        ("5F0C6A4E-1D2B-4C3A-9E8F-0A1B2C3D4E5F", True),
        ("5f0c6a4e-1d2b-7c3a-9e8f-0a1b2c3d4e5f", False),
        ("not-a-uuid", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_uuid(value, expected):
    assert is_valid_uuid(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://afriwiki.org/e/jane-doe", True),
        ("http://localhost:3000", True),
        ("javascript:alert(1)", False),
        ("ftp://files.example", False),
        ("/e/jane-doe", False),
        ("", False),
    ],
)
def test_is_valid_url(value, expected):
    assert is_valid_url(value) is expected
