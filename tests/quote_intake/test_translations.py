"""Tests for quote-intake/app/translations.py."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "quote-intake"))

from app.translations import MESSAGES, normalize_locale, t


def test_both_locales_have_the_same_keys():
    assert set(MESSAGES["en"]) == set(MESSAGES["es"])


def test_normalize_locale():
    assert normalize_locale("es-MX") == "es"
    assert normalize_locale("ES") == "es"
    assert normalize_locale("fr") == "en"
    assert normalize_locale(None) == "en"


def test_lookup_and_format():
    assert t("required", "es") == "Este campo es obligatorio"
    assert "lr-123456" in t("success_body", "es", request_number="lr-123456")


def test_unknown_key_returns_key():
    assert t("no_such_message") == "no_such_message"
