# -*- coding: utf-8 -*-
"""Tests for the translation tables and language switching."""

import pytest

from services.translation_manager import get_language, set_language, tr
from services.translations.en import EN_TRANSLATIONS
from services.translations.vi import VI_TRANSLATIONS


@pytest.fixture
def vietnamese():
    set_language("vi")
    yield
    set_language("en")


class TestTranslations:

    def test_placeholders_are_filled(self):
        assert tr("wizard.step_of", current=2, total=5) == "Step 2 of 5"

    def test_unknown_key_returns_key(self):
        assert tr("no.such.key") == "no.such.key"

    def test_missing_placeholder_keeps_template(self):
        assert tr("wizard.step_of", current=2) == EN_TRANSLATIONS["wizard.step_of"]

    def test_switch_language(self, vietnamese):
        assert get_language() == "vi"
        assert tr("wizard.step_of", current=1, total=4) == "Bước 1/4"

    def test_falls_back_to_english(self, vietnamese):
        assert "wizard.title" not in VI_TRANSLATIONS
        assert tr("wizard.title") == EN_TRANSLATIONS["wizard.title"]

    def test_unsupported_language_uses_default(self):
        set_language("fr")
        assert get_language() == "en"

    def test_language_code_is_case_insensitive(self, vietnamese):
        set_language("VI")
        assert get_language() == "vi"

    def test_vietnamese_placeholders_match_english(self):
        for key, text in VI_TRANSLATIONS.items():
            for name in ("{current}", "{total}", "{email}", "{details}", "{min}"):
                assert (name in text) == (name in EN_TRANSLATIONS[key]), key
