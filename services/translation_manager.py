# -*- coding: utf-8 -*-
"""
Translation tables for the wizards (English and Vietnamese).

Lookups fall back to English, then to the key itself; a missing key is
logged once per language.
"""

from typing import Dict, Set, Tuple

from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "en"


class TranslationManager:
    """Singleton holding the active language."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            from app.config import Config
            from services.translations.en import EN_TRANSLATIONS
            from services.translations.vi import VI_TRANSLATIONS

            instance = super().__new__(cls)
            instance._tables: Dict[str, Dict[str, str]] = {
                "en": EN_TRANSLATIONS,
                "vi": VI_TRANSLATIONS,
            }
            instance._missing: Set[Tuple[str, str]] = set()
            instance._language = DEFAULT_LANGUAGE
            instance.set_language(Config.UI_LANGUAGE)
            cls._instance = instance
        return cls._instance

    @property
    def languages(self):
        return sorted(self._tables)

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, lang_code: str):
        code = (lang_code or "").lower()
        if code not in self._tables:
            logger.warning(f"Unsupported UI language '{lang_code}', using {DEFAULT_LANGUAGE}")
            code = DEFAULT_LANGUAGE
        if code != self._language:
            logger.info(f"Language changed to: {code}")
        self._language = code

    def tr(self, key: str, **kwargs) -> str:
        text = self._tables[self._language].get(key)
        if text is None:
            text = self._tables[DEFAULT_LANGUAGE].get(key)
            if (self._language, key) not in self._missing:
                self._missing.add((self._language, key))
                logger.debug(f"Missing translation [{self._language}] {key}")
        if text is None:
            return key
        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            logger.warning(f"Bad placeholders for {key}: {sorted(kwargs)}")
            return text


_translator = TranslationManager()


def tr(key: str, **kwargs) -> str:
    return _translator.tr(key, **kwargs)


def set_language(lang_code: str):
    _translator.set_language(lang_code)


def get_language() -> str:
    return _translator.language
