"""
Message translation for user-facing output.

Message catalogues are YAML files in `ui/messages/`, one per language. Keys
are dotted names (e.g., "check.summary") and values use positional `{}`
placeholders.
"""

import os
from pathlib import Path
from typing import Final, Optional

import yaml

from constants import DEFAULT_LANGUAGE, LANG_ENV_VAR, SUPPORTED_LANGUAGES
from core.exceptions import UnsupportedLanguageError

MESSAGES_DIR: Final[Path] = Path(__file__).resolve().parent / "messages"


class Translator:
    """
    Looks up translated messages for one language.

    Attributes:
        lang: The language code ("en" or "ja").
    """

    def __init__(self, lang: str):
        """
        Load the message catalogue for a language.

        Raises:
            UnsupportedLanguageError: If the language has no catalogue.
        """
        if lang not in SUPPORTED_LANGUAGES:
            raise UnsupportedLanguageError(lang)

        with (MESSAGES_DIR / f"{lang}.yml").open("r", encoding="utf-8") as f:
            messages = yaml.safe_load(f) or {}

        self.lang = lang
        self._messages: dict[str, str] = {str(k): str(v) for k, v in messages.items()}

    def t(self, key: str, *args: object) -> str:
        """
        Return the message for a key, with args substituted in order.

        Unknown keys are returned unchanged so a missing translation never
        hides the underlying information.
        """
        message = self._messages.get(key)
        if message is None:
            return key
        if not args:
            return message
        return message.format(*args)


def resolve_language(flag: Optional[str] = None) -> str:
    """Pick the message language: explicit flag, then LINECAP_LANG, then "en"."""
    if flag:
        return flag
    return os.environ.get(LANG_ENV_VAR) or DEFAULT_LANGUAGE
