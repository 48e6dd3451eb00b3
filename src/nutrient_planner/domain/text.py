"""Multi-language text values."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class Language(StrEnum):
    """Languages text fields may carry."""

    EN = "en"
    VI = "vi"


@dataclass(frozen=True)
class LocalizedText:
    """Text keyed by language code; English is the primary language."""

    values: Mapping[str, str] = field(default_factory=dict)

    def get(self, language: str) -> str:
        """Return the text for a language, or an empty string when missing."""
        return self.values.get(language, "")

    @property
    def english(self) -> str:
        return self.get(Language.EN)

    def display_name(self) -> str:
        """Return English text, falling back to the first available language."""
        if self.english:
            return self.english
        for value in self.values.values():
            return value
        return ""

    def unsupported_languages(self) -> list[str]:
        supported = {language.value for language in Language}
        return [code for code in self.values if code not in supported]

    def is_empty(self) -> bool:
        return not self.values

    def __len__(self) -> int:
        return len(self.values)
