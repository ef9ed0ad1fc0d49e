"""
Supported languages and helpers.

Standards:
- ISO 639-1: 2-letter language codes (en, zh, es)
- BCP 47: Language + Region codes (zh-CN, pt-BR)

Language Directory Naming Convention:
The language code determines the name of a target-language directory.
For example:
- Language.FRENCH ('fr') maps to directory '<project root>/fr'
- Language.CHINESE_SIMPLIFIED ('zh-CN') maps to directory '<project root>/zh-CN'
The get_language_dir_name() function handles this mapping.
"""

from enum import Enum
from typing import Dict, Union

from translate_dir.errors import UnsupportedLanguageError


class Language(str, Enum):
    """Closed set of languages a project can be written or translated in."""

    ARABIC = 'ar'
    BENGALI = 'bn'
    BULGARIAN = 'bg'
    CHINESE_SIMPLIFIED = 'zh-CN'
    CHINESE_TRADITIONAL = 'zh-TW'
    CZECH = 'cs'
    DANISH = 'da'
    DUTCH = 'nl'
    ENGLISH = 'en'
    FINNISH = 'fi'
    FRENCH = 'fr'
    GERMAN = 'de'
    GREEK = 'el'
    HEBREW = 'he'
    HINDI = 'hi'
    HUNGARIAN = 'hu'
    INDONESIAN = 'id'
    ITALIAN = 'it'
    JAPANESE = 'ja'
    KOREAN = 'ko'
    NORWEGIAN = 'no'
    PERSIAN = 'fa'
    POLISH = 'pl'
    PORTUGUESE = 'pt'
    PORTUGUESE_BRAZIL = 'pt-BR'
    ROMANIAN = 'ro'
    RUSSIAN = 'ru'
    SPANISH = 'es'
    SWEDISH = 'sv'
    THAI = 'th'
    TURKISH = 'tr'
    UKRAINIAN = 'uk'
    VIETNAMESE = 'vi'

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return LANGUAGE_NAMES[self]

    def __str__(self) -> str:
        return self.value


# Exhaustive: every Language member must have a name (checked at import)
LANGUAGE_NAMES: Dict[Language, str] = {
    Language.ARABIC: 'Arabic',
    Language.BENGALI: 'Bengali',
    Language.BULGARIAN: 'Bulgarian',
    Language.CHINESE_SIMPLIFIED: 'Chinese (Simplified)',
    Language.CHINESE_TRADITIONAL: 'Chinese (Traditional)',
    Language.CZECH: 'Czech',
    Language.DANISH: 'Danish',
    Language.DUTCH: 'Dutch',
    Language.ENGLISH: 'English',
    Language.FINNISH: 'Finnish',
    Language.FRENCH: 'French',
    Language.GERMAN: 'German',
    Language.GREEK: 'Greek',
    Language.HEBREW: 'Hebrew',
    Language.HINDI: 'Hindi',
    Language.HUNGARIAN: 'Hungarian',
    Language.INDONESIAN: 'Indonesian',
    Language.ITALIAN: 'Italian',
    Language.JAPANESE: 'Japanese',
    Language.KOREAN: 'Korean',
    Language.NORWEGIAN: 'Norwegian',
    Language.PERSIAN: 'Persian',
    Language.POLISH: 'Polish',
    Language.PORTUGUESE: 'Portuguese',
    Language.PORTUGUESE_BRAZIL: 'Portuguese (Brazil)',
    Language.ROMANIAN: 'Romanian',
    Language.RUSSIAN: 'Russian',
    Language.SPANISH: 'Spanish',
    Language.SWEDISH: 'Swedish',
    Language.THAI: 'Thai',
    Language.TURKISH: 'Turkish',
    Language.UKRAINIAN: 'Ukrainian',
    Language.VIETNAMESE: 'Vietnamese',
}

_missing = set(Language) - set(LANGUAGE_NAMES)
if _missing:
    raise RuntimeError(f"Languages without a display name: {sorted(m.value for m in _missing)}")


def parse_language(value: Union[str, Language]) -> Language:
    """
    Resolve a language from its code, member name or display name.

    Lookups are case-insensitive; '_' and '-' are interchangeable in codes.

    Examples:
        >>> parse_language('fr')
        <Language.FRENCH: 'fr'>
        >>> parse_language('zh_cn')
        <Language.CHINESE_SIMPLIFIED: 'zh-CN'>
        >>> parse_language('German')
        <Language.GERMAN: 'de'>

    Raises:
        UnsupportedLanguageError: If the value names no supported language.
    """
    if isinstance(value, Language):
        return value
    if not isinstance(value, str) or not value.strip():
        raise UnsupportedLanguageError(
            f"Unsupported language: {value!r}",
            details={"language": value},
        )

    needle = value.strip().lower()
    for language in Language:
        if needle in (
            language.value.lower(),
            language.value.lower().replace('-', '_'),
            language.name.lower(),
            LANGUAGE_NAMES[language].lower(),
        ):
            return language

    raise UnsupportedLanguageError(
        f"Unsupported language: {value!r}",
        details={"language": value, "supported": [lang.value for lang in Language]},
    )


def get_language_dir_name(language: Language) -> str:
    """
    Get the directory name used for a target language.

    Examples:
        >>> get_language_dir_name(Language.ENGLISH)
        'en'
        >>> get_language_dir_name(Language.CHINESE_SIMPLIFIED)
        'zh-CN'
    """
    return language.value


def get_all_languages() -> Dict[str, str]:
    """
    Get all supported languages.

    Returns:
        Dict mapping code to language name
    """
    return {language.value: LANGUAGE_NAMES[language] for language in Language}
