"""Language code → display name table.

Shared by the prompt compiler and every place that shows a language to
the user, so both always agree on the name for a code.
"""

from __future__ import annotations

from types import MappingProxyType

DEFAULT_LANGUAGE_NAME = "English"

LANGUAGE_NAMES = MappingProxyType({
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "pl": "Polish",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
    "tr": "Turkish",
    "sv": "Swedish",
    "da": "Danish",
    "no": "Norwegian",
    "fi": "Finnish",
    "cs": "Czech",
    "hu": "Hungarian",
    "ro": "Romanian",
    "bg": "Bulgarian",
    "hr": "Croatian",
    "sr": "Serbian",
    "sk": "Slovak",
    "et": "Estonian",
    "lv": "Latvian",
    "lt": "Lithuanian",
    "sl": "Slovenian",
    "mt": "Maltese",
    "ga": "Irish",
    "cy": "Welsh",
    "is": "Icelandic",
    "mk": "Macedonian",
    "sq": "Albanian",
    "bs": "Bosnian",
    "eu": "Basque",
    "ca": "Catalan",
    "gl": "Galician",
    "be": "Belarusian",
    "uk": "Ukrainian",
    "el": "Greek",
    "hy": "Armenian",
    "ka": "Georgian",
    "he": "Hebrew",
    "ur": "Urdu",
    "bn": "Bengali",
    "ta": "Tamil",
    "te": "Telugu",
    "ml": "Malayalam",
    "kn": "Kannada",
    "gu": "Gujarati",
    "pa": "Punjabi",
    "mr": "Marathi",
    "ne": "Nepali",
    "si": "Sinhala",
    "my": "Myanmar",
    "km": "Khmer",
    "lo": "Lao",
    "am": "Amharic",
    "sw": "Swahili",
    "zu": "Zulu",
    "af": "Afrikaans",
})


def language_name(code: str, default: str | None = DEFAULT_LANGUAGE_NAME) -> str:
    """Resolve a language code to its display name.

    Args:
        code: Language code such as "en" or "ko".
        default: Name returned for unknown codes. Pass None to get the
            code itself back (useful for display lists).

    Returns:
        Display name for the code.
    """
    name = LANGUAGE_NAMES.get(code)
    if name:
        return name
    return code if default is None else default
