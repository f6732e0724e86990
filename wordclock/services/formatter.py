from __future__ import annotations

from wordclock.models.state import PhoneticMode, VocabularyEntry, WordDisplaySettings

LEADING = "  "
TRANS_SEPARATOR = " · "
ELLIPSIS = "…"
TRANSLATION_STAGING_MAX = 240


def clamp(text: str, capacity: int | None) -> str:
    """Fit text into a buffer of `capacity` chars, one of them the terminator."""
    if capacity is None:
        return text
    if capacity <= 0:
        return ""
    return text[: capacity - 1]


def truncate_translation(text: str, max_len: int) -> str:
    if not text:
        return ""
    if max_len <= 0 or len(text) <= max_len:
        return text
    return text[: min(max_len, TRANSLATION_STAGING_MAX)] + ELLIPSIS


def _phonetic_parts(entry: VocabularyEntry, mode: PhoneticMode) -> list[str]:
    parts = []
    if mode in (PhoneticMode.UK, PhoneticMode.BOTH) and entry.uk:
        parts.append(f" [{entry.uk}]")
    if mode in (PhoneticMode.US, PhoneticMode.BOTH) and entry.us:
        parts.append(f" [{entry.us}]")
    return parts


def format_entry(entry: VocabularyEntry | None, settings: WordDisplaySettings, capacity: int | None = None) -> str:
    """Render the clock suffix for one entry.

    Example: "  abandon [əˈbændən] · 放弃…"
    """
    if entry is None:
        return ""
    parts = [LEADING, entry.name]
    if settings.show_phonetic:
        parts += _phonetic_parts(entry, PhoneticMode.coerce(settings.phonetic_mode))
    if settings.show_chinese and entry.trans:
        parts.append(TRANS_SEPARATOR)
        parts.append(truncate_translation(entry.trans, settings.chinese_max_len))
    return clamp("".join(parts), capacity)
