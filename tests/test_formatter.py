"""
Tests for the clock suffix formatter.
"""

import pytest

from wordclock.models.state import PhoneticMode, VocabularyEntry, WordDisplaySettings
from wordclock.services.formatter import (
    ELLIPSIS,
    TRANSLATION_STAGING_MAX,
    clamp,
    format_entry,
    truncate_translation,
)

ABANDON = VocabularyEntry(name="abandon", uk="əˈbændən", us="əˈbɑːndən", trans="放弃，抛弃，放纵")


@pytest.fixture
def opts():
    return WordDisplaySettings(display_enabled=True, show_phonetic=True,
                               phonetic_mode=PhoneticMode.UK, show_chinese=True,
                               chinese_max_len=4)


class TestFormatEntry:

    def test_uk_phonetic_and_truncated_translation(self, opts):
        entry = VocabularyEntry("abandon", "əˈbændən", "əˈbændən", "放弃，抛弃，放纵")
        assert format_entry(entry, opts) == "  abandon [əˈbændən] · 放弃，抛…"

    def test_us_phonetic_only(self, opts):
        opts.phonetic_mode = PhoneticMode.US
        assert format_entry(ABANDON, opts) == "  abandon [əˈbɑːndən] · 放弃，抛…"

    def test_both_phonetics_uk_first(self, opts):
        opts.phonetic_mode = PhoneticMode.BOTH
        assert format_entry(ABANDON, opts).startswith("  abandon [əˈbændən] [əˈbɑːndən] · ")

    def test_both_skips_empty_transcription(self, opts):
        opts.phonetic_mode = PhoneticMode.BOTH
        entry = VocabularyEntry("acid", "", "ˈæsɪd", "")
        assert format_entry(entry, opts) == "  acid [ˈæsɪd]"

    def test_uk_mode_with_empty_uk_omits_brackets(self, opts):
        entry = VocabularyEntry("acid", "", "ˈæsɪd", "酸")
        assert format_entry(entry, opts) == "  acid · 酸"

    def test_phonetic_hidden(self, opts):
        opts.show_phonetic = False
        assert format_entry(ABANDON, opts) == "  abandon · 放弃，抛…"

    def test_translation_hidden(self, opts):
        opts.show_chinese = False
        assert format_entry(ABANDON, opts) == "  abandon [əˈbændən]"

    def test_empty_translation_has_no_separator(self, opts):
        entry = VocabularyEntry("solo")
        assert format_entry(entry, opts) == "  solo"

    def test_unlimited_translation(self, opts):
        opts.chinese_max_len = 0
        assert format_entry(ABANDON, opts).endswith(" · 放弃，抛弃，放纵")

    def test_no_entry(self, opts):
        assert format_entry(None, opts) == ""

    def test_int_phonetic_mode_accepted(self, opts):
        opts.phonetic_mode = 1
        assert "[əˈbɑːndən]" in format_entry(ABANDON, opts)


class TestTruncateTranslation:

    def test_short_text_untouched(self):
        assert truncate_translation("放弃", 4) == "放弃"

    def test_exact_length_untouched(self):
        assert truncate_translation("放弃抛弃", 4) == "放弃抛弃"

    def test_truncated_with_ellipsis(self):
        assert truncate_translation("放弃抛弃", 3) == "放弃抛" + ELLIPSIS

    @pytest.mark.parametrize("max_len", [0, -3])
    def test_non_positive_means_unlimited(self, max_len):
        text = "字" * 500
        assert truncate_translation(text, max_len) == text

    def test_staging_cap(self):
        text = "字" * 300
        out = truncate_translation(text, 260)
        assert out == "字" * TRANSLATION_STAGING_MAX + ELLIPSIS


class TestCapacity:

    def test_clamp_reserves_terminator_slot(self):
        assert clamp("abcdef", 4) == "abc"

    @pytest.mark.parametrize("capacity", [0, 1, -5])
    def test_tiny_capacity(self, capacity):
        assert clamp("abc", capacity) == ""

    def test_none_is_unbounded(self):
        assert clamp("abc", None) == "abc"

    def test_format_never_exceeds_capacity(self, opts):
        full = format_entry(ABANDON, opts)
        for capacity in range(0, len(full) + 3):
            out = format_entry(ABANDON, opts, capacity)
            assert len(out) <= max(capacity - 1, 0)
            assert full.startswith(out)
        assert format_entry(ABANDON, opts, len(full) + 1) == full
