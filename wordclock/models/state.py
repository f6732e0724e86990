from __future__ import annotations
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

NO_INDEX = -1


@dataclass(frozen=True, slots=True)
class VocabularyEntry:
    name: str
    uk: str = ""
    us: str = ""
    trans: str = ""


class PhoneticMode(IntEnum):
    UK = 0
    US = 1
    BOTH = 2

    @classmethod
    def coerce(cls, value) -> "PhoneticMode":
        # config.ini speichert 0/1/2, JSON auch "UK"/"US"/"BOTH"
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                return cls.UK
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.UK


@dataclass(slots=True)
class WordDisplaySettings:
    display_enabled: bool = False
    switch_interval_sec: int = 20     # 0 = nur manuell
    show_phonetic: bool = True
    phonetic_mode: PhoneticMode = PhoneticMode.UK
    show_chinese: bool = True
    chinese_max_len: int = 10         # <= 0 = unbegrenzt


@dataclass(slots=True)
class CursorState:
    index: int = NO_INDEX
    next_switch_tick: int = 0
    initialized: bool = False

    def reset(self):
        self.index = NO_INDEX
        self.next_switch_tick = 0
        self.initialized = False


@dataclass(slots=True)
class VocabularyState:
    words: List[VocabularyEntry] = field(default_factory=list)
    cursor: CursorState = field(default_factory=CursorState)

    # Ladeversuche (nicht persistiert)
    failed_attempts: int = 0

    @property
    def count(self) -> int:
        return len(self.words)

    def current(self) -> Optional[VocabularyEntry]:
        i = self.cursor.index
        if not self.words or i < 0 or i >= len(self.words):
            return None
        return self.words[i]
