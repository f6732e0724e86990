from __future__ import annotations
import logging
import time
from typing import Callable, Optional

from wordclock.models.state import NO_INDEX, VocabularyEntry, VocabularyState, WordDisplaySettings
from wordclock.services.formatter import format_entry
from wordclock.services.parser import WordsError, parse_tsv
from wordclock.services.resources import resource_loader

log = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class VocabularyCycler:
    """Word-of-the-moment cycler for the clock suffix.

    The host owns one instance, calls tick() from its update loop and
    format_suffix() when it redraws. Everything runs on the host thread.

    A failed init() does not mark the cycler initialized, so the lazy init
    in tick()/next()/format_suffix() retries on every call until a load
    succeeds. Only the first failure of a streak is logged as a warning.
    """

    def __init__(
        self,
        settings: Optional[WordDisplaySettings] = None,
        loader: Optional[Callable[[], bytes | str | None]] = None,
        clock: Callable[[], int] = monotonic_ms,
        seed_source: Optional[Callable[[], int]] = None,
    ):
        self.settings = settings if settings is not None else WordDisplaySettings()
        self._loader = loader if loader is not None else resource_loader()
        self._clock = clock
        self._seed_source = seed_source if seed_source is not None else clock
        self.state = VocabularyState()

    # ---- Lifecycle ----
    @property
    def initialized(self) -> bool:
        return self.state.cursor.initialized

    @property
    def count(self) -> int:
        return self.state.count

    @property
    def index(self) -> int:
        return self.state.cursor.index

    @property
    def current(self) -> Optional[VocabularyEntry]:
        return self.state.current()

    def init(self) -> bool:
        st = self.state
        if st.cursor.initialized:
            return True
        try:
            words = parse_tsv(self._loader())
        except (WordsError, OSError) as e:
            self._init_failed(e)
            return False

        st.words = words
        st.failed_attempts = 0
        now = self._clock()
        st.cursor.index = self._seed_source() % len(words)
        st.cursor.next_switch_tick = now + self._interval_ms()
        st.cursor.initialized = True
        log.info("WordsDisplay initialized with %d words", len(words))
        return True

    def _init_failed(self, err: Exception):
        st = self.state
        st.failed_attempts += 1
        if st.failed_attempts == 1:
            log.warning("WordsDisplay: failed to load vocabulary: %s", err)
        else:
            log.debug("WordsDisplay: load retry %d failed: %s", st.failed_attempts, err)

    def shutdown(self):
        self.state.words = []
        self.state.cursor.reset()
        self.state.failed_attempts = 0

    # ---- Cursor ----
    def _interval_ms(self) -> int:
        sec = int(self.settings.switch_interval_sec or 0)
        return sec * 1000 if sec > 0 else 0

    def _ready(self) -> bool:
        if not self.state.cursor.initialized:
            self.init()
        return self.state.count > 0

    def _set_index(self, idx: int) -> bool:
        n = self.state.count
        if n <= 0:
            return False
        if idx < 0 or idx >= n:
            idx = 0
        if self.state.cursor.index != idx:
            self.state.cursor.index = idx
            return True
        return False

    def next(self) -> bool:
        if not self._ready():
            return False
        changed = self._set_index(self.state.cursor.index + 1)
        if self._interval_ms() > 0:
            self.state.cursor.next_switch_tick = self._clock() + self._interval_ms()
        return changed

    def tick(self, now: int) -> bool:
        if not self.settings.display_enabled:
            return False
        if not self._ready():
            return False
        interval = self._interval_ms()
        if interval <= 0:
            return False
        cur = self.state.cursor
        if now < cur.next_switch_tick:
            return False
        changed = self._set_index(cur.index + 1)
        cur.next_switch_tick = now + interval
        return changed

    # ---- Formatting ----
    def format_suffix(self, capacity: Optional[int] = None) -> str:
        if not self.settings.display_enabled:
            return ""
        if not self._ready() or self.state.cursor.index == NO_INDEX:
            return ""
        return format_entry(self.state.current(), self.settings, capacity)
