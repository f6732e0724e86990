from __future__ import annotations
from dataclasses import fields
from pathlib import Path
import json
import logging
import os

from wordclock.models.state import PhoneticMode, WordDisplaySettings

log = logging.getLogger(__name__)

_BOOL_KEYS = ("display_enabled", "show_phonetic", "show_chinese")
_INT_KEYS = ("switch_interval_sec", "chinese_max_len")


class SettingsStore:
    """JSON persistence for the word display flags (the host's config file)."""

    def __init__(self, settings: WordDisplaySettings, path: Path):
        self.settings = settings
        self.path = Path(path)
        self._save_scheduled = False

    # ---- Snapshot build/apply ----
    def build_snapshot(self) -> dict:
        s = self.settings
        return {
            "display_enabled": bool(s.display_enabled),
            "switch_interval_sec": int(s.switch_interval_sec),
            "show_phonetic": bool(s.show_phonetic),
            "phonetic_mode": PhoneticMode.coerce(s.phonetic_mode).name,
            "show_chinese": bool(s.show_chinese),
            "chinese_max_len": int(s.chinese_max_len),
        }

    def apply_snapshot(self, data: dict):
        if not isinstance(data, dict):
            data = {}
        defaults = WordDisplaySettings()
        s = self.settings
        for k in _BOOL_KEYS:
            v = data.get(k)
            setattr(s, k, v if isinstance(v, bool) else getattr(defaults, k))
        for k in _INT_KEYS:
            v = data.get(k)
            # bool ist auch int
            ok = isinstance(v, int) and not isinstance(v, bool)
            setattr(s, k, v if ok else getattr(defaults, k))
        s.phonetic_mode = PhoneticMode.coerce(data.get("phonetic_mode", defaults.phonetic_mode))

    def reset(self):
        defaults = WordDisplaySettings()
        for f in fields(WordDisplaySettings):
            setattr(self.settings, f.name, getattr(defaults, f.name))

    # ---- IO ----
    def load(self) -> bool:
        if not self.path.exists():
            return False
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning("WordsDisplay: settings file %s unreadable, using defaults: %s", self.path, e)
            self.reset()
            return False
        self.apply_snapshot(data)
        return True

    def save_sync(self):
        data = self.build_snapshot()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_path, self.path)
        self._save_scheduled = False

    def save_async(self):
        from kivy.clock import Clock
        if self._save_scheduled:
            return
        self._save_scheduled = True
        Clock.schedule_once(lambda dt: self._do_save(), 0.2)

    def _do_save(self):
        try:
            self.save_sync()
        except OSError as e:
            self._save_scheduled = False
            log.warning("WordsDisplay: could not save settings to %s: %s", self.path, e)
