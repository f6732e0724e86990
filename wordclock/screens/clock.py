import datetime as _dt
import logging
from pathlib import Path
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.popup import Popup
from kivy.uix.label import Label
from kivy.uix.textinput import TextInput
from kivy.uix.spinner import Spinner
from kivy.uix.togglebutton import ToggleButton
from kivy.core.window import Window
from kivy.graphics import Color, Rectangle
from kivy.clock import Clock
from kivy.core.text import LabelBase
from wordclock.models.state import PhoneticMode, WordDisplaySettings
from wordclock.persistence.settings_store import SettingsStore
from wordclock.services.cycler import VocabularyCycler, monotonic_ms
from wordclock.services.resources import FONTS_DIR, find_font, resource_loader
from wordclock.ui.widgets import ClockLabel, RoundedButton as Button

log = logging.getLogger(__name__)

TICK_SECONDS = 0.5
WORD_FONT = "WordFont"
SUFFIX_CAPACITY = 256


class ClockScreen(BoxLayout):
    def __init__(self, settings_path: Path | None = None, **kwargs):
        super().__init__(**kwargs)
        self.orientation = 'vertical'
        self.padding = 20
        self.spacing = 12

        self.theme = {
            "bg": (0.07, 0.08, 0.10, 1),
            "surface": (0.12, 0.14, 0.18, 1),
            "text": (0.95, 0.98, 1, 1),
            "primary": (0.20, 0.52, 0.90, 1),
            "success": (0.25, 0.65, 0.38, 1),
            "closeButton": (0.5, 0.5, 0.5, 1),
        }

        with self.canvas.before:
            Color(*self.theme["bg"])
            self.rect = Rectangle(size=Window.size, pos=self.pos)
        self.bind(size=self._update_rect, pos=self._update_rect)

        self.font_word_name = self._register_word_font()

        # Einstellungen
        self.settings = WordDisplaySettings()
        self.settings_file = settings_path or Path(__file__).resolve().parent.parent / "res" / "word_settings.json"
        self._store = SettingsStore(self.settings, self.settings_file)
        self._store.load()

        self.cycler = VocabularyCycler(self.settings, loader=resource_loader("words_cet4"), clock=monotonic_ms)
        self._last_second = None

        self._build_ui()
        self.refresh(force=True)
        self._tick_ev = Clock.schedule_interval(self._on_tick, TICK_SECONDS)

    # ---- UI ----
    def _build_ui(self):
        font_kw = {"font_name": self.font_word_name} if self.font_word_name else {}
        self.clock_label = ClockLabel(size_hint=(1, 0.8), color=self.theme["text"], **font_kw)
        self.clock_label.bind(on_touch_down=self._on_label_touch)
        self.add_widget(self.clock_label)

        bar = BoxLayout(size_hint=(1, 0.2), spacing=10)
        self.next_button = Button(text="Next word", font_size=24, background_color=self.theme["success"])
        self.next_button.bind(on_release=self.next_word)
        self.settings_button = Button(text="Settings", font_size=24, background_color=self.theme["primary"])
        self.settings_button.bind(on_release=self.open_settings_popup)
        bar.add_widget(self.next_button)
        bar.add_widget(self.settings_button)
        self.add_widget(bar)

    def _register_word_font(self):
        # Roboto hat keine CJK-Glyphen und kaum IPA
        candidates = [Path(__file__).with_name("fonts"), FONTS_DIR]
        p = find_font(candidates)
        if p is None:
            log.warning("WordsDisplay: no CJK/IPA font found, put NotoSansSC-Regular.ttf into %s", FONTS_DIR)
            return None
        try:
            LabelBase.register(name=WORD_FONT, fn_regular=str(p))
        except OSError as e:
            log.warning("WordsDisplay: font registration failed for %s: %s", p, e)
            return None
        log.info("WordsDisplay: font loaded: %s", p)
        return WORD_FONT

    def _update_rect(self, instance, value):
        self.rect.pos = instance.pos
        self.rect.size = instance.size

    def _on_label_touch(self, label, touch):
        if label.collide_point(*touch.pos) and self.settings.display_enabled:
            self.next_word()
            return True
        return False

    # ---- Tick/Refresh ----
    def _on_tick(self, dt):
        changed = self.cycler.tick(monotonic_ms())
        self.refresh(force=changed)

    def refresh(self, force: bool = False):
        now = _dt.datetime.now()
        if not force and now.second == self._last_second:
            return
        self._last_second = now.second
        self.clock_label.time_text = now.strftime("%H:%M:%S")
        self.clock_label.suffix = self.cycler.format_suffix(SUFFIX_CAPACITY)

    def next_word(self, *_):
        if self.cycler.next():
            self.refresh(force=True)

    def stop(self):
        if getattr(self, "_tick_ev", None) is not None:
            self._tick_ev.cancel()
            self._tick_ev = None
        self.cycler.shutdown()
        self._store.save_sync()

    # ---- Settings popup ----
    def open_settings_popup(self, *_):
        s = self.settings
        root = BoxLayout(orientation='vertical', spacing=8, padding=12)

        def toggle(text, attr):
            btn = ToggleButton(text=text, font_size=22, state="down" if getattr(s, attr) else "normal")
            def _on_state(inst, val):
                setattr(s, attr, val == "down")
                self._settings_changed()
            btn.bind(state=_on_state)
            root.add_widget(btn)
            return btn

        toggle("Show word", "display_enabled")
        toggle("Show phonetic", "show_phonetic")
        toggle("Show translation", "show_chinese")

        mode_bar = BoxLayout(spacing=8)
        mode_bar.add_widget(Label(text="Phonetic:", font_size=22, color=self.theme["text"]))
        mode_spin = Spinner(text=PhoneticMode.coerce(s.phonetic_mode).name, values=[m.name for m in PhoneticMode])
        def _on_mode(inst, val):
            s.phonetic_mode = PhoneticMode.coerce(val)
            self._settings_changed()
        mode_spin.bind(text=_on_mode)
        mode_bar.add_widget(mode_spin)
        root.add_widget(mode_bar)

        def int_field(label, attr):
            bar = BoxLayout(spacing=8)
            bar.add_widget(Label(text=label, font_size=22, color=self.theme["text"]))
            ti = TextInput(text=str(getattr(s, attr)), multiline=False, input_filter="int", font_size=22)
            def _commit(inst, *_):
                try:
                    setattr(s, attr, int(inst.text))
                except ValueError:
                    inst.text = str(getattr(s, attr))
                    return
                self._settings_changed()
            ti.bind(on_text_validate=_commit, focus=lambda inst, f: None if f else _commit(inst))
            bar.add_widget(ti)
            root.add_widget(bar)

        int_field("Switch every (s, 0 = manual):", "switch_interval_sec")
        int_field("Translation max chars (0 = all):", "chinese_max_len")

        close_btn = Button(text="Close", font_size=24, background_color=self.theme["closeButton"])
        root.add_widget(close_btn)
        popup = Popup(title="Word display", content=root, size_hint=(0.9, 0.9), auto_dismiss=True)
        close_btn.bind(on_release=lambda *_: popup.dismiss())
        popup.open()

    def _settings_changed(self):
        self._store.save_async()
        self.refresh(force=True)
