from kivy.uix.button import Button
from kivy.uix.label import Label
from kivy.properties import NumericProperty, StringProperty
from kivy.graphics import Color, RoundedRectangle
from kivy.metrics import sp

class RoundedButton(Button):
    corner_radius = NumericProperty(12)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._fill = tuple(self.background_color)
        self.background_normal = ""
        self.background_down = ""
        self.background_color = (0, 0, 0, 0)
        with self.canvas.before:
            self._bg_color_instr = Color(*self._fill)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[self.corner_radius] * 4)
        self.bind(pos=self._update_canvas, size=self._update_canvas, state=self._update_canvas)

    def on_corner_radius(self, *_):
        self._update_canvas()

    def _update_canvas(self, *args):
        if not hasattr(self, "_bg_rect"):
            return
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size
        self._bg_rect.radius = [self.corner_radius] * 4
        r, g, b, a = self._fill
        if self.state == "down":
            r, g, b = r * 0.8, g * 0.8, b * 0.8
        self._bg_color_instr.rgba = (r, g, b, a)


class ClockLabel(Label):
    """Time of day plus the word suffix, e.g. '14:05:09  abandon [əˈbændən] · 放弃…'."""
    time_text = StringProperty("")
    suffix = StringProperty("")
    time_sp = NumericProperty(64)

    def __init__(self, **kwargs):
        kwargs.setdefault("halign", "center")
        kwargs.setdefault("valign", "middle")
        kwargs.setdefault("markup", True)
        super().__init__(**kwargs)
        self.bind(size=self._sync_text_size)
        self._sync_text_size()

    def _sync_text_size(self, *_):
        self.text_size = (self.width - 12, None)

    def on_time_text(self, *_):
        self._refresh()

    def on_suffix(self, *_):
        self._refresh()

    def on_time_sp(self, *_):
        self._refresh()

    def _refresh(self):
        t = escape_markup(self.time_text)
        s = escape_markup(self.suffix)
        if s:
            self.text = f"[size={int(sp(self.time_sp))}]{t}[/size][size={int(sp(self.time_sp * 0.45))}]{s}[/size]"
        else:
            self.text = f"[size={int(sp(self.time_sp))}]{t}[/size]"


def escape_markup(text: str) -> str:
    # Lautschrift steht in [...], das wäre sonst Kivy-Markup
    return (text or "").replace("&", "&amp;").replace("[", "&bl;").replace("]", "&br;")
