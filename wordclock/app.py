import logging

from kivy.app import App
from kivy.core.window import Window
from wordclock.screens.clock import ClockScreen

log = logging.getLogger(__name__)


class WordClockApp(App):
    def build(self):
        Window.size = (900, 360)
        self.title = "Word Clock"
        self.screen = ClockScreen()
        return self.screen

    def on_stop(self):
        # Wortliste freigeben + Einstellungen final synchron speichern
        try:
            self.screen.stop()
        except OSError as e:
            log.warning("WordsDisplay: shutdown save failed: %s", e)


def main():
    WordClockApp().run()


if __name__ == "__main__":
    main()
