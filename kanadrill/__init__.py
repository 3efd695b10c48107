"""kanadrill - adaptive kana/kanji drill core with a terminal front end."""

__version__ = "0.3.0"
