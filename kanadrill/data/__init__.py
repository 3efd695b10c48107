"""Static drill datasets."""

from kanadrill.data.kana import (
    HIRAGANA_ROWS,
    KATAKANA_ROWS,
    is_hiragana,
    is_katakana,
    row_names,
    select_pairs,
)

__all__ = [
    "HIRAGANA_ROWS",
    "KATAKANA_ROWS",
    "is_hiragana",
    "is_katakana",
    "row_names",
    "select_pairs",
]
