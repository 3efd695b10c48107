"""
Built-in kana rows (gojuon) with Hepburn romaji.

Each row is a group the learner can toggle on for a drill. Characters within a
script are unique, and so are romaji, which keeps the forward and reverse maps
one-to-one.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KanaRow:
    name: str
    kana: tuple[str, ...]
    romaji: tuple[str, ...]


_ROMAJI_ROWS: list[tuple[str, tuple[str, ...]]] = [
    ("a", ("a", "i", "u", "e", "o")),
    ("ka", ("ka", "ki", "ku", "ke", "ko")),
    ("sa", ("sa", "shi", "su", "se", "so")),
    ("ta", ("ta", "chi", "tsu", "te", "to")),
    ("na", ("na", "ni", "nu", "ne", "no")),
    ("ha", ("ha", "hi", "fu", "he", "ho")),
    ("ma", ("ma", "mi", "mu", "me", "mo")),
    ("ya", ("ya", "yu", "yo")),
    ("ra", ("ra", "ri", "ru", "re", "ro")),
    ("wa", ("wa", "wo", "n")),
]

_HIRAGANA = [
    "あいうえお", "かきくけこ", "さしすせそ", "たちつてと", "なにぬねの",
    "はひふへほ", "まみむめも", "やゆよ", "らりるれろ", "わをん",
]

_KATAKANA = [
    "アイウエオ", "カキクケコ", "サシスセソ", "タチツテト", "ナニヌネノ",
    "ハヒフヘホ", "マミムメモ", "ヤユヨ", "ラリルレロ", "ワヲン",
]


def _build(script: list[str]) -> list[KanaRow]:
    return [
        KanaRow(name=name, kana=tuple(chars), romaji=romaji)
        for (name, romaji), chars in zip(_ROMAJI_ROWS, script)
    ]


HIRAGANA_ROWS = _build(_HIRAGANA)
KATAKANA_ROWS = _build(_KATAKANA)

SCRIPTS = {
    "hiragana": HIRAGANA_ROWS,
    "katakana": KATAKANA_ROWS,
}


def is_hiragana(char: str) -> bool:
    return len(char) == 1 and "぀" <= char <= "ゟ"


def is_katakana(char: str) -> bool:
    return len(char) == 1 and "゠" <= char <= "ヿ"


def row_names(script: str = "hiragana") -> list[str]:
    return [row.name for row in SCRIPTS[script]]


def select_pairs(script: str = "hiragana", rows: list[str] | None = None) -> dict[str, str]:
    """
    Kana -> romaji map for the chosen rows, in dataset order.

    Args:
        script: "hiragana" or "katakana"
        rows: Row names (e.g. ["a", "ka"]); None selects every row

    Raises:
        KeyError: for an unknown script or row name
    """
    available = {row.name: row for row in SCRIPTS[script]}
    wanted = rows if rows else list(available)
    pairs: dict[str, str] = {}
    for name in wanted:
        row = available[name]
        pairs.update(zip(row.kana, row.romaji))
    return pairs
