from __future__ import annotations

from typing import Any


# Lowercase "a" has no entry in any of these tables and passes through unchanged.

GERMAN: dict[str, Any] = {
    "substitutions": {
        "A": ["Ä"],
        "o": ["ö"],
        "O": ["Ö"],
        "u": ["ü"],
        "U": ["Ü"],
        "s": ["ß"],
    },
    "filler": ["ä", "ö", "ü", "ß", "Ä", "Ö", "Ü"],
}

POLISH: dict[str, Any] = {
    "substitutions": {
        "A": ["Ą"],
        "c": ["ć"],
        "C": ["Ć"],
        "e": ["ę"],
        "E": ["Ę"],
        "l": ["ł"],
        "L": ["Ł"],
        "n": ["ń"],
        "N": ["Ń"],
        "o": ["ó"],
        "O": ["Ó"],
        "s": ["ś"],
        "S": ["Ś"],
        "z": ["ż", "ź"],
        "Z": ["Ż", "Ź"],
    },
    "filler": list("ąćęłńóśżźĄĆĘŁŃÓŚŻŹ"),
}

RUSSIAN: dict[str, Any] = {
    "substitutions": {
        "A": ["А"],
        "b": ["ь", "в", "б", "ъ"],
        "B": ["Ь", "В", "Б", "Ъ"],
        "c": ["с"],
        "C": ["С"],
        "d": ["д"],
        "D": ["Д"],
        "e": ["е", "ё", "э"],
        "E": ["Е", "Ё", "Э"],
        "f": ["ф"],
        "F": ["Ф"],
        "g": ["г"],
        "G": ["Г"],
        "h": ["н"],
        "H": ["Н"],
        "i": ["и"],
        "I": ["И"],
        "j": ["й"],
        "J": ["Й"],
        "k": ["к"],
        "K": ["К"],
        "l": ["л"],
        "L": ["Л"],
        "m": ["м"],
        "M": ["М"],
        "n": ["п"],
        "N": ["П"],
        "o": ["о"],
        "O": ["О"],
        "p": ["р"],
        "P": ["Р"],
        "q": ["ч"],
        "Q": ["Ч"],
        "r": ["я"],
        "R": ["Я"],
        "s": ["з"],
        "S": ["З"],
        "t": ["т"],
        "T": ["Т"],
        "u": ["ц"],
        "U": ["Ц"],
        "v": ["ч"],
        "V": ["Ч"],
        "w": ["ш", "щ"],
        "W": ["Ш", "Щ"],
        "x": ["х", "ж"],
        "X": ["Х", "Ж"],
        "y": ["у"],
        "Y": ["У"],
        "z": ["з"],
        "Z": ["З"],
    },
    "filler": list("абвгдеёжзийклмнопрстуфхцчшщъыьэюяАБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"),
}

# Registration order is the order `locales` prints.
BUILTIN_PROFILE_DATA: dict[str, dict[str, Any]] = {
    "German": GERMAN,
    "Polish": POLISH,
    "Russian": RUSSIAN,
}
