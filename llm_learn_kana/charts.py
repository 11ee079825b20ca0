from typing import List, Optional, Tuple

from . import data
from .structured import Item

EMPTY_CELL = "—"

Row = Tuple[str, List[Optional[Item]]]


def kana_chart(kana_type: str) -> List[Row]:
    """Gojūon layout: labelled rows of five cells, None where a row has gaps."""
    if kana_type == "hiragana":
        kana = data.HIRAGANA
    elif kana_type == "katakana":
        kana = data.KATAKANA
    else:
        raise ValueError(f"Unknown kana type '{kana_type}'")

    return [
        ("vowels", list(kana[0:5])),
        ("k-row", list(kana[5:10])),
        ("s-row", list(kana[10:15])),
        ("t-row", list(kana[15:20])),
        ("n-row", list(kana[20:25])),
        ("h-row", list(kana[25:30])),
        ("m-row", list(kana[30:35])),
        ("y-row", [kana[35], None, kana[36], None, kana[37]]),
        ("r-row", list(kana[38:43])),
        ("w-row", [kana[43], None, None, None, kana[44]]),
        ("n", [None, None, kana[45], None, None]),
        ("g-row", list(kana[46:51])),
        ("z-row", list(kana[51:56])),
        ("d-row", list(kana[56:61])),
        ("b-row", list(kana[61:66])),
        ("p-row", list(kana[66:71])),
    ]


def render_row(row: Row) -> str:
    label, cells = row
    rendered = [f"{cell.prompt} {cell.primary_answer:<3}" if cell else f"{EMPTY_CELL:<5}" for cell in cells]
    return f"{label:<7}" + "  ".join(rendered)


def number_chart() -> List[Tuple[int, str, str, str]]:
    return [
        (digit, kanji, " / ".join(readings), " / ".join(romaji))
        for digit, kanji, readings, romaji in data.NUMBERS
    ]
