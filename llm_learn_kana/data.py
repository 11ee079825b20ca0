"""
Static reference data: kana tables, numerals and local vocabulary lists.

Pools built here are read-only and shared by every practice session.
"""

import random
from typing import Dict, List, Tuple

from .structured import Item, Pool

KANA_TYPES = ("hiragana", "katakana")
SELECTIONS = ("hiragana", "katakana", "mix")

# Chart order: vowels, k/s/t/n/h/m/y/r/w rows, ん, then dakuten and handakuten rows.
ROMAJI_ORDER = [
    "a", "i", "u", "e", "o",
    "ka", "ki", "ku", "ke", "ko",
    "sa", "shi", "su", "se", "so",
    "ta", "chi", "tsu", "te", "to",
    "na", "ni", "nu", "ne", "no",
    "ha", "hi", "fu", "he", "ho",
    "ma", "mi", "mu", "me", "mo",
    "ya", "yu", "yo",
    "ra", "ri", "ru", "re", "ro",
    "wa", "wo",
    "n",
    "ga", "gi", "gu", "ge", "go",
    "za", "ji", "zu", "ze", "zo",
    "da", "ji", "zu", "de", "do",
    "ba", "bi", "bu", "be", "bo",
    "pa", "pi", "pu", "pe", "po",
]

HIRAGANA_GLYPHS = (
    "あいうえお" "かきくけこ" "さしすせそ" "たちつてと" "なにぬねの"
    "はひふへほ" "まみむめも" "やゆよ" "らりるれろ" "わを" "ん"
    "がぎぐげご" "ざじずぜぞ" "だぢづでど" "ばびぶべぼ" "ぱぴぷぺぽ"
)

KATAKANA_GLYPHS = (
    "アイウエオ" "カキクケコ" "サシスセソ" "タチツテト" "ナニヌネノ"
    "ハヒフヘホ" "マミムメモ" "ヤユヨ" "ラリルレロ" "ワヲ" "ン"
    "ガギグゲゴ" "ザジズゼゾ" "ダヂヅデド" "バビブベボ" "パピプペポ"
)


def _kana_items(glyphs: str, kana_type: str) -> Tuple[Item, ...]:
    return tuple(
        Item(identity=f"{kana_type}:{glyph}", prompt=glyph, answers=(romaji,), category=kana_type)
        for glyph, romaji in zip(glyphs, ROMAJI_ORDER)
    )


HIRAGANA = _kana_items(HIRAGANA_GLYPHS, "hiragana")
KATAKANA = _kana_items(KATAKANA_GLYPHS, "katakana")

# digit, kanji, kana readings, romaji readings
NUMBERS: List[Tuple[int, str, Tuple[str, ...], Tuple[str, ...]]] = [
    (1, "一", ("いち",), ("ichi",)),
    (2, "二", ("に",), ("ni",)),
    (3, "三", ("さん",), ("san",)),
    (4, "四", ("よん", "し"), ("yon", "shi")),
    (5, "五", ("ご",), ("go",)),
    (6, "六", ("ろく",), ("roku",)),
    (7, "七", ("なな", "しち"), ("nana", "shichi")),
    (8, "八", ("はち",), ("hachi",)),
    (9, "九", ("きゅう", "く"), ("kyuu", "ku")),
    (10, "十", ("じゅう",), ("juu",)),
]

HIRAGANA_WORDS: List[Tuple[str, str, str]] = [
    ("ねこ", "neko", "cat"),
    ("いぬ", "inu", "dog"),
    ("みず", "mizu", "water"),
    ("ひ", "hi", "fire"),
    ("ひと", "hito", "person"),
    ("て", "te", "hand"),
    ("め", "me", "eye"),
    ("あし", "ashi", "foot, leg"),
    ("たべる", "taberu", "to eat"),
    ("のむ", "nomu", "to drink"),
    ("ほん", "hon", "book"),
    ("がっこう", "gakkou", "school"),
    ("いえ", "ie", "house"),
    ("くるま", "kuruma", "car"),
    ("き", "ki", "tree"),
    ("はな", "hana", "flower"),
    ("あめ", "ame", "rain"),
    ("ゆき", "yuki", "snow"),
    ("つき", "tsuki", "moon"),
    ("よる", "yoru", "night"),
    ("あさ", "asa", "morning"),
    ("ゆうがた", "yuugata", "evening"),
    ("はは", "haha", "mother"),
    ("ちち", "chichi", "father"),
    ("こども", "kodomo", "child"),
    ("ともだち", "tomodachi", "friend"),
    ("せんせい", "sensei", "teacher"),
    ("がくせい", "gakusei", "student"),
    ("おおきい", "ookii", "big"),
    ("ちいさい", "chiisai", "small"),
    ("あつい", "atsui", "hot"),
    ("さむい", "samui", "cold"),
    ("あたらしい", "atarashii", "new"),
    ("ふるい", "furui", "old"),
    ("あか", "aka", "red"),
    ("あお", "ao", "blue"),
    ("しろ", "shiro", "white"),
    ("くろ", "kuro", "black"),
    ("いろ", "iro", "color"),
    ("おんがく", "ongaku", "music"),
    ("じかん", "jikan", "time"),
    ("さかな", "sakana", "fish"),
    ("やま", "yama", "mountain"),
    ("かわ", "kawa", "river"),
    ("そら", "sora", "sky"),
]

KATAKANA_WORDS: List[Tuple[str, str, str]] = [
    ("コーヒー", "koohii", "coffee"),
    ("ビール", "biiru", "beer"),
    ("ワイン", "wain", "wine"),
    ("ケーキ", "keeki", "cake"),
    ("チョコレート", "chokoreeto", "chocolate"),
    ("コンピュータ", "konpyuuta", "computer"),
    ("メール", "meeru", "email"),
    ("カメラ", "kamera", "camera"),
    ("ビデオ", "bideo", "video"),
    ("ゲーム", "geemu", "game"),
    ("バス", "basu", "bus"),
    ("タクシー", "takushii", "taxi"),
    ("トラック", "torakku", "truck"),
    ("ホテル", "hoteru", "hotel"),
    ("レストラン", "resutoran", "restaurant"),
    ("カフェ", "kafe", "cafe"),
    ("メニュー", "menyuu", "menu"),
    ("ペン", "pen", "pen"),
    ("ノート", "nooto", "notebook"),
    ("テーブル", "teeburu", "table"),
    ("ドア", "doa", "door"),
    ("シャツ", "shatsu", "shirt"),
    ("ズボン", "zubon", "trousers"),
    ("ドレス", "doresu", "dress"),
    ("バッグ", "baggu", "bag"),
    ("アメリカ", "amerika", "America"),
    ("フランス", "furansu", "France"),
    ("イタリア", "itaria", "Italy"),
    ("カナダ", "kanada", "Canada"),
    ("インド", "indo", "India"),
    ("テレビ", "terebi", "television"),
    ("ラジオ", "rajio", "radio"),
    ("ニュース", "nyuusu", "news"),
    ("スポーツ", "supootsu", "sports"),
    ("テニス", "tenisu", "tennis"),
    ("サッカー", "sakkaa", "soccer"),
    ("ピアノ", "piano", "piano"),
    ("パン", "pan", "bread"),
    ("トマト", "tomato", "tomato"),
    ("ミルク", "miruku", "milk"),
]


def _word_items(words: List[Tuple[str, str, str]], kana_type: str) -> Tuple[Item, ...]:
    return tuple(
        Item(identity=f"word:{kana}", prompt=kana, answers=(romaji,), category=kana_type, meaning=meaning)
        for kana, romaji, meaning in words
    )


def _types_for(selection: str) -> Tuple[str, ...]:
    if selection == "mix":
        return KANA_TYPES
    if selection in KANA_TYPES:
        return (selection,)
    raise ValueError(f"Unknown selection '{selection}' (expected one of {', '.join(SELECTIONS)})")


KANA_POOL = Pool(HIRAGANA + KATAKANA)
WORD_POOL = Pool(_word_items(HIRAGANA_WORDS, "hiragana") + _word_items(KATAKANA_WORDS, "katakana"))
NUMBER_POOL = Pool(tuple(
    Item(
        identity=f"number:{digit}",
        prompt=str(digit),
        answers=romaji,
        category="number",
        meaning=kanji,
    )
    for digit, kanji, _readings, romaji in NUMBERS
))
NUMBER_DETAILS: Dict[str, Tuple[int, str, Tuple[str, ...], Tuple[str, ...]]] = {
    f"number:{row[0]}": row for row in NUMBERS
}


def kana_pool(selection: str) -> Pool:
    """Kana pool for 'hiragana', 'katakana' or 'mix'."""
    return KANA_POOL.by_category(*_types_for(selection))


def word_pool(selection: str) -> Pool:
    """Local vocabulary pool for 'hiragana', 'katakana' or 'mix'."""
    return WORD_POOL.by_category(*_types_for(selection))


def number_pool() -> Pool:
    return NUMBER_POOL


def get_random_kana(types: List[str]) -> Item:
    pool = KANA_POOL.by_category(*types)
    return random.choice(pool.items)


def get_random_word(selection: str) -> Item:
    return random.choice(word_pool(selection).items)
