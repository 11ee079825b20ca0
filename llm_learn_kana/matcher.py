"""
Answer matching with romanization leniency.

A submission matches when any of these rules holds:
  1. exact match after trimming and case folding
  2. match after ``normalize_romaji`` on both sides
  3. script equivalence (kana prompts only): the input converted to
     hiragana equals the prompt in hiragana, or the input is the prompt
     verbatim
"""

import os
import re
import unicodedata

import jaconv

from .structured import Item

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"

MACRONS = {"ō": "o", "ū": "u", "ā": "a", "ē": "e", "ī": "i"}

# Long-vowel spellings treated as the short vowel.
LONG_VOWELS = [("ou", "o"), ("oo", "o"), ("uu", "u"), ("ei", "e")]

STRIPPED = ("'", "’", "‘", "`", "-", "ー")

LONG_MARK_RE = re.compile(r"([aeiou])[-ー]+")


def normalize_romaji(text: str) -> str:
    result = text.strip().lower()
    for char in STRIPPED:
        result = result.replace(char, "")
    result = "".join(result.split())
    for macron, vowel in MACRONS.items():
        result = result.replace(macron, vowel)
    # repeat until stable: "kouun" -> "koun" -> "kon"
    collapsed = None
    while collapsed != result:
        collapsed = result
        for digraph, vowel in LONG_VOWELS:
            result = result.replace(digraph, vowel)
    return result


def to_hiragana(text: str) -> str:
    """Romaji or katakana to hiragana; hiragana passes through."""
    folded = jaconv.kata2hira(unicodedata.normalize("NFKC", text.strip()))
    return jaconv.alphabet2kana(folded.lower())


def to_romaji(kana: str) -> str:
    """Kana to romaji; the long-vowel mark repeats the preceding vowel (コーヒー -> koohii)."""
    romaji = jaconv.kana2alphabet(jaconv.kata2hira(kana.strip())).lower()
    return LONG_MARK_RE.sub(lambda m: m.group(1) * len(m.group(0)), romaji)


def is_kana(text: str) -> bool:
    return bool(text) and all("぀" <= char <= "ヿ" for char in text)


def is_match(user_input: str, item: Item) -> bool:
    answer = user_input.strip()
    if not answer:
        return False

    folded = answer.casefold()
    for canonical in item.answers:
        if folded == canonical.strip().casefold():
            return True

    normalized = normalize_romaji(answer)
    for canonical in item.answers:
        if normalized == normalize_romaji(canonical):
            return True

    if is_kana(item.prompt):
        if answer == item.prompt:
            return True
        if to_hiragana(answer) == jaconv.kata2hira(item.prompt):
            if DEBUG_MODE:
                print(f"🔍 Script match: '{answer}' ~ '{item.prompt}'")
            return True

    return False
