"""
Word-of-the-moment lookups against the Jisho dictionary API.

A random English seed word is searched and one kana entry is picked from the
results. When the entry's script does not fit the requested type, the lookup
is retried, up to MAX_RETRIES times.
"""

import os
import random
import re
import traceback
from typing import Any, Callable, Dict, List, Optional

import requests

from .structured import WordEntry

DEBUG_MODE = os.getenv("DEBUG", "0") == "1"
JISHO_API_URL = os.getenv("JISHO_API_URL", "https://jisho.org/api/v1/search/words")
REQUEST_TIMEOUT = 10
MAX_RETRIES = 10
MAX_RESULTS = 10

HIRAGANA_RE = re.compile(r"[぀-ゟ]")
KATAKANA_RE = re.compile(r"[゠-ヿ]")

HIRAGANA_SEEDS = [
    "cat", "dog", "water", "fire", "person", "hand", "eye", "foot",
    "eat", "drink", "book", "school", "house", "car", "tree", "flower",
    "rain", "snow", "sun", "moon", "day", "night", "morning", "evening",
    "mother", "father", "child", "friend", "teacher", "student",
    "big", "small", "good", "bad", "hot", "cold", "new", "old",
    "red", "blue", "white", "black", "color", "music", "love", "time",
]

KATAKANA_SEEDS = [
    "coffee", "tea", "beer", "wine", "cake", "ice cream", "chocolate",
    "computer", "internet", "email", "camera", "video", "game", "smartphone",
    "bus", "taxi", "truck", "hotel", "restaurant", "cafe", "menu",
    "pen", "notebook", "desk", "table", "chair", "door", "window",
    "shirt", "pants", "dress", "shoes", "bag", "hat", "watch",
    "America", "France", "Italy", "Canada", "Australia", "India",
    "television", "radio", "news", "sports", "tennis", "soccer", "baseball",
]


class WordLookupError(LookupError):
    """The lookup service was unreachable or returned nothing usable."""


def seeds_for(selection: str) -> List[str]:
    if selection == "hiragana":
        return HIRAGANA_SEEDS
    if selection == "katakana":
        return KATAKANA_SEEDS
    if selection == "mix":
        return HIRAGANA_SEEDS + KATAKANA_SEEDS
    raise ValueError(f"Unknown word type '{selection}'")


def script_type(kana: str) -> str:
    has_hiragana = bool(HIRAGANA_RE.search(kana))
    has_katakana = bool(KATAKANA_RE.search(kana))
    if has_katakana and not has_hiragana:
        return "katakana"
    if has_hiragana and not has_katakana:
        return "hiragana"
    return "mixed"


def _readings(entry: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Japanese forms of an entry that carry a kana reading."""
    forms = entry.get("japanese")
    if not isinstance(forms, list):
        return []
    return [f for f in forms if isinstance(f, dict) and isinstance(f.get("reading"), str) and f["reading"]]


def _meanings(entry: Dict[str, Any]) -> str:
    definitions = []
    senses = entry.get("senses")
    for sense in (senses if isinstance(senses, list) else [])[:2]:
        if not isinstance(sense, dict):
            continue
        defs = sense.get("english_definitions")
        joined = ", ".join(d for d in (defs if isinstance(defs, list) else []) if isinstance(d, str))
        if joined:
            definitions.append(joined)
    return "; ".join(definitions) or "No definition available"


def parse_entry(entry: Dict[str, Any]) -> WordEntry:
    forms = _readings(entry)
    if not forms:
        raise WordLookupError("Entry has no kana reading")
    japanese = forms[0]
    kana = japanese["reading"]
    kanji = japanese.get("word")
    return WordEntry(
        kana=kana,
        kanji=kanji if kanji and kanji != kana else None,
        meanings=_meanings(entry),
        type=script_type(kana),
    )


def _search(keyword: str) -> List[Dict[str, Any]]:
    try:
        response = requests.get(JISHO_API_URL, params={"keyword": keyword}, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as e:
        raise WordLookupError(f"Jisho API request failed: {e}") from e
    if not isinstance(payload, dict):
        raise WordLookupError("Unexpected response from Jisho API")
    results = payload.get("data") or []
    if not isinstance(results, list):
        raise WordLookupError("Unexpected response from Jisho API")
    return [r for r in results if isinstance(r, dict)]


def fetch_word(selection: str = "hiragana", retries: int = 0) -> WordEntry:
    """
    Fetch one random dictionary word of the requested script type.

    Args:
        selection: 'hiragana', 'katakana' or 'mix'
        retries: how many mismatched results have already been rejected

    Raises:
        WordLookupError: if the service fails or has no suitable entry
    """
    keyword = random.choice(seeds_for(selection))
    if DEBUG_MODE:
        print(f"🔍 Looking up '{keyword}' ({selection}, retry {retries})")

    results = _search(keyword)
    if not results:
        raise WordLookupError("No words found")

    candidates = [r for r in results if _readings(r)][:MAX_RESULTS]
    if not candidates:
        raise WordLookupError("No suitable words found")

    word = parse_entry(random.choice(candidates))

    if retries < MAX_RETRIES:
        if selection == "hiragana" and word.type == "katakana":
            return fetch_word(selection, retries + 1)
        if selection == "katakana" and word.type == "hiragana":
            return fetch_word(selection, retries + 1)

    if DEBUG_MODE:
        print(f"✅ Fetched {word.kana} ({word.type}): {word.meanings}")
    return word


class WordPrefetcher:
    """
    Keeps the word on screen plus one preloaded word, so advancing shows the
    next word immediately. Lookup failures become None instead of raising.
    """

    def __init__(self, fetch: Callable[[str], WordEntry] = fetch_word) -> None:
        self.fetch = fetch
        self.selection = "hiragana"
        self.current: Optional[WordEntry] = None
        self.upcoming: Optional[WordEntry] = None

    def _safe_fetch(self) -> Optional[WordEntry]:
        try:
            return self.fetch(self.selection)
        except WordLookupError as e:
            print(f"❌ Error fetching word: {e}")
            if DEBUG_MODE:
                traceback.print_exc()
            return None

    def start(self, selection: str) -> Optional[WordEntry]:
        self.selection = selection
        self.current = self._safe_fetch()
        self.upcoming = self._safe_fetch() if self.current else None
        return self.current

    def advance(self) -> Optional[WordEntry]:
        if self.upcoming is None:
            return self.start(self.selection)
        self.current = self.upcoming
        self.upcoming = self._safe_fetch()
        return self.current
