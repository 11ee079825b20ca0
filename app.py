#!/usr/bin/env python3
"""
Kana Learning App - Flask Web Application
JSON endpoints driving the kana, word, numeral and writing practice sessions.
All practice state lives in memory and is lost on restart.
"""

import os
import time
import uuid
import traceback
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, request, session

from llm_learn_kana import charts, data
from llm_learn_kana.lookup import WordPrefetcher
from llm_learn_kana.numbers import NumbersQuiz
from llm_learn_kana.session import PracticeSession, WordSession
from llm_learn_kana.writing import WritingPractice

DEBUG = os.environ.get("DEBUG", "0") == "1"
WORD_SOURCE = os.environ.get("WORD_SOURCE", "local")
SESSION_IDLE_SECONDS = float(os.environ.get("SESSION_IDLE_SECONDS", "3600"))

SECTIONS = ["kana", "words", "numbers", "writing", "charts"]


class SessionStore:
    """
    Practice sessions per browser, keyed by an id kept in the cookie session.

    Clients not seen for ``idle_seconds`` are evicted on the next lookup.
    """

    def __init__(self, idle_seconds: float = SESSION_IDLE_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.idle_seconds = idle_seconds
        self.clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._last_seen: Dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def for_client(self, client_id: str) -> Dict[str, Any]:
        now = self.clock()
        self.evict_idle(now)
        self._last_seen[client_id] = now
        return self._sessions.setdefault(client_id, {})

    def evict_idle(self, now: Optional[float] = None) -> int:
        current = self.clock() if now is None else now
        idle = [cid for cid, seen in self._last_seen.items() if current - seen > self.idle_seconds]
        for client_id in idle:
            self.discard(client_id)
        if idle and DEBUG:
            print(f"🧹 Evicted {len(idle)} idle client(s)")
        return len(idle)

    def discard(self, client_id: str, section: Optional[str] = None) -> None:
        if section is None:
            self._sessions.pop(client_id, None)
            self._last_seen.pop(client_id, None)
        else:
            self._sessions.get(client_id, {}).pop(section, None)

    def clear(self) -> None:
        self._sessions.clear()
        self._last_seen.clear()


def _new_word_session(selection: str = "hiragana") -> WordSession:
    fetcher = WordPrefetcher() if WORD_SOURCE == "jisho" else None
    return WordSession(selection, fetcher=fetcher)


FACTORIES: Dict[str, Callable[[], Any]] = {
    "kana": PracticeSession,
    "words": _new_word_session,
    "numbers": NumbersQuiz,
    "writing": WritingPractice,
}

app = Flask(__name__)
app.secret_key = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
store = SessionStore()


@app.before_request
def ensure_client_id() -> None:
    """Ensure every browser has a practice-session id."""
    if 'client_id' not in session:
        session['client_id'] = uuid.uuid4().hex


def get_practice(section: str) -> Any:
    """Fetch (or create) the section's session and fire any due auto-advance."""
    sessions = store.for_client(session['client_id'])
    if section not in sessions:
        sessions[section] = FACTORIES[section]()
        if DEBUG:
            print(f"✅ New {section} session for {session['client_id'][:8]}")
    practice = sessions[section]
    if hasattr(practice, "tick"):
        practice.tick()
    return practice


def error(message: str) -> Any:
    return jsonify({'status': 'error', 'message': message})


def run_action(section: str, actions: Dict[str, Callable[[Any, Dict[str, Any]], Any]]) -> Any:
    try:
        payload = request.get_json(silent=True) or {}
        name = payload.get('action')
        if name not in actions:
            return error(f"Unknown action: {name}")
        practice = get_practice(section)
        result = actions[name](practice, payload)
        return jsonify({'status': 'success', 'result': result, 'state': practice.snapshot()})
    except ValueError as e:
        return error(str(e))
    except Exception as e:
        if DEBUG:
            print(f"❌ Error in {section} action: {e}")
            traceback.print_exc()
        return error(f"Error: {str(e)}")


KANA_ACTIONS: Dict[str, Callable[[Any, Dict[str, Any]], Any]] = {
    'quiz': lambda s, p: s.enter_quiz(),
    'practice_all': lambda s, p: s.enter_free_practice(),
    'practice_selected': lambda s, p: s.enter_curated_selection(),
    'toggle': lambda s, p: s.toggle_selection(p.get('identity', '')),
    'clear_selection': lambda s, p: s.clear_selection(),
    'start_practice': lambda s, p: s.start_curated(),
    'submit': lambda s, p: s.submit(p.get('answer', '')),
    'skip': lambda s, p: s.skip(),
    'next': lambda s, p: s.next(),
    'back': lambda s, p: s.back(),
    'start_over': lambda s, p: s.start_over(),
    'practice_mistakes': lambda s, p: s.practice_mistakes(),
    'type': lambda s, p: s.set_selection(p.get('selection', '')),
}

WORD_ACTIONS: Dict[str, Callable[[Any, Dict[str, Any]], Any]] = {
    'submit': lambda s, p: s.submit(p.get('answer', '')),
    'skip': lambda s, p: s.skip(),
    'next': lambda s, p: s.next(),
    'retry': lambda s, p: s.retry(),
    'type': lambda s, p: s.set_selection(p.get('selection', '')),
}

NUMBER_ACTIONS: Dict[str, Callable[[Any, Dict[str, Any]], Any]] = {
    'chart': lambda s, p: s.show_chart(),
    'setup': lambda s, p: s.open_setup(),
    'toggle_category': lambda s, p: s.toggle_category(p.get('category', '')),
    'toggle_all': lambda s, p: s.toggle_all(),
    'start': lambda s, p: s.start(),
    'answer': lambda s, p: s.answer(p.get('identity', '')),
    'next': lambda s, p: s.next(),
    'back': lambda s, p: s.back(),
}

WRITING_ACTIONS: Dict[str, Callable[[Any, Dict[str, Any]], Any]] = {
    'stroke': lambda s, p: s.add_stroke([tuple(point) for point in p.get('points', [])]),
    'show_answer': lambda s, p: s.show_answer(),
    'clear': lambda s, p: s.clear(),
    'next': lambda s, p: s.next().identity,
    'recognize': lambda s, p: s.recognize(),
}


@app.route('/')
def index() -> Any:
    """Section index."""
    return jsonify({'status': 'success', 'sections': SECTIONS})


@app.route('/api/<section>/state')
def api_state(section: str) -> Any:
    if section not in FACTORIES:
        return error(f"Unknown section: {section}")
    try:
        return jsonify({'status': 'success', 'state': get_practice(section).snapshot()})
    except Exception as e:
        if DEBUG:
            traceback.print_exc()
        return error(f"Error: {str(e)}")


@app.route('/api/<section>/reset', methods=['POST'])
def api_reset(section: str) -> Any:
    """Leave a section: its session is discarded, pending auto-advance included."""
    if section not in FACTORIES:
        return error(f"Unknown section: {section}")
    store.discard(session['client_id'], section)
    return jsonify({'status': 'success'})


@app.route('/api/kana/action', methods=['POST'])
def api_kana_action() -> Any:
    return run_action('kana', KANA_ACTIONS)


@app.route('/api/words/action', methods=['POST'])
def api_words_action() -> Any:
    return run_action('words', WORD_ACTIONS)


@app.route('/api/numbers/action', methods=['POST'])
def api_numbers_action() -> Any:
    return run_action('numbers', NUMBER_ACTIONS)


@app.route('/api/writing/action', methods=['POST'])
def api_writing_action() -> Any:
    return run_action('writing', WRITING_ACTIONS)


@app.route('/api/charts/<chart>')
def api_chart(chart: str) -> Any:
    """Reference charts: hiragana, katakana or numbers."""
    if chart == 'numbers':
        rows = [
            {'digit': digit, 'kanji': kanji, 'reading': reading, 'romaji': romaji}
            for digit, kanji, reading, romaji in charts.number_chart()
        ]
        return jsonify({'status': 'success', 'rows': rows})
    try:
        rows = [
            {
                'label': label,
                'cells': [
                    {'identity': c.identity, 'kana': c.prompt, 'romaji': c.primary_answer} if c else None
                    for c in cells
                ],
            }
            for label, cells in charts.kana_chart(chart)
        ]
    except ValueError as e:
        return error(str(e))
    return jsonify({'status': 'success', 'rows': rows})


@app.route('/api/kana/pool/<selection>')
def api_kana_pool(selection: str) -> Any:
    try:
        pool = data.kana_pool(selection)
    except ValueError as e:
        return error(str(e))
    return jsonify({'status': 'success', 'items': [
        {'identity': item.identity, 'kana': item.prompt, 'romaji': item.primary_answer} for item in pool
    ]})


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Kana Learning App')
    parser.add_argument('--host', default='127.0.0.1', help='Host IP to bind to (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=5000, help='Port to bind to (default: 5000)')
    parser.add_argument('--words', choices=['local', 'jisho'], help='Word source for the word drill')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')

    args = parser.parse_args()

    if args.debug:
        DEBUG = True
    if args.words:
        WORD_SOURCE = args.words
        print(f"⚙️  Word source configured to: {WORD_SOURCE}")

    print(f"🚀 Starting server on http://{args.host}:{args.port}")
    app.run(debug=DEBUG, host=args.host, port=args.port)
