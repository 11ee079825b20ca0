"""
Tests for the Flask JSON endpoints.
Each test gets a fresh client (and so a fresh cookie session) and an empty session store.
"""

from typing import Any, Dict, Generator

import pytest
from flask.testing import FlaskClient

import app as kana_app


@pytest.fixture
def client() -> Generator[FlaskClient, None, None]:
    kana_app.app.config['TESTING'] = True
    kana_app.store.clear()
    with kana_app.app.test_client() as client:
        yield client
    kana_app.store.clear()


def action(client: FlaskClient, section: str, name: str, **payload: Any) -> Dict[str, Any]:
    response = client.post(f'/api/{section}/action', json={'action': name, **payload})
    assert response.status_code == 200
    return response.get_json()


def test_index_lists_sections(client: FlaskClient) -> None:
    data = client.get('/').get_json()
    assert data['status'] == 'success'
    assert 'kana' in data['sections']


def test_kana_state_starts_in_mode_selection(client: FlaskClient) -> None:
    data = client.get('/api/kana/state').get_json()
    assert data['status'] == 'success'
    assert data['state']['mode'] == 'selecting_mode'
    assert data['state']['pool_size'] == 71


def test_unknown_section(client: FlaskClient) -> None:
    assert client.get('/api/kanji/state').get_json()['status'] == 'error'
    assert client.post('/api/kanji/reset').get_json()['status'] == 'error'


def test_unknown_action(client: FlaskClient) -> None:
    data = action(client, 'kana', 'dance')
    assert data['status'] == 'error'
    assert 'Unknown action' in data['message']


def test_kana_quiz_round_trip(client: FlaskClient) -> None:
    data = action(client, 'kana', 'quiz')
    assert data['state']['mode'] == 'quiz'
    identity = data['state']['item']['identity']

    # Answer with the glyph's own romaji via the pool listing
    items = client.get('/api/kana/pool/hiragana').get_json()['items']
    romaji = next(i['romaji'] for i in items if i['identity'] == identity)
    data = action(client, 'kana', 'submit', answer=romaji)
    assert data['result'] is True
    assert data['state']['feedback'] == 'correct'
    assert data['state']['score'] == {'correct': 1, 'total': 1, 'percent': 100}

    data = action(client, 'kana', 'next')
    assert data['state']['feedback'] == 'unanswered'


def test_kana_selection_change_resets_score(client: FlaskClient) -> None:
    action(client, 'kana', 'quiz')
    action(client, 'kana', 'submit', answer='zzz')
    data = action(client, 'kana', 'type', selection='katakana')
    assert data['state']['selection'] == 'katakana'
    assert data['state']['score']['total'] == 0
    assert data['state']['item']['identity'].startswith('katakana:')


def test_kana_invalid_selection_is_an_error(client: FlaskClient) -> None:
    data = action(client, 'kana', 'type', selection='cyrillic')
    assert data['status'] == 'error'
    assert 'cyrillic' in data['message']


def test_curated_practice_flow(client: FlaskClient) -> None:
    action(client, 'kana', 'practice_selected')
    assert action(client, 'kana', 'start_practice')['result'] is False
    action(client, 'kana', 'toggle', identity='hiragana:し')
    data = action(client, 'kana', 'start_practice')
    assert data['result'] is True
    assert data['state']['mode'] == 'practice_selected'
    assert data['state']['item']['identity'] == 'hiragana:し'


def test_reset_discards_section_session(client: FlaskClient) -> None:
    action(client, 'kana', 'quiz')
    assert client.post('/api/kana/reset').get_json()['status'] == 'success'
    state = client.get('/api/kana/state').get_json()['state']
    assert state['mode'] == 'selecting_mode'


def test_sessions_are_per_client(client: FlaskClient) -> None:
    action(client, 'kana', 'quiz')
    with kana_app.app.test_client() as other:
        state = other.get('/api/kana/state').get_json()['state']
    assert state['mode'] == 'selecting_mode'


def test_words_local_drill(client: FlaskClient) -> None:
    state = client.get('/api/words/state').get_json()['state']
    assert state['item'] is not None
    assert state['load_failed'] is False
    data = action(client, 'words', 'submit', answer='zzz')
    assert data['result'] is False
    assert data['state']['meaning']


def test_numbers_quiz_flow(client: FlaskClient) -> None:
    action(client, 'numbers', 'setup')
    data = action(client, 'numbers', 'start')
    options = data['state']['question']['options']
    assert len(options) == 8
    data = action(client, 'numbers', 'answer', identity=options[0]['identity'])
    assert data['result'] in (True, False)
    assert data['state']['score']['total'] == 1


def test_numbers_start_blocked_below_two_categories(client: FlaskClient) -> None:
    action(client, 'numbers', 'setup')
    action(client, 'numbers', 'toggle_all')
    action(client, 'numbers', 'toggle_category', category='digit')
    data = action(client, 'numbers', 'start')
    assert data['result'] is False
    assert data['state']['mode'] == 'setup'


def test_writing_practice(client: FlaskClient) -> None:
    data = action(client, 'writing', 'stroke', points=[[0, 0], [5, 5]])
    assert data['state']['strokes'] == 1
    assert data['state']['answer'] is None
    data = action(client, 'writing', 'show_answer')
    assert data['state']['answer']
    data = action(client, 'writing', 'recognize')
    assert 'not available' in data['result']
    data = action(client, 'writing', 'clear')
    assert data['state']['strokes'] == 0


def test_kana_chart(client: FlaskClient) -> None:
    data = client.get('/api/charts/hiragana').get_json()
    assert data['status'] == 'success'
    assert len(data['rows']) == 16
    assert data['rows'][0]['cells'][0] == {'identity': 'hiragana:あ', 'kana': 'あ', 'romaji': 'a'}
    assert data['rows'][7]['cells'][1] is None


def test_number_chart(client: FlaskClient) -> None:
    rows = client.get('/api/charts/numbers').get_json()['rows']
    assert rows[3]['romaji'] == 'yon / shi'


def test_unknown_chart(client: FlaskClient) -> None:
    assert client.get('/api/charts/kanji').get_json()['status'] == 'error'


def test_store_evicts_idle_clients(clock) -> None:
    store = kana_app.SessionStore(idle_seconds=60, clock=clock)
    store.for_client('old')['kana'] = object()
    clock.advance(30)
    store.for_client('recent')
    clock.advance(31)
    store.for_client('new')
    assert len(store) == 2
    assert 'kana' not in store.for_client('old')


def test_store_keeps_active_clients(clock) -> None:
    store = kana_app.SessionStore(idle_seconds=60, clock=clock)
    sessions = store.for_client('active')
    sessions['kana'] = 'practice'
    for _ in range(5):
        clock.advance(50)
        assert store.for_client('active')['kana'] == 'practice'
    assert store.evict_idle() == 0
