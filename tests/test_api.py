from __future__ import annotations

import pytest

import kamus.api.dictionary as dictionary_api
import kamus.api.pinyin as pinyin_api
import kamus.api.translate as translate_api
from kamus.app import create_app
from kamus.config import Settings
from kamus.services.schemas import TRANSLATION_FAILED
from kamus.services.translation_handler import TranslationResolver

from conftest import FakeTranslationClient


@pytest.fixture
def client(monkeypatch, pipeline, translation_table, converter):
    resolver = TranslationResolver(translation_table, FakeTranslationClient(failures={"rosak"}))
    monkeypatch.setattr(dictionary_api, "get_dictionary_service", lambda: pipeline)
    monkeypatch.setattr(translate_api, "get_translation_service", lambda: resolver)
    monkeypatch.setattr(pinyin_api, "get_pinyin_service", lambda: converter)

    app = create_app(Settings())
    app.config['TESTING'] = True
    return app.test_client()


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'healthy'}


def test_get_entry_uses_camel_case(client):
    res = client.get('/api/dictionary/makan')
    assert res.status_code == 200

    body = res.get_json()
    assert set(body) == {
        'sourceWord', 'targetWord', 'pronunciation', 'explanation',
        'examples', 'isAdjective', 'isCurated',
    }
    assert body['targetWord'] == '吃饭'
    assert body['isCurated'] is True


def test_get_entry_accepts_chinese(client):
    body = client.get('/api/dictionary/枯萎').get_json()
    assert body['targetWord'] == '枯萎'
    assert body['pronunciation'] == 'kū wěi'


def test_degraded_entry_is_still_200(client, translation_client):
    translation_client.failures.add("rosak")
    res = client.get('/api/dictionary/rosak')

    assert res.status_code == 200
    body = res.get_json()
    assert body['targetWord'] == TRANSLATION_FAILED
    assert body['explanation'].startswith('Unable to translate this word.')


def test_lookup_post(client):
    res = client.post('/api/dictionary/lookup', json={'word': ' Cantik '})
    assert res.status_code == 200

    body = res.get_json()
    assert body['success'] is True
    assert body['word'] == 'Cantik'
    assert body['entry']['targetWord'] == '美丽'


@pytest.mark.parametrize('payload', [{}, {'word': '   '}, {'word': None}])
def test_lookup_post_requires_word(client, payload):
    res = client.post('/api/dictionary/lookup', json=payload)
    assert res.status_code == 400
    assert res.get_json() == {'success': False, 'error': 'No word provided'}


def test_translate_defaults_to_malay_to_mandarin(client):
    res = client.post('/api/translate', json={'text': 'cantik'})
    assert res.status_code == 200
    assert res.get_json() == {'translatedText': '美丽', 'sourceLang': 'ms', 'targetLang': 'zh'}


def test_translate_reverse_direction(client):
    res = client.post('/api/translate/', json={'text': '美丽', 'sourceLang': 'zh', 'targetLang': 'ms'})
    assert res.get_json()['translatedText'] == 'cantik'


def test_translate_failure_is_reported_in_text(client):
    res = client.post('/api/translate', json={'text': 'rosak'})
    assert res.status_code == 200
    assert res.get_json()['translatedText'] == 'Translation error: LibreTranslate API error (500): upstream exploded'


def test_translate_requires_text(client):
    res = client.post('/api/translate', json={'text': ''})
    assert res.status_code == 400
    assert res.get_json() == {'error': 'No text provided'}


def test_pinyin_lookup(client):
    body = client.get('/api/pinyin/大山').get_json()
    assert body == {'word': '大山', 'pinyin': 'dà shān', 'mapped': False}


def test_pinyin_mapping_roundtrip(client):
    res = client.post('/api/pinyin/mappings', json={'word': 'Kucing', 'pinyin': 'māo'})
    assert res.status_code == 201
    assert res.get_json() == {'success': True, 'word': 'kucing', 'pinyin': 'māo'}

    body = client.get('/api/pinyin/kucing').get_json()
    assert body['pinyin'] == 'māo'
    assert body['mapped'] is True


def test_pinyin_mapping_requires_both_fields(client):
    res = client.post('/api/pinyin/mappings', json={'word': 'kucing'})
    assert res.status_code == 400
    assert res.get_json()['success'] is False


@pytest.mark.parametrize('path, error', [
    ('/api/dictionary/lookup', {'success': False, 'error': 'No word provided'}),
    ('/api/pinyin/mappings', {'success': False, 'error': 'Both word and pinyin are required'}),
    ('/api/translate', {'error': 'No text provided'}),
])
def test_non_object_json_body_is_rejected(client, path, error):
    res = client.post(path, json=['layu'])
    assert res.status_code == 400
    assert res.get_json() == error
