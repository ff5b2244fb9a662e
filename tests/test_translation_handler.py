from __future__ import annotations

import pytest
import requests

import kamus.services.translation_handler as translation_module
from kamus.services.errors import TranslationFailure
from kamus.services.translation_handler import LibreTranslateClient, TranslationResolver

from conftest import FakeTranslationClient


class DummyResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def test_resolver_prefers_curated_pairs(translation_table):
    client = FakeTranslationClient()
    resolver = TranslationResolver(translation_table, client)

    assert resolver.translate("cantik", "ms", "zh") == "美丽"
    assert resolver.translate("Kamu sangat hebat", "ms", "zh") == "你真棒"
    assert client.calls == []


def test_resolver_falls_back_to_client(translation_table):
    client = FakeTranslationClient(responses={"layu": "枯萎"})
    resolver = TranslationResolver(translation_table, client)

    assert resolver.translate("layu", "ms", "zh") == "枯萎"
    assert client.calls == [("layu", "ms", "zh")]


def test_resolver_propagates_failure(translation_table):
    resolver = TranslationResolver(translation_table, FakeTranslationClient(failures={"layu"}))
    with pytest.raises(TranslationFailure):
        resolver.translate("layu", "ms", "zh")


def test_client_posts_libretranslate_payload(monkeypatch):
    captured = {}

    def fake_post(url, json=None, timeout=None):
        captured.update(url=url, json=json, timeout=timeout)
        return DummyResponse(200, {"translatedText": " 枯萎 "})

    monkeypatch.setattr(translation_module.requests, "post", fake_post)

    client = LibreTranslateClient("http://lt.local/translate", api_key="secret", timeout=12)
    assert client.translate("layu", "ms", "zh") == "枯萎"
    assert captured["url"] == "http://lt.local/translate"
    assert captured["json"] == {"q": "layu", "source": "ms", "target": "zh", "format": "text", "api_key": "secret"}
    assert captured["timeout"] == 12


def test_client_omits_missing_api_key(monkeypatch):
    captured = {}

    def fake_post(url, json=None, timeout=None):
        captured.update(json)
        return DummyResponse(200, {"translatedText": "枯萎"})

    monkeypatch.setattr(translation_module.requests, "post", fake_post)
    LibreTranslateClient("http://lt.local/translate").translate("layu", "ms", "zh")
    assert "api_key" not in captured


def test_client_non_2xx_raises_with_status(monkeypatch):
    monkeypatch.setattr(
        translation_module.requests, "post",
        lambda *a, **kw: DummyResponse(429, text='{"error": "Too many requests"}'),
    )
    with pytest.raises(TranslationFailure) as exc:
        LibreTranslateClient("http://lt.local/translate").translate("layu", "ms", "zh")

    assert exc.value.status == 429
    assert "LibreTranslate API error (429)" in exc.value.detail
    assert "Too many requests" in exc.value.detail


def test_client_malformed_body_raises(monkeypatch):
    monkeypatch.setattr(
        translation_module.requests, "post",
        lambda *a, **kw: DummyResponse(200, {"unexpected": "shape"}),
    )
    with pytest.raises(TranslationFailure):
        LibreTranslateClient("http://lt.local/translate").translate("layu", "ms", "zh")


def test_client_transport_error_raises(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(translation_module.requests, "post", boom)
    with pytest.raises(TranslationFailure) as exc:
        LibreTranslateClient("http://lt.local/translate").translate("layu", "ms", "zh")
    assert "read timed out" in str(exc.value)
