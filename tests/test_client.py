"""
Tests for the DeepL client.

Core principle: one call, one round trip. Order of languages and
translations is whatever the server sends.
"""

import httpx
import pytest

from deepl_api.client import DeepL
from deepl_api.config import Settings
from deepl_api.errors import DeserializationError
from deepl_api.models import (
    Formality,
    Language,
    LanguageType,
    TranslatedText,
    TranslationOptions,
    UsageInformation,
)
from deepl_api.transport import FREE_SERVER_URL, PRO_SERVER_URL

from tests.conftest import FREE_KEY, PRO_KEY, form_params


def echo_translations(request: httpx.Request) -> httpx.Response:
    """Answer each text with an upper-cased 'translation'."""
    params = form_params(request)
    source = params.get("source_lang", ["EN"])[0]
    return httpx.Response(
        200,
        json={
            "translations": [
                {"detected_source_language": source, "text": text.upper()}
                for text in params["text"]
            ]
        },
    )


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    @pytest.mark.parametrize("key", ["", "   "])
    def test_rejects_empty_key(self, key):
        with pytest.raises(ValueError):
            DeepL(key)

    def test_free_key(self):
        deepl = DeepL(FREE_KEY)
        assert deepl.server_url == FREE_SERVER_URL
        assert deepl.is_free_account

    def test_pro_key(self):
        deepl = DeepL(PRO_KEY)
        assert deepl.server_url == PRO_SERVER_URL
        assert not deepl.is_free_account

    def test_server_url_override(self):
        deepl = DeepL(PRO_KEY, server_url="http://localhost:3000/v2")
        assert deepl.server_url == "http://localhost:3000/v2"

    def test_invalid_server_url(self):
        with pytest.raises(ValueError):
            DeepL(PRO_KEY, server_url="http://exa mple.com:xx/v2")

    def test_no_network_on_construction(self, server):
        DeepL(FREE_KEY, transport=server.transport)
        assert server.requests == []

    def test_read_only(self):
        deepl = DeepL(FREE_KEY)
        with pytest.raises(AttributeError):
            deepl.api_key = "other"

    def test_repr_hides_key(self):
        assert FREE_KEY not in repr(DeepL(FREE_KEY))

    def test_from_settings(self, server):
        settings = Settings(api_key=PRO_KEY, server_url="http://mock:3000/v2", timeout=5.0)
        deepl = DeepL.from_settings(settings, transport=server.transport)

        assert deepl.api_key == PRO_KEY
        assert deepl.server_url == "http://mock:3000/v2"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("DEEPL_API_KEY", FREE_KEY)
        deepl = DeepL.from_settings()
        assert deepl.server_url == FREE_SERVER_URL

    def test_from_settings_without_key(self):
        with pytest.raises(ValueError):
            DeepL.from_settings(Settings(api_key=""))


# =============================================================================
# Usage
# =============================================================================


class TestUsage:
    def test_usage_information(self, server, deepl):
        server.add("GET", "/usage", json={"character_count": 100, "character_limit": 500000})

        usage = deepl.usage_information()

        assert usage == UsageInformation(character_count=100, character_limit=500000)
        assert (usage.character_count, usage.character_limit) == (100, 500000)
        assert len(server.requests) == 1
        assert server.last_request.method == "GET"
        assert server.last_request.url.path == "/v2/usage"

    def test_malformed_usage(self, server, deepl):
        server.add("GET", "/usage", json={"character_count": "lots"})
        with pytest.raises(DeserializationError):
            deepl.usage_information()


# =============================================================================
# Languages
# =============================================================================


class TestLanguages:
    def test_order_preserved(self, server, deepl):
        # Deliberately not alphabetical
        server.add("GET", "/languages", json=[
            {"language": "ZH", "name": "Chinese"},
            {"language": "DE", "name": "German"},
            {"language": "EN", "name": "English"},
        ])

        langs = deepl.languages(LanguageType.SOURCE)

        assert [lang.code for lang in langs] == ["ZH", "DE", "EN"]
        assert form_params(server.last_request)["type"] == ["source"]

    def test_target_languages(self, server, deepl):
        server.add("GET", "/languages", json=[
            {"language": "DE", "name": "German", "supports_formality": True},
            {"language": "EN-GB", "name": "English (British)", "supports_formality": False},
        ])

        langs = deepl.target_languages()

        assert langs == [
            Language(code="DE", name="German", supports_formality=True),
            Language(code="EN-GB", name="English (British)", supports_formality=False),
        ]
        assert form_params(server.last_request)["type"] == ["target"]

    def test_source_languages(self, server, deepl):
        server.add("GET", "/languages", json=[{"language": "RU", "name": "Russian"}])

        assert deepl.source_languages()[0].name == "Russian"
        assert form_params(server.last_request)["type"] == ["source"]

    def test_type_as_string(self, server, deepl):
        server.add("GET", "/languages", json=[])
        assert deepl.languages("target") == []

    def test_unknown_type(self, deepl):
        with pytest.raises(ValueError):
            deepl.languages("both")

    def test_not_a_list(self, server, deepl):
        server.add("GET", "/languages", json={"language": "DE"})
        with pytest.raises(DeserializationError):
            deepl.source_languages()


# =============================================================================
# Translate
# =============================================================================


class TestTranslate:
    def test_empty_input_makes_no_request(self, server, deepl):
        assert deepl.translate([], TranslationOptions(target_language="DE")) == []
        assert server.requests == []

    def test_order_and_length_match_input(self, server, deepl):
        server.add_handler("POST", "/translate", echo_translations)
        texts = ["one", "two", "three", "two"]

        result = deepl.translate(texts, TranslationOptions(target_language="DE"))

        assert [t.text for t in result] == ["ONE", "TWO", "THREE", "TWO"]
        # Single request for all segments
        assert len(server.requests) == 1
        assert form_params(server.last_request)["text"] == texts

    def test_detected_source_matches_requested(self, server, deepl):
        server.add("POST", "/translate", json={
            "translations": [
                {"detected_source_language": "EN", "text": "Hallo"},
                {"detected_source_language": "EN", "text": "Welt"},
            ],
        })
        options = TranslationOptions(source_language="EN", target_language="DE")

        result = deepl.translate(["Hello", "World"], options)

        assert form_params(server.last_request)["source_lang"] == [options.source_language]
        assert [t.detected_source_language for t in result] == [options.source_language] * 2
        assert [t.text for t in result] == ["Hallo", "Welt"]

    def test_source_language_omitted_when_unset(self, server, deepl):
        server.add("POST", "/translate", json={
            "translations": [{"detected_source_language": "FR", "text": "Hallo"}],
        })

        result = deepl.translate(["Bonjour"], TranslationOptions(target_language="DE"))

        assert "source_lang" not in form_params(server.last_request)
        assert result[0].detected_source_language == "FR"

    def test_options_sent(self, server, deepl):
        server.add_handler("POST", "/translate", echo_translations)

        deepl.translate(
            ["Please go home."],
            TranslationOptions(
                source_language="EN",
                target_language="DE",
                formality=Formality.MORE,
                preserve_formatting=True,
                glossary_id="gloss-1",
            ),
        )

        params = form_params(server.last_request)
        assert params["target_lang"] == ["DE"]
        assert params["source_lang"] == ["EN"]
        assert params["formality"] == ["more"]
        assert params["preserve_formatting"] == ["1"]
        assert params["glossary_id"] == ["gloss-1"]
        assert params["auth_key"] == [FREE_KEY]
        assert "split_sentences" not in params

    def test_single_string(self, server, deepl):
        server.add_handler("POST", "/translate", echo_translations)

        result = deepl.translate("ja", TranslationOptions(target_language="EN-US"))

        assert result == [TranslatedText(detected_source_language="EN", text="JA")]

    def test_generator_input(self, server, deepl):
        server.add_handler("POST", "/translate", echo_translations)

        result = deepl.translate((t for t in ["a", "b"]), TranslationOptions(target_language="DE"))

        assert [t.text for t in result] == ["A", "B"]

    def test_length_mismatch(self, server, deepl):
        server.add("POST", "/translate", json={
            "translations": [{"detected_source_language": "EN", "text": "Hallo"}],
        })

        with pytest.raises(DeserializationError):
            deepl.translate(["Hello", "World"], TranslationOptions(target_language="DE"))

    def test_missing_translations_key(self, server, deepl):
        server.add("POST", "/translate", json={"message": "ok"})

        with pytest.raises(DeserializationError):
            deepl.translate(["Hello"], TranslationOptions(target_language="DE"))

    def test_translate_text(self, server, deepl):
        server.add("POST", "/translate", json={
            "translations": [{"detected_source_language": "EN", "text": "Bitte geh nach Hause."}],
        })

        result = deepl.translate_text("Please go home.", "DE", source_language="EN", formality="less")

        assert result.text == "Bitte geh nach Hause."
        assert form_params(server.last_request)["formality"] == ["less"]
