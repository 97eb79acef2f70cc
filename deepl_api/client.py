"""
DeepL API client.

The ``DeepL`` class represents one DeepL developer account. Construct it
once with an API key and call its methods; each call is a single blocking
round trip to the server.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import ValidationError

from deepl_api.config import Settings, get_settings
from deepl_api.errors import DeserializationError
from deepl_api.models import (
    Language,
    LanguageType,
    TranslatedText,
    TranslationList,
    TranslationOptions,
    UsageInformation,
)
from deepl_api.transport import (
    DEFAULT_TIMEOUT,
    HttpTransport,
    is_free_account_key,
    resolve_server_url,
)

logger = logging.getLogger(__name__)


class DeepL:
    """
    Client for the DeepL REST API.

    Usage:
        deepl = DeepL(os.environ["DEEPL_API_KEY"])

        usage = deepl.usage_information()
        targets = deepl.target_languages()

        translated = deepl.translate(
            ["Please go home."],
            TranslationOptions(source_language="EN", target_language="DE"),
        )
        print(translated[0].text)  # "Bitte gehen Sie nach Hause."

    Errors are raised as subclasses of ``DeepLError``; rate limits and quota
    errors are never retried.
    """

    def __init__(
        self,
        api_key: str,
        *,
        server_url: str | None = None,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        if not api_key or not api_key.strip():
            raise ValueError("api_key must not be empty")

        self._api_key = api_key.strip()
        self._server_url = resolve_server_url(self._api_key, server_url)
        self._http = HttpTransport(
            self._api_key,
            self._server_url,
            timeout=timeout or DEFAULT_TIMEOUT,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> DeepL:
        """Create a client from ``DEEPL_*`` configuration."""
        settings = settings or get_settings()
        if not settings.has_api_key:
            raise ValueError("DEEPL_API_KEY not set")

        return cls(
            settings.api_key,
            server_url=settings.server_url or None,
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            transport=transport,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def server_url(self) -> str:
        return self._server_url

    @property
    def is_free_account(self) -> bool:
        return is_free_account_key(self._api_key)

    def __repr__(self) -> str:
        return f"DeepL(server_url={self._server_url!r})"

    # =========================================================================
    # Usage
    # =========================================================================

    def usage_information(self) -> UsageInformation:
        """
        Retrieve usage & limits for the current billing period.

        Also useful to verify an API key without spending characters.
        """
        data = self._http.request("GET", "/usage")
        return _parse(UsageInformation, data)

    # =========================================================================
    # Languages
    # =========================================================================

    def languages(self, language_type: LanguageType | str = LanguageType.SOURCE) -> list[Language]:
        """
        Retrieve the languages DeepL supports, in server order.

        Args:
            language_type: ``source`` or ``target``

        Returns:
            List of languages
        """
        language_type = LanguageType(language_type)
        data = self._http.request("GET", "/languages", {"type": language_type.value})

        if not isinstance(data, list):
            raise DeserializationError(detail="expected a list of languages")
        return [_parse(Language, item) for item in data]

    def source_languages(self) -> list[Language]:
        """Languages DeepL can translate from."""
        return self.languages(LanguageType.SOURCE)

    def target_languages(self) -> list[Language]:
        """Languages DeepL can translate to."""
        return self.languages(LanguageType.TARGET)

    # =========================================================================
    # Translation
    # =========================================================================

    def translate(
        self,
        texts: str | Sequence[str],
        options: TranslationOptions,
    ) -> list[TranslatedText]:
        """
        Translate one or more texts in a single request.

        Args:
            texts: Texts to translate (a single string counts as one text)
            options: Target language and translation flags

        Returns:
            One ``TranslatedText`` per input text, in input order
        """
        if isinstance(texts, str):
            texts = [texts]
        texts = list(texts)

        if not texts:
            return []

        params: dict[str, Any] = options.to_params()
        params["text"] = texts

        logger.debug(
            f"Translating {len(texts)} text(s) to {options.target_language}"
        )
        data = self._http.request("POST", "/translate", params)
        translations = _parse(TranslationList, data).translations

        if len(translations) != len(texts):
            raise DeserializationError(
                detail=f"sent {len(texts)} text(s) but received {len(translations)} translation(s)"
            )
        return translations

    def translate_text(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
        **options: Any,
    ) -> TranslatedText:
        """Translate a single text (convenience wrapper around ``translate``)."""
        translation_options = TranslationOptions(
            target_language=target_language,
            source_language=source_language,
            **options,
        )
        return self.translate([text], translation_options)[0]


def _parse(model: type, data: Any) -> Any:
    """Validate response data against a model."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise DeserializationError(detail=e.errors()[0]["msg"]) from e
