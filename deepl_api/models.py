"""
Data models for DeepL requests and responses.

Responses (usage, languages, translations) are parsed straight from the
server's JSON. ``TranslationOptions`` is the value object a caller builds
once per translate call and renders into form parameters.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class LanguageType(str, Enum):
    """Which of the two language lists to fetch."""

    SOURCE = "source"
    TARGET = "target"


class Formality(str, Enum):
    """Whether the translation should lean towards formal or informal language."""

    DEFAULT = "default"
    MORE = "more"
    LESS = "less"
    PREFER_MORE = "prefer_more"  # Falls back to default if unsupported
    PREFER_LESS = "prefer_less"


class SplitSentences(str, Enum):
    """How the engine splits input into sentences before translating."""

    NONE = "0"  # Treat each text as one sentence
    ALL = "1"  # Split on punctuation and newlines (server default)
    NO_NEWLINES = "nonewlines"  # Split on punctuation only


class TagHandling(str, Enum):
    """Markup the engine should recognise in the input text."""

    XML = "xml"
    HTML = "html"


# =============================================================================
# Responses
# =============================================================================


class UsageInformation(BaseModel):
    """Account usage & limits for the current billing period."""

    character_count: int
    character_limit: int

    @property
    def limit_reached(self) -> bool:
        return self.character_limit > 0 and self.character_count >= self.character_limit


class Language(BaseModel):
    """A language supported by DeepL."""

    model_config = {"populate_by_name": True}

    # DeepL identifier, e.g. "EN-US"
    code: str = Field(alias="language")
    name: str
    # Only reported for target languages
    supports_formality: bool | None = None


class TranslatedText(BaseModel):
    """One translated segment."""

    detected_source_language: str
    text: str


class TranslationList(BaseModel):
    """Wire envelope of a /translate response."""

    translations: list[TranslatedText]


class ServerErrorMessage(BaseModel):
    """Error body the server sends along with non-2xx responses."""

    message: str = ""
    detail: str | None = None


# =============================================================================
# Requests
# =============================================================================


class TranslationOptions(BaseModel):
    """
    Options for a translate call.

    Only ``target_language`` is required. Options left as ``None`` are not
    sent, so the server applies its own defaults.

    Example:
        options = TranslationOptions(
            target_language="DE",
            source_language="EN",
            formality=Formality.LESS,
        )
    """

    model_config = {"frozen": True}

    target_language: str = Field(min_length=1)
    source_language: str | None = None
    formality: Formality | None = None
    split_sentences: SplitSentences | None = None
    preserve_formatting: bool | None = None
    tag_handling: TagHandling | None = None
    glossary_id: str | None = None

    def to_params(self) -> dict[str, str]:
        """Render the options as DeepL form parameters."""
        params = {"target_lang": self.target_language}

        if self.source_language:
            params["source_lang"] = self.source_language
        if self.formality is not None:
            params["formality"] = self.formality.value
        if self.split_sentences is not None:
            params["split_sentences"] = self.split_sentences.value
        if self.preserve_formatting is not None:
            params["preserve_formatting"] = "1" if self.preserve_formatting else "0"
        if self.tag_handling is not None:
            params["tag_handling"] = self.tag_handling.value
        if self.glossary_id:
            params["glossary_id"] = self.glossary_id

        return params
