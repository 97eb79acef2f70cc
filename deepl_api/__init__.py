"""
deepl_api - bindings and a command-line tool for the DeepL REST API.

Usage:
    from deepl_api import DeepL, TranslationOptions

    deepl = DeepL(os.environ["DEEPL_API_KEY"])

    # Translate
    result = deepl.translate(
        ["ja"],
        TranslationOptions(source_language="DE", target_language="EN-US"),
    )
    assert result[0].text == "yes"

    # Usage & limits
    usage = deepl.usage_information()

Keys ending in ":fx" are sent to the DeepL API Free server, all others to
the Pro server.
"""

__version__ = "0.2.0"

from deepl_api.client import DeepL
from deepl_api.config import Settings, get_settings
from deepl_api.errors import (
    DeepLError,
    AuthorizationError,
    BadRequestError,
    QuotaExceededError,
    TooManyRequestsError,
    NotFoundError,
    ServerError,
    NetworkError,
    DeserializationError,
)
from deepl_api.models import (
    Formality,
    Language,
    LanguageType,
    SplitSentences,
    TagHandling,
    TranslatedText,
    TranslationOptions,
    UsageInformation,
)
from deepl_api.transport import (
    FREE_SERVER_URL,
    PRO_SERVER_URL,
    resolve_server_url,
)

__all__ = [
    "__version__",
    # Client
    "DeepL",
    # Config
    "Settings",
    "get_settings",
    # Errors
    "DeepLError",
    "AuthorizationError",
    "BadRequestError",
    "QuotaExceededError",
    "TooManyRequestsError",
    "NotFoundError",
    "ServerError",
    "NetworkError",
    "DeserializationError",
    # Models
    "Formality",
    "Language",
    "LanguageType",
    "SplitSentences",
    "TagHandling",
    "TranslatedText",
    "TranslationOptions",
    "UsageInformation",
    # Endpoints
    "FREE_SERVER_URL",
    "PRO_SERVER_URL",
    "resolve_server_url",
]
