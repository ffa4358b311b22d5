import logging

from app.config import Settings
from app.logging_config import LOGGER_NAME
from app.receipt.base import ReceiptExtractor, UnconfiguredExtractor

logger = logging.getLogger(LOGGER_NAME)

API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "openai": "OPENAI_API_KEY",
}


def create_extractor(settings: Settings) -> ReceiptExtractor | UnconfiguredExtractor:
    """Return the configured receipt extraction provider.

    A provider without an API key yields an UnconfiguredExtractor so every
    scan request fails the same way until the process is reconfigured.
    """
    provider = settings.receipt_provider
    if provider not in API_KEY_ENV:
        raise ValueError(f"Unknown receipt provider: {provider}")

    api_key = settings.gemini_api_key if provider == "gemini" else settings.openai_api_key
    if not api_key:
        reason = f"{API_KEY_ENV[provider]} environment variable not set on the server."
        logger.error(reason, extra={"extra_data": {"provider": provider}})
        return UnconfiguredExtractor(provider=provider, reason=reason)

    if provider == "gemini":
        from app.receipt.gemini_provider import GeminiReceiptExtractor

        return GeminiReceiptExtractor(api_key=api_key, model=settings.gemini_model)

    from app.receipt.openai_provider import OpenAIReceiptExtractor

    return OpenAIReceiptExtractor(api_key=api_key, model=settings.openai_model)
