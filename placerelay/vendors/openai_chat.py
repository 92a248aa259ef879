"""Chat-completion client backed by the OpenAI SDK."""

import logging
from typing import Optional

from openai import OpenAI

from placerelay.core.config import ConfigError, Settings

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> OpenAI:
    if not settings.openai_api_key:
        raise ConfigError("OPENAI_API_KEY must be set to call the chat-completion API.")
    return OpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.llm_timeout,
    )


def chat_completion(prompt: str, settings: Settings, client: Optional[OpenAI] = None) -> str:
    """Send a single user message and return the first choice's content."""
    client = client or build_client(settings)
    logger.info("Calling chat completion model=%s (%d prompt chars)", settings.openai_model, len(prompt))
    response = client.chat.completions.create(
        model=settings.openai_model,
        messages=[{"role": "user", "content": prompt}],
    )
    content = response.choices[0].message.content or ""
    logger.info("Chat completion returned %d chars", len(content))
    return content
