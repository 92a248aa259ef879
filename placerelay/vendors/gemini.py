"""Prompt-completion client backed by the Gemini SDK."""

import logging

import google.generativeai as genai

from placerelay.core.config import ConfigError, Settings

logger = logging.getLogger(__name__)


def generate_text(prompt: str, settings: Settings) -> str:
    """Return the generated text, or an empty string when the model produced none."""
    if not settings.gemini_api_key:
        raise ConfigError("GEMINI_API_KEY must be set to call the prompt-completion API.")

    genai.configure(api_key=settings.gemini_api_key)
    model = genai.GenerativeModel(settings.gemini_model)
    logger.info("Calling Gemini model=%s (%d prompt chars)", settings.gemini_model, len(prompt))
    response = model.generate_content(prompt)

    # response.text raises when the candidate list is empty or blocked.
    if not response.candidates or not response.candidates[0].content.parts:
        logger.warning("Gemini returned no content; prompt_feedback=%s", response.prompt_feedback)
        return ""
    return response.text or ""
