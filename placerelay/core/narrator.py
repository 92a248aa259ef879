"""LLM commentary over a collected place list."""

import json
import logging
import re
from dataclasses import fields
from typing import Any, Dict, List, Optional

from placerelay.core.config import Settings, get_settings
from placerelay.models import ExtractedJson, MalformedJson, NarrativeItem, ParsedJson
from placerelay.vendors import gemini, openai_chat

logger = logging.getLogger(__name__)

INVALID_JSON_ERROR = "Invalid JSON returned from model"
NO_CONTENT = "No content generated."

_JSON_FENCE_REGEX = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
_TRAILING_COMMA_REGEX = re.compile(r",\s*([\]}])")

RESEARCH_PROMPT = """You are a local guide researching the places listed below.
For each place, write a short summary, a few notable highlights, and a one-line
assessment of how popular it is, based on its rating and number of reviews.

Places (JSON):
{places}

Respond ONLY with a JSON array. Each element must be an object with the keys
{keys}, where "highlights" is an array of strings. Do not add any text outside
the JSON array."""

REPORT_PROMPT = """Write a Markdown report from the data below.

Format it exactly like this:
# <a short title describing the places>

## <place name>
<one paragraph summary>

- <highlight>
- <highlight>

**Popularity:** <popularity>

---

Repeat the "##" section for every place, separated by a horizontal rule (---).
Return only the Markdown document.

Data (JSON):
{data}"""


class EmptyInput(ValueError):
    """Raised when research is requested without any places."""


def extract_json(text: str) -> ExtractedJson:
    """Pull a JSON value out of free-form model output.

    Uses the interior of a fenced ```json block when there is one, otherwise
    the whole text, after dropping trailing commas before ``]`` or ``}``.
    """
    match = _JSON_FENCE_REGEX.search(text or "")
    candidate = match.group(1) if match else (text or "")
    candidate = _TRAILING_COMMA_REGEX.sub(r"\1", candidate.strip())
    try:
        return ParsedJson(json.loads(candidate))
    except json.JSONDecodeError as exc:
        logger.warning("Model output is not valid JSON: %s", exc)
        return MalformedJson(text or "")


def to_payload(result: ExtractedJson) -> Any:
    if isinstance(result, ParsedJson):
        return result.value
    return {"error": INVALID_JSON_ERROR, "rawText": result.raw_text}


def build_research_prompt(places: List[Dict[str, Any]]) -> str:
    keys = ", ".join(f'"{item.name}"' for item in fields(NarrativeItem))
    return RESEARCH_PROMPT.format(places=json.dumps(places, indent=2, ensure_ascii=False), keys=keys)


def research(places: List[Dict[str, Any]], settings: Optional[Settings] = None) -> Any:
    """Ask the chat model for per-place commentary; returns parsed JSON or a diagnostic record."""
    if not places:
        raise EmptyInput("No data to research")

    settings = settings or get_settings()
    logger.info("Researching %d places", len(places))
    content = openai_chat.chat_completion(build_research_prompt(places), settings)
    return to_payload(extract_json(content))


def generate_report(data: Any, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    prompt = REPORT_PROMPT.format(data=json.dumps(data, indent=2, ensure_ascii=False))
    text = gemini.generate_text(prompt, settings)
    return text or NO_CONTENT
