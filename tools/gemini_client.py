# tools/gemini_client.py
"""
CalorieBuddy AI — Gemini Client
===============================
Shared Gemini setup for the estimation, parsing and image tools:
- client built once from GOOGLE_API_KEY (server-side only)
- one request helper that checks the candidates/content/parts structure
- greedy JSON extraction from free-text answers
"""

import json
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from google import genai
from google.genai import types as genai_types

# =============================================================================
# CONFIGURATION
# =============================================================================
load_dotenv()

GEMINI_CONFIG = {
    "text_model": os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
    "vision_model": os.getenv("GEMINI_VISION_MODEL", "gemini-2.5-pro"),
    "temperature": 0.2,
}

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_AVAILABLE = False
CLIENT = None

if GOOGLE_API_KEY:
    CLIENT = genai.Client(api_key=GOOGLE_API_KEY)
    GEMINI_AVAILABLE = True
    print("✅ Gemini Client: ready")
else:
    print("⚠️ Gemini Client: GOOGLE_API_KEY not set, AI calls will use fallbacks")


# =============================================================================
# ERRORS
# =============================================================================
class AIServiceError(Exception):
    """Transport failure, non-2xx status or missing client."""


class AIResponseError(AIServiceError):
    """The answer arrived but lacks the expected structure or content."""


# =============================================================================
# REQUEST HELPERS
# =============================================================================
def get_client(client: Any = None) -> Any:
    """Return the given client, else the module client. Raises if neither exists."""
    if client is not None:
        return client
    if CLIENT is None:
        raise AIServiceError("Gemini client not configured (GOOGLE_API_KEY missing)")
    return CLIENT


def extract_response_text(response: Any) -> str:
    """Read candidates[0].content.parts[0].text or raise AIResponseError."""
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise AIResponseError("Invalid response structure: no candidates")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) if content is not None else None
    if not parts:
        raise AIResponseError("Invalid response structure: no content parts")

    text = getattr(parts[0], "text", None)
    if not isinstance(text, str) or not text.strip():
        raise AIResponseError("Invalid response structure: empty text part")
    return text


def generate_text(
    prompt: str,
    client: Any = None,
    model: Optional[str] = None,
    image_bytes: Optional[bytes] = None,
    mime_type: str = "image/jpeg",
) -> str:
    """
    Send one prompt (optionally with an inline image) and return the answer text.

    Raises:
        AIServiceError: client missing, network failure or non-2xx status.
        AIResponseError: answer without candidates[0].content.parts[0].text.
    """
    gemini = get_client(client)

    contents: List[Any] = [prompt]
    if image_bytes is not None:
        contents.append(genai_types.Part.from_bytes(data=image_bytes, mime_type=mime_type))

    try:
        response = gemini.models.generate_content(
            model=model or GEMINI_CONFIG["text_model"],
            contents=contents,
            config=genai_types.GenerateContentConfig(
                temperature=GEMINI_CONFIG["temperature"],
            ),
        )
    except Exception as e:
        raise AIServiceError(f"Gemini request failed: {e}") from e

    return extract_response_text(response)


# =============================================================================
# JSON EXTRACTION
# =============================================================================
def _greedy_block(text: str, opener: str, closer: str) -> str:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        raise AIResponseError(f"No JSON {'object' if opener == '{' else 'array'} found in response")
    return text[start:end + 1]


def extract_json_object(text: str) -> Dict[str, Any]:
    """First '{' to last '}' of the answer, parsed. Raises AIResponseError."""
    block = _greedy_block(text or "", "{", "}")
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Malformed JSON object: {e}") from e
    if not isinstance(data, dict):
        raise AIResponseError("Expected a JSON object")
    return data


def extract_json_array(text: str) -> List[Any]:
    """First '[' to last ']' of the answer, parsed. Raises AIResponseError."""
    block = _greedy_block(text or "", "[", "]")
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Malformed JSON array: {e}") from e
    if not isinstance(data, list):
        raise AIResponseError("Expected a JSON array")
    return data


__all__ = [
    "GEMINI_CONFIG",
    "GEMINI_AVAILABLE",
    "CLIENT",
    "AIServiceError",
    "AIResponseError",
    "get_client",
    "extract_response_text",
    "generate_text",
    "extract_json_object",
    "extract_json_array",
]
