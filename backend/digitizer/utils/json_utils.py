"""
Recover a JSON object from free-form model output.

Models asked for "only JSON" still wrap it in markdown fences or surround it
with prose. The sanitizer tries, in order: the first fenced block, then the
span between the first '{' and the last '}', then a strict parse of whichever
was chosen.
"""
import json
import re
from typing import Any, Dict, Optional

from ..core.logging_config import get_logger

logger = get_logger(__name__)

_FENCED_BLOCK = re.compile(r"```(?:json|JSON)?\s*([\s\S]*?)\s*```")

SNIPPET_LENGTH = 500


def _candidate_text(text: str) -> Optional[str]:
    match = _FENCED_BLOCK.search(text)
    if match and match.group(1).strip():
        return match.group(1)

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def extract_json_object(text: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Extract and parse the JSON object embedded in ``text``.

    Returns:
        The parsed object, or None when no object could be recovered.
        An empty object ``{}`` is a valid result and is returned as such.
        Never raises.
    """
    if not text:
        logger.error("JSON extraction failed: empty response")
        return None

    candidate = _candidate_text(text)
    if candidate is None:
        logger.error("JSON extraction failed: no JSON object found in the text")
        logger.error(f"Problematic text snippet: {text[:SNIPPET_LENGTH]}")
        return None

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error(f"JSON extraction failed: {e}")
        logger.error(f"Problematic text snippet: {text[:SNIPPET_LENGTH]}")
        return None

    if not isinstance(parsed, dict):
        logger.error(f"JSON extraction failed: expected an object, got {type(parsed).__name__}")
        return None

    return parsed
