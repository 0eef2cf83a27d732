"""Response cleanup for generative model output."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n(.*?)\n?\s*```\s*$", re.DOTALL)

# Lead-ins models add despite being told to return only the text
_PREAMBLE_RE = re.compile(
    r"^\s*(?:sure[,!.]?\s*)?(?:here(?:'s| is) (?:the|your) "
    r"(?:simplified|rewritten|accessible|transformed)[^\n:]*:|"
    r"simplified (?:text|essay):)\s*",
    re.IGNORECASE,
)


class MalformedResponseError(ValueError):
    """Raised when model output cannot be interpreted."""


def strip_code_fence(content: str) -> str:
    """Remove a single enclosing Markdown code fence, if present."""
    match = _FENCE_RE.match(content)
    return match.group(1) if match else content


def clean_text_response(content: str) -> str:
    """Return plain text with fences and a leading preamble removed."""
    text = strip_code_fence(content).strip()
    text = _PREAMBLE_RE.sub("", text, count=1)
    return text.strip()


def extract_json_object(content: str) -> dict[str, Any]:
    """Parse the first JSON object found in model output.

    Tries the whole (unfenced) payload first, then the outermost ``{...}``
    span, since models sometimes wrap the object in prose.

    Raises:
        MalformedResponseError: If no JSON object can be decoded.
    """
    text = strip_code_fence(content).strip()
    if not text:
        raise MalformedResponseError("Empty response")

    candidates = [text]
    start, end = text.find("{"), text.rfind("}")
    if start != -1 and end > start:
        candidates.append(text[start:end + 1])

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    logger.debug("Could not decode JSON object from %d chars of output", len(text))
    raise MalformedResponseError("Response does not contain a JSON object")
