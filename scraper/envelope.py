"""
Unwraps the listing endpoint's response envelope.

Responses start with the anti-JSON-hijacking prefix )]}' followed by a JSON
array. Everything after the first marker is parsed.
"""

import json
from typing import Any

from .errors import DecodeError
from .models import Page

ENVELOPE_MARKER = ")]}'"


def decode_envelope(text: str) -> Any:
    """Return the JSON value that follows the first envelope marker."""
    _, marker, payload = text.partition(ENVELOPE_MARKER)
    if not marker:
        raise DecodeError(
            "Response is missing the )]}' envelope marker",
            details={'preview': text[:100]},
        )
    # Oversized integers and deep nesting raise ValueError/RecursionError,
    # not JSONDecodeError.
    try:
        return json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Invalid JSON after envelope marker: {e}") from e


def decode_page(text: str) -> Page:
    return Page(decode_envelope(text))
