"""
Builds listugcposts RPC URLs from a Google Maps place URL.

The place URL carries the feature id (0x...:0x...) in its !1s data segment.
The RPC takes every option inside a single protobuf-style ``pb`` parameter.
"""

import re
from typing import Union
from urllib.parse import unquote, urlencode

from .errors import ValidationError
from .models import SortType

DEFAULT_BASE_URL = "https://www.google.com/maps/rpc/listugcposts"

PB_TEMPLATE = (
    "!1m7!1s{place_id}!3s{query}!6m4!4m1!1e1!4m1!1e3"
    "!2m2!1i10!2s{cursor}"
    "!7e81!8m9!2b1!3b1!5b1!7b1!12m4!1b1!2b1!4m1!1e1"
    "!11m4!1e3!2e1!6m1!1i2!13m1!1e{sort}"
)

_PLACE_ID_RE = re.compile(r"!1s(0x[0-9a-fA-F]+:0x[0-9a-fA-F]+)")


def extract_place_id(url: str) -> str:
    """Return the feature id embedded in a place URL."""
    match = _PLACE_ID_RE.search(unquote(url))
    if not match:
        raise ValidationError(f"No place id found in URL: {url}")
    return match.group(1)


def _escape_pb(value: str) -> str:
    # '*' and '!' are pb delimiters and must be escaped inside string fields.
    return value.replace("*", "*2A").replace("!", "*21")


def build_request_url(
    url: str,
    sort: Union[SortType, int],
    next_page: str = "",
    search_query: str = "",
    base_url: str = DEFAULT_BASE_URL,
    hl: str = "en",
) -> str:
    pb = PB_TEMPLATE.format(
        place_id=extract_place_id(url),
        query=_escape_pb(search_query or ""),
        cursor=_escape_pb(next_page or ""),
        sort=int(sort),
    )
    params = {"authuser": 0, "hl": hl, "pb": pb}
    return f"{base_url}?{urlencode(params, safe='!:*')}"
