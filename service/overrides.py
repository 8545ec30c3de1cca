"""
Override cookie codec.

The client's personal overrides travel in one cookie as a JSON object of
flag id -> bool, percent-encoded so the value is cookie-safe:
  {"beta_search":true}  ->  %7B%22beta_search%22%3Atrue%7D

- decode_overrides(raw) never raises: missing / empty / oversized /
  malformed cookies degrade to "no overrides"
- percent-encoded and plain JSON are both read, as is the Express
  JSON-cookie form ("j:{...}", usually percent-encoded as "j%3A%7B...")
- only string keys with real boolean values survive decoding; the cookie is
  client input and stays advisory
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Mapping
from urllib.parse import quote, unquote

log = logging.getLogger(__name__)

JSON_COOKIE_PREFIX = "j:"
# browsers cap a cookie at ~4KB
MAX_COOKIE_LENGTH = 4096


def _clean(data: Mapping[Any, Any]) -> Dict[str, bool]:
    return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, bool)}


def decode_overrides(raw: Any) -> Dict[str, bool]:
    if raw is None or raw == "":
        return {}
    if isinstance(raw, Mapping):
        return _clean(raw)
    if not isinstance(raw, str) or len(raw) > MAX_COOKIE_LENGTH:
        return {}

    text = unquote(raw)
    if text.startswith(JSON_COOKIE_PREFIX):
        text = text[len(JSON_COOKIE_PREFIX):]
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        log.debug("Ignoring undecodable override cookie: %r", raw[:64])
        return {}
    if not isinstance(data, dict):
        return {}
    return _clean(data)


def encode_overrides(flags: Mapping[str, bool]) -> str:
    return quote(json.dumps(dict(flags), separators=(",", ":"), sort_keys=True), safe="")
