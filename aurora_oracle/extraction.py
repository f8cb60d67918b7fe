"""Pull JSON payloads out of free-form model replies.

Nothing in here raises on bad input: a reply without a usable block yields
``None`` and the caller falls back to the narrative text.
"""

import json
import logging
import re
from typing import Any, Optional


_TAGGED_BLOCK = re.compile(r"```json\n([\s\S]*?)\n```")
_UNTAGGED_BLOCK = re.compile(r"```\n([\s\S]*?)\n```")
_STRIP_BLOCK = re.compile(r"```json[\s\S]*?```")


def extract_json(text: str) -> Optional[Any]:
    """Return the decoded contents of the first fenced JSON block in ``text``.

    A block tagged ``json`` wins over an untagged one wherever they appear.
    Returns None when there is no block or its body is not valid JSON.
    """
    if not text:
        return None
    m = _TAGGED_BLOCK.search(text) or _UNTAGGED_BLOCK.search(text)
    if not m:
        return None
    try:
        return json.loads(m.group(1))
    except json.JSONDecodeError as e:
        logging.warning("Failed to parse extracted JSON: %s", e)
        return None


def strip_json_block(text: str) -> str:
    """Remove the fenced data block from a reply, leaving the narrative around it."""
    text = text or ""
    if _STRIP_BLOCK.search(text):
        return _STRIP_BLOCK.sub("", text, count=1).strip()
    return _UNTAGGED_BLOCK.sub("", text, count=1).strip()


def parse_json_reply(text: str) -> Optional[Any]:
    """Decode a reply that should be pure JSON, tolerating a fenced wrapper."""
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError):
        return extract_json(text)
