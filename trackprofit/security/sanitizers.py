"""
Input sanitization helpers.

Used to clean user supplied text before it is stored or sent to a language model.
"""

import re
import secrets
from typing import Any

MAX_INPUT_LENGTH = 1000
MAX_FILE_NAME_LENGTH = 100

_HTML_ENTITIES = {
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "&": "&amp;",
}

_TAG_RE = re.compile(r"<[^>]*>")
_PROTOCOL_RE = re.compile(r"(javascript|data|vbscript):", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=", re.IGNORECASE)
_ESCAPE_RE = re.compile(r"[<>\"'&]")
_CONTROL_RE = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
_FILE_NAME_RE = re.compile(r"[^a-zA-Z0-9._-]")
_UNDERSCORES_RE = re.compile(r"_{2,}")


def sanitize_html(value: str) -> str:
    """Strip every tag, script-capable protocols and inline event handlers."""
    cleaned = _TAG_RE.sub("", value)
    cleaned = _PROTOCOL_RE.sub("", cleaned)
    return _EVENT_HANDLER_RE.sub("", cleaned)


def sanitize_input(value: Any) -> str:
    """
    Make free text safe to store and render.

    Trims, HTML-escapes ``< > " ' &``, removes control characters and truncates to
    1000 characters. Anything that is not a non-empty string becomes ``""``.
    """
    if not value or not isinstance(value, str):
        return ""

    escaped = _ESCAPE_RE.sub(lambda match: _HTML_ENTITIES[match.group(0)], value.strip())
    return _CONTROL_RE.sub("", escaped)[:MAX_INPUT_LENGTH]


def sanitize_file_name(file_name: str) -> str:
    cleaned = _FILE_NAME_RE.sub("_", file_name)
    cleaned = _UNDERSCORES_RE.sub("_", cleaned)[:MAX_FILE_NAME_LENGTH]
    cleaned = re.sub(r"^[._]", "", cleaned)
    return re.sub(r"[._]$", "", cleaned)


def generate_nonce() -> str:
    """16 random bytes as 32 hexadecimal characters."""
    return secrets.token_hex(16)
