"""
Logging setup with secret and phone-number redaction.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from rich.logging import RichHandler

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = ("token", "apikey", "api_key", "password", "key", "secret", "authorization")

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE)
_PHONE_RE = re.compile(r"\+\d{7,15}")


def mask_phone_number(value: str) -> str:
    """Replace every digit except the last four with ``*``."""
    return re.sub(r"\d(?=\d{4})", "*", value)


def sanitize(value: Any) -> Any:
    """Return a copy of ``value`` with secrets and phone numbers masked."""
    if isinstance(value, Mapping):
        return {key: _sanitize_item(str(key), item) for key, item in value.items()}
    if isinstance(value, str):
        return _sanitize_text(value)
    return value


def _sanitize_item(key: str, item: Any) -> Any:
    key_lower = key.lower()

    if isinstance(item, str):
        if any(field in key_lower for field in SENSITIVE_KEYS):
            return REDACTED if item else ""
        if ("phone" in key_lower or key_lower == "number") and len(item) > 4:
            return mask_phone_number(item)

    return sanitize(item)


def _sanitize_text(text: str) -> str:
    text = _BEARER_RE.sub(rf"\1{REDACTED}", text)
    return _PHONE_RE.sub(lambda m: mask_phone_number(m.group(0)), text)


class RedactingFilter(logging.Filter):
    """Masks tokens and caller phone numbers before records are emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _sanitize_text(record.msg)

        if isinstance(record.args, Mapping):
            record.args = sanitize(record.args)
        elif isinstance(record.args, tuple):
            record.args = tuple(sanitize(arg) for arg in record.args)

        return True


def configure_logging(verbose: bool = False) -> None:
    """Send package logs through rich with redaction enabled."""
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.addFilter(RedactingFilter())

    logger = logging.getLogger("slotbroker")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
