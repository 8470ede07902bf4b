from datetime import datetime, timezone
from typing import Any

from shared.config import config
from shared.logging_utils import setup_logging

__all__ = ["config", "setup_logging", "truncate_text", "is_blank", "utc_now"]


def truncate_text(text: str, max_length: int) -> str:
    """Return at most max_length characters of text"""
    if len(text) > max_length:
        return text[:max_length]
    return text


def is_blank(value: Any) -> bool:
    """True for non-strings and for strings holding only whitespace"""
    return not isinstance(value, str) or not value.strip()


def utc_now() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
