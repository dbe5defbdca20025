"""
Validation of caller-supplied query parameters.

These run before anything reaches the analysis tools: the network builder
assumes an already validated positive threshold.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional
import re

from utils.errors import InvalidQueryError, InvalidThresholdError


SENTIMENT_LABELS = ("positive", "negative", "neutral")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def sentiment_label(value: Any) -> Optional[str]:
    """Case-insensitive match against the three labels; anything else is None."""
    if not isinstance(value, str):
        return None
    label = value.strip().lower()
    return label if label in SENTIMENT_LABELS else None


def parse_threshold(value: Any) -> int:
    """Return ``value`` as a positive int or raise InvalidThresholdError."""
    if isinstance(value, bool):
        raise InvalidThresholdError(f"Invalid threshold: {value!r}. Must be a positive integer.")
    if isinstance(value, int):
        threshold = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidThresholdError(f"Invalid threshold: {value!r}. Must be a positive integer.")
        threshold = int(value)
    elif isinstance(value, str):
        try:
            threshold = int(value.strip())
        except ValueError:
            raise InvalidThresholdError(f"Invalid threshold: {value!r}. Must be a positive integer.") from None
    else:
        raise InvalidThresholdError(f"Invalid threshold: {value!r}. Must be a positive integer.")

    if threshold < 1:
        raise InvalidThresholdError(f"Invalid threshold: {value!r}. Must be a positive integer.")
    return threshold


def parse_sentiment_type(value: Optional[str]) -> Optional[str]:
    """Accept ``None``/empty or one of the three sentiment labels."""
    if value is None or value == "":
        return None
    label = str(value).strip().lower()
    if label not in SENTIMENT_LABELS:
        raise InvalidQueryError(
            f"Invalid sentiment type: {value!r}. Expected one of {', '.join(SENTIMENT_LABELS)}."
        )
    return label


def parse_date(value: Optional[str]) -> Optional[str]:
    """Accept ``None``/empty or a ``YYYY-MM-DD`` calendar date."""
    if value is None or value == "":
        return None
    text = str(value).strip()
    if not _DATE_RE.match(text):
        raise InvalidQueryError(f"Invalid date: {value!r}. Expected YYYY-MM-DD.")
    try:
        date.fromisoformat(text)
    except ValueError:
        raise InvalidQueryError(f"Invalid date: {value!r}. Expected YYYY-MM-DD.") from None
    return text
