"""Helper utilities"""

import math
import time
from datetime import datetime
from typing import Optional

import pandas as pd

from config.settings import UNAVAILABLE, TRUE_VALUES


def to_int_or_none(value) -> Optional[int]:
    """Coerce a raw metric to int; None for blanks, garbage and UNAVAILABLE."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and pd.isna(value):
        return None

    if isinstance(value, int):
        number = value
    else:
        value_str = str(value).strip().replace(',', '')
        if not value_str:
            return None
        try:
            number = int(value_str)
        except ValueError:
            try:
                number = int(float(value_str))
            except (ValueError, OverflowError):
                return None

    if number == UNAVAILABLE:
        return None
    return number


def to_float_or_none(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip().replace(',', ''))
    except ValueError:
        return None
    if pd.isna(number) or math.isinf(number):
        return None
    return number


def to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


def clean_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and pd.isna(value):
        return ""
    return str(value).strip()


def now_millis() -> int:
    return int(time.time() * 1000)


def to_epoch_millis(value) -> Optional[int]:
    """
    Convert a capture timestamp to epoch milliseconds.

    Accepts datetimes, epoch numbers (seconds or milliseconds) and
    ISO-like strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)

    number = to_float_or_none(value)
    if number is not None:
        # Anything past year 2286 in seconds is already milliseconds
        return int(number) if number > 1e10 else int(number * 1000)
    if isinstance(value, (int, float)):
        return None

    text = clean_text(value)
    if not text:
        return None
    try:
        return int(pd.Timestamp(text).timestamp() * 1000)
    except (ValueError, OverflowError):
        return None


def format_timestamp(millis: int) -> str:
    """Format epoch milliseconds as 'YYYY-MM-DD HH:MM:SS' (UTC)"""
    return pd.to_datetime(millis, unit="ms").strftime("%Y-%m-%d %H:%M:%S")
