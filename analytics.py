"""Core data processing for the ChatGPT data package explorer.

Loads the user record and conversation export, then derives the numbers
shown by the CLI report (chat_gpt_summary.py) and the weekly chart
(chat_gpt_viz.py).
"""

from __future__ import annotations

import json
import logging
import math
import re
import time
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)

DAY_MS = 86_400_000
DAY_SECONDS = 86_400


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class StatsError(Exception):
    """Base class for every error raised while building the report."""


class FileReadError(StatsError):
    """An input file is missing or cannot be read."""


class ParseError(StatsError):
    """An input file is not valid JSON or has an unexpected shape."""


class EmptyInputError(StatsError):
    """An operation that needs at least one item received none."""


class InvalidArgumentError(StatsError, ValueError):
    """A caller supplied an argument outside the accepted range."""


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_json(path: str) -> Any:
    """Read and decode a UTF-8 JSON file.

    Args:
        path: Filesystem path of the JSON file.

    Returns:
        The decoded JSON value.

    Raises:
        FileReadError: If the file does not exist or cannot be read.
        ParseError: If the file contains invalid JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as exc:
        raise FileReadError(f"Cannot read {path}: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Invalid JSON in {path}: {exc}") from exc


def load_user_email(path: str = "data/user.json") -> str:
    """Load the account email from the export's user.json.

    Args:
        path: Filesystem path to the user record.

    Returns:
        The unmasked email address.

    Raises:
        FileReadError: If the file cannot be read.
        ParseError: If the file is not a JSON object with a string "email".
    """
    user = _read_json(path)
    if not isinstance(user, dict) or not isinstance(user.get("email"), str):
        raise ParseError(f"{path} does not contain a string 'email' field")
    return user["email"]


def load_conversations(path: str = "data/conversations.json") -> list[dict]:
    """Load conversations from an OpenAI export JSON file.

    Args:
        path: Filesystem path to the OpenAI conversations.json export.

    Returns:
        List of raw conversation dicts as exported by OpenAI.  Each dict
        contains a "create_time" and a "mapping" key with the message tree.

    Raises:
        FileReadError: If the file cannot be read.
        ParseError: If the file is not a JSON array.
    """
    conversations = _read_json(path)
    if not isinstance(conversations, list):
        raise ParseError(f"{path} does not contain a JSON array of conversations")
    return conversations


def mask_email(email: str) -> str:
    """Hide every local-part character after the third one.

    ``"abcdef@x.com"`` becomes ``"abc***@x.com"``; local parts of three
    characters or fewer are returned unchanged.
    """
    return re.sub(r"(?<=.{3}).(?=.*@)", "*", email)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def _is_epoch(value: object) -> bool:
    """True if *value* is epoch seconds that ``datetime`` can represent."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        datetime.fromtimestamp(value)
    except (OverflowError, OSError, ValueError):
        return False
    return True


def extract_user_message_timestamps(conversations: list[dict]) -> list[float]:
    """Collect the creation time of every user-authored message.

    Walks each conversation's mapping in insertion order.  Nodes without a
    message, messages from any other role, and messages whose create_time
    is missing or not a number are skipped.

    Args:
        conversations: List of raw conversation dicts from
            ``load_conversations``.

    Returns:
        Flat list of timestamps in epoch milliseconds, one per qualifying
        user message.
    """
    timestamps: list[float] = []
    skipped = 0

    for chat in conversations:
        mapping = chat.get("mapping") if isinstance(chat, dict) else None
        if not isinstance(mapping, dict):
            continue

        for node in mapping.values():
            message = node.get("message") if isinstance(node, dict) else None
            if not isinstance(message, dict):
                continue

            author = message.get("author")
            if not isinstance(author, dict) or author.get("role") != "user":
                continue

            create_time = message.get("create_time")
            if not _is_epoch(create_time):
                skipped += 1
                continue
            timestamps.append(create_time * 1000)

    if skipped:
        logger.debug("Skipped %d user messages without a usable create_time", skipped)
    if conversations and not timestamps:
        logger.warning(
            "Loaded %d conversations but found no user messages. "
            "The OpenAI export format may have changed.",
            len(conversations),
        )
    return timestamps


def find_first_conversation(conversations: list[dict]) -> dict:
    """Return the conversation with the earliest create_time.

    The input list is scanned once and left untouched.  When several
    conversations share the earliest time, the first of them wins.

    Args:
        conversations: List of raw conversation dicts.

    Returns:
        The earliest conversation dict.

    Raises:
        EmptyInputError: If *conversations* is empty or none of them has a
            numeric create_time.
    """
    first = None
    for chat in conversations:
        create_time = chat.get("create_time") if isinstance(chat, dict) else None
        if not _is_epoch(create_time):
            continue
        if first is None or create_time < first["create_time"]:
            first = chat

    if first is None:
        raise EmptyInputError("No conversation with a creation time was found")
    return first


# ---------------------------------------------------------------------------
# Week buckets
# ---------------------------------------------------------------------------

def legacy_week_number(moment: datetime) -> int:
    """Week of the year using the exporter's legacy numbering.

    Counts fractional days since local midnight on January 1, offsets them
    by January 1's weekday (Sunday = 0) and rounds up to whole weeks.  This
    is not ISO-8601: weeks roll over at Saturday 00:00 local time, a year
    can reach week 53, and Dec 31 / Jan 1 never share a week.
    """
    jan1 = datetime(moment.year, 1, 1)
    past_days = (moment.timestamp() - jan1.timestamp()) / DAY_SECONDS
    jan1_weekday = (jan1.weekday() + 1) % 7
    return math.ceil((past_days + jan1_weekday + 1) / 7)


def week_bucket_key(timestamp_ms: float) -> tuple[int, int]:
    """Map an epoch-millisecond timestamp to its (year, week) bucket."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000)
    return moment.year, legacy_week_number(moment)


def message_count_by_weeks(timestamps: list[float]) -> list[int]:
    """Count messages per (year, week) bucket.

    Args:
        timestamps: Epoch-millisecond timestamps, one per message.

    Returns:
        One count per non-empty bucket, in the order the buckets were first
        encountered (not sorted chronologically).
    """
    counts: dict[tuple[int, int], int] = {}
    for ts in timestamps:
        key = week_bucket_key(ts)
        counts[key] = counts.get(key, 0) + 1
    return list(counts.values())


# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------

def average_message_count_days(
    timestamps: list[float],
    day_count: int,
    now_ms: float | None = None,
) -> int:
    """Average messages per day over a trailing window, rounded up.

    Args:
        timestamps: Epoch-millisecond timestamps, one per message.
        day_count: Window length in days.  Must be positive.
        now_ms: Reference instant in epoch milliseconds.  Defaults to the
            wall clock at call time.

    Returns:
        ``ceil(messages_in_window / day_count)``, where a message is in the
        window when ``now_ms - ts < day_count * DAY_MS``.

    Raises:
        InvalidArgumentError: If *day_count* is not positive.
    """
    if day_count <= 0:
        raise InvalidArgumentError(f"day_count must be positive, got {day_count}")
    if now_ms is None:
        now_ms = time.time() * 1000

    window_ms = day_count * DAY_MS
    in_window = sum(1 for ts in timestamps if now_ms - ts < window_ms)
    return math.ceil(in_window / day_count)


def days_since(then: datetime, now: datetime | None = None) -> int:
    """Whole days elapsed from *then* to *now*, rounded up."""
    if now is None:
        now = datetime.now()
    return math.ceil((now - then).total_seconds() / DAY_SECONDS)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def compute_report_stats(
    email: str,
    conversations: list[dict],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Compute every figure shown by the CLI report.

    *now* is captured once so that every window shares the same reference
    instant.

    Args:
        email: Unmasked account email from ``load_user_email``.
        conversations: List of raw conversation dicts.
        now: Reference instant (naive local time).  Defaults to
            ``datetime.now()``.

    Returns:
        Dict with keys: masked_email, first_date, first_date_label,
        days_elapsed, total_conversations, total_messages,
        average_all_time, average_last_month, average_last_week,
        weekly_counts.

    Raises:
        EmptyInputError: If there are no conversations.
    """
    if now is None:
        now = datetime.now()
    now_ms = now.timestamp() * 1000

    first = find_first_conversation(conversations)
    first_date = datetime.fromtimestamp(first["create_time"])
    days_elapsed = days_since(first_date, now)

    messages = extract_user_message_timestamps(conversations)

    return {
        "masked_email": mask_email(email),
        "first_date": first_date,
        "first_date_label": first_date.strftime("%B %d, %Y"),
        "days_elapsed": days_elapsed,
        "total_conversations": len(conversations),
        "total_messages": len(messages),
        "average_all_time": average_message_count_days(messages, max(days_elapsed, 1), now_ms),
        "average_last_month": average_message_count_days(messages, 30, now_ms),
        "average_last_week": average_message_count_days(messages, 7, now_ms),
        "weekly_counts": message_count_by_weeks(messages),
    }
