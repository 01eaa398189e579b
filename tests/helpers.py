"""Shared test helpers for chatgpt_stats tests.

Regular functions (not fixtures) that can be imported by any test module.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path


def epoch(iso: str) -> float:
    """Local-time ISO string to epoch seconds."""
    return datetime.fromisoformat(iso).timestamp()


def epoch_ms(iso: str) -> float:
    """Local-time ISO string to epoch milliseconds."""
    return epoch(iso) * 1000


def make_conversation(
    user_times: list[float | None],
    create_time: float | None = None,
    assistant_times: list[float] | None = None,
) -> dict:
    """Build a minimal conversation dict in the ChatGPT export structure.

    Args:
        user_times: create_time of each user message (None is kept as-is).
        create_time: Conversation create_time.  Defaults to the first
            user message time.
        assistant_times: create_time of each assistant reply.

    Returns:
        A conversation dict with a system node that has no message.
    """
    mapping: dict[str, dict] = {"system-node": {"message": None}}
    for i, ts in enumerate(user_times):
        mapping[f"user-{i}"] = {
            "message": {
                "author": {"role": "user"},
                "create_time": ts,
                "content": {"parts": [f"question {i}"]},
            }
        }
    for i, ts in enumerate(assistant_times or []):
        mapping[f"assistant-{i}"] = {
            "message": {
                "author": {"role": "assistant"},
                "create_time": ts,
                "content": {"parts": [f"answer {i}"]},
            }
        }
    if create_time is None and user_times:
        create_time = user_times[0]
    return {"title": "Test Chat", "create_time": create_time, "mapping": mapping}


def write_json(path: Path, data: object) -> str:
    """Write *data* as JSON and return the string path."""
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)
