"""Shared fixtures for chatgpt_stats tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from helpers import epoch, make_conversation, write_json


@pytest.fixture()
def now() -> datetime:
    """Fixed reference instant shared by report tests."""
    return datetime(2024, 1, 15, 10, 0, 0)


@pytest.fixture()
def conversations() -> list[dict]:
    """Two conversations with three user messages and one assistant reply.

    The earlier conversation starts on 2024-01-05 10:00 local time.
    """
    return [
        make_conversation(
            [epoch("2024-01-14T09:00:00"), epoch("2024-01-14T09:05:00")],
            assistant_times=[epoch("2024-01-14T09:01:00")],
        ),
        make_conversation([epoch("2024-01-05T10:00:00")]),
    ]


@pytest.fixture()
def export_files(tmp_path: Path, conversations: list[dict]) -> tuple[str, str]:
    """Write user.json and conversations.json and return their paths."""
    user_path = write_json(tmp_path / "user.json", {"email": "abcdef@example.com"})
    conv_path = write_json(tmp_path / "conversations.json", conversations)
    return user_path, conv_path
