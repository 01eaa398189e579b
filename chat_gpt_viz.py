"""chat_gpt_viz.py

Render the weekly message counts of a ChatGPT export as a PNG chart with
rolling averages.

Usage: python chat_gpt_viz.py [conversations_file] [output_dir]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from analytics import (
    StatsError,
    extract_user_message_timestamps,
    load_conversations,
    message_count_by_weeks,
)

logger = logging.getLogger(__name__)

CHART_FILENAME = "weekly_messages.png"


def weekly_frame(counts: list[int]) -> pd.DataFrame:
    """Build a DataFrame of weekly counts with rolling and lifetime averages.

    Args:
        counts: Per-week message counts from
            ``analytics.message_count_by_weeks``.

    Returns:
        DataFrame with columns week (1-based position), messages, avg_4w
        and avg_lifetime.
    """
    df = pd.DataFrame({"week": range(1, len(counts) + 1), "messages": counts})
    df["messages"] = df["messages"].astype(int)
    df["avg_4w"] = df["messages"].rolling(window=4, min_periods=1).mean()
    df["avg_lifetime"] = df["messages"].expanding().mean()
    return df


def save_weekly_chart(df: pd.DataFrame, path: str) -> None:
    """Plot weekly message counts and their averages to *path*."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    sns.set_theme(style="whitegrid")
    plt.figure(figsize=(15, 8))
    plt.bar(df["week"], df["messages"], alpha=0.5, color="skyblue", label="Weekly Messages")
    plt.plot(df["week"], df["avg_4w"], color="red", linewidth=2, label="4-week Average")
    plt.plot(df["week"], df["avg_lifetime"], color="purple", linewidth=2, label="Lifetime Average to Date")
    plt.title("Message count by weeks", fontsize=14, pad=20)
    plt.xlabel("weeks", fontsize=12)
    plt.ylabel("messages", fontsize=12)
    plt.legend()
    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()


def main(conversations_path: str = "data/conversations.json", output_dir: str = "chat_analytics") -> str:
    """Write the weekly chart for *conversations_path* and return its path.

    Exits with status 1 if the export cannot be read or parsed.
    """
    try:
        conversations = load_conversations(conversations_path)
    except StatsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        sys.exit(1)

    counts = message_count_by_weeks(extract_user_message_timestamps(conversations))
    path = os.path.join(output_dir, CHART_FILENAME)
    save_weekly_chart(weekly_frame(counts), path)
    logger.info("Saved weekly chart with %d weeks to %s", len(counts), path)
    return path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Plot weekly ChatGPT message counts")
    parser.add_argument("conversations_file", nargs="?", default="data/conversations.json")
    parser.add_argument("output_dir", nargs="?", default="chat_analytics")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print(f"Chart saved to {main(args.conversations_file, args.output_dir)}")
