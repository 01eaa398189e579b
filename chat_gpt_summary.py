"""chat_gpt_summary.py

Print usage statistics for a ChatGPT data package to the terminal:
masked account email, first-contact date, totals, rolling daily averages
and a weekly message chart.

Usage: python chat_gpt_summary.py [user_file] [conversations_file]
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from analytics import (
    StatsError,
    compute_report_stats,
    load_conversations,
    load_user_email,
)
from terminal_chart import render_chart

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------
DATA_DIR = Path("data")
USER_FILE = DATA_DIR / "user.json"
CONVERSATIONS_FILE = DATA_DIR / "conversations.json"
CHART_HEIGHT = 15
CHART_WIDTH = 70


def _log_statistic(console: Console, title: str, value: Any, color: str) -> None:
    if isinstance(value, int):
        value = f"{value:,}"
    console.print(f"[{color}]{escape(title)}[/{color}]: {escape(str(value))}")


def print_weekly_chart(weekly_counts: list[int], console: Console) -> None:
    """Print the message-count-by-week chart in blue."""
    lines = render_chart(
        weekly_counts,
        height=CHART_HEIGHT,
        width=CHART_WIDTH,
        title="Message count by weeks",
        x_label="weeks",
        y_label="messages",
    )
    for line in lines:
        console.print(Text(line, style="blue"))


def print_report(stats: dict[str, Any], console: Console | None = None) -> None:
    """Print the summary report to the terminal.

    Args:
        stats: Report dict from ``analytics.compute_report_stats``.
        console: Rich console to write to.  Defaults to stdout.
    """
    console = console or Console()

    console.print(Text("🧠 ChatGPT Data Package Explorer 🧠", style="yellow"))
    console.print()
    _log_statistic(console, "Statistics for", stats["masked_email"], "blue")
    console.print()

    _log_statistic(
        console,
        "You met ChatGPT on",
        f"{stats['first_date_label']} ({stats['days_elapsed']} days ago)",
        "green",
    )
    _log_statistic(console, "Total conversations", stats["total_conversations"], "cyan")
    _log_statistic(console, "Total messages", stats["total_messages"], "cyan")
    console.print()

    _log_statistic(
        console, "Average message count per days (beginning)", stats["average_all_time"], "cyan"
    )
    _log_statistic(
        console, "Average message count per days (last month)", stats["average_last_month"], "cyan"
    )
    _log_statistic(
        console, "Average message count per days (last week)", stats["average_last_week"], "cyan"
    )
    console.print()

    print_weekly_chart(stats["weekly_counts"], console)


def main(
    user_path: str | Path = USER_FILE,
    conversations_path: str | Path = CONVERSATIONS_FILE,
    now: datetime | None = None,
) -> None:
    """Load both export files and print the report.

    Exits with status 1 if a file cannot be read or parsed, or if the
    export holds no conversations.
    """
    try:
        email = load_user_email(str(user_path))
        conversations = load_conversations(str(conversations_path))
        stats = compute_report_stats(email, conversations, now=now)
    except StatsError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        Console(stderr=True).print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    print_report(stats)


def cli() -> None:
    """Console-script entry point."""
    parser = argparse.ArgumentParser(description="Summarize a ChatGPT data package export")
    parser.add_argument("user_file", nargs="?", default=str(USER_FILE),
                        help=f"Path to user.json (default: {USER_FILE})")
    parser.add_argument("conversations_file", nargs="?", default=str(CONVERSATIONS_FILE),
                        help=f"Path to conversations.json (default: {CONVERSATIONS_FILE})")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    main(args.user_file, args.conversations_file)


if __name__ == "__main__":
    cli()
