#!/usr/bin/env python3
"""
Claude Code status line with context usage, cost, and git branch.

- Reads the session JSON Claude Code pipes in on stdin
- Looks up the current git branch (read-only, short timeout)
- Prints a single line and always exits 0

Example:
  echo '{"model": {"display_name": "Sonnet"}, "workspace": {"current_dir": "/path/to/repo"}}' | \
    python statusline.py

Output:
  repo/ | Sonnet | ░░░░░░░░ 0% | $0.00 | 0.0s | +0 -0 | main
"""
import argparse
import logging
import os
import sys
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

from repo_status import GIT_TIMEOUT, NOT_A_REPOSITORY, query_diff_stat, query_repository_status
from session_snapshot import parse_snapshot

logger = logging.getLogger(__name__)

BAR_WIDTH = 8
BAR_FULL = "█"
BAR_EMPTY = "░"


def context_percent(snapshot):
    """Share of the context window in use, floored and clamped to 0..100"""
    if snapshot.context_window_size <= 0:
        return 0
    percent = snapshot.total_tokens * 100 // snapshot.context_window_size
    return max(0, min(100, percent))


def render_bar(percent, width=BAR_WIDTH):
    filled = percent * width // 100
    return BAR_FULL * filled + BAR_EMPTY * (width - filled)


def format_cost(value):
    """Dollar amount with two decimals, rounding half up ($0.005 -> $0.01)"""
    try:
        amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        logger.debug("Cannot format cost %r", value, exc_info=True)
        amount = Decimal("0.00")
    return f"${amount}"


def format_duration(ms):
    """Milliseconds as seconds with one decimal, truncated (12399 -> 12.3)"""
    try:
        seconds = (Decimal(int(ms)) / 1000).quantize(Decimal("0.1"), rounding=ROUND_DOWN)
    except (TypeError, ValueError, InvalidOperation):
        logger.debug("Cannot format duration %r", ms, exc_info=True)
        return "0"
    return str(seconds)


def format_lines(added, removed):
    return f"+{added} -{removed}"


def one_line(text):
    """Flatten CR/LF so interpolated names cannot split the status line"""
    return text.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


def format_git_segment(status, diff_stat=None):
    if not status.is_repository:
        return " | no repo"
    if not status.branch:
        return ""
    segment = f" | {one_line(status.branch)}"
    if diff_stat is not None:
        segment += f" (+{diff_stat.added},-{diff_stat.removed})"
    return segment


def render_status_line(snapshot, repo_status, diff_stat=None):
    """Assemble the status line (without trailing newline)"""
    percent = context_percent(snapshot)
    parts = [
        f"{one_line(snapshot.folder_name)}/",
        one_line(snapshot.model_display_name),
        f"{render_bar(percent)} {percent}%",
        format_cost(snapshot.total_cost_usd),
        f"{format_duration(snapshot.total_api_duration_ms)}s",
        format_lines(snapshot.total_lines_added, snapshot.total_lines_removed),
    ]
    return " | ".join(parts) + format_git_segment(repo_status, diff_stat)


def build_status_line(text, cwd_provider=os.getcwd, repo_query=query_repository_status, diff_query=None):
    """Parse status JSON and render it against the repository at cwd_provider().

    repo_query and diff_query take the directory and return a RepositoryStatus
    and DiffStat respectively; diff_query is only consulted when given.
    """
    snapshot = parse_snapshot(text)

    try:
        directory = cwd_provider()
    except OSError:
        # Working directory was removed underneath us
        logger.debug("Cannot resolve working directory", exc_info=True)
        return render_status_line(snapshot, NOT_A_REPOSITORY)

    repo = repo_query(directory)
    diff_stat = None
    if diff_query is not None and repo.is_repository and repo.branch:
        diff_stat = diff_query(directory)
    return render_status_line(snapshot, repo, diff_stat)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Render a Claude Code status line from session JSON on stdin')
    parser.add_argument('--verbose', action='store_true', help='Debug logging to stderr')
    parser.add_argument('--diff-stat', action='store_true', help='Append unstaged +added,-removed after the branch')
    parser.add_argument('--git-timeout', type=float, default=GIT_TIMEOUT,
                        help=f'Seconds to wait for each git call (default: {GIT_TIMEOUT})')
    # Unknown arguments from the host are ignored; the line must still render
    return parser.parse_known_args(argv)


def _read_input(stream):
    if stream is None:
        return ""
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError):
        logger.debug("Cannot read status input", exc_info=True)
        return ""


def main(argv=None, stdin=None, stdout=None):
    args, unknown = parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )
    if unknown:
        logger.debug("Ignoring unknown arguments: %s", " ".join(unknown))

    # Input is UTF-8 and the bar glyphs need UTF-8, whatever the locale says
    if stdin is None:
        stdin = sys.stdin
        if hasattr(stdin, "reconfigure"):
            stdin.reconfigure(encoding="utf-8", errors="replace")
    if stdout is None:
        stdout = sys.stdout
        if hasattr(stdout, "reconfigure"):
            stdout.reconfigure(encoding="utf-8", errors="replace")

    def repo_query(directory):
        return query_repository_status(directory, timeout=args.git_timeout)

    def diff_query(directory):
        return query_diff_stat(directory, timeout=args.git_timeout)

    line = build_status_line(
        _read_input(stdin),
        repo_query=repo_query,
        diff_query=diff_query if args.diff_stat else None,
    )
    stdout.write(f"{line}\n")
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
