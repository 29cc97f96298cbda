"""
Git lookups for the status line.

All calls are read-only, bounded by a short timeout, and never raise: when git
is missing, slow, or the directory is not a work tree the caller simply sees
"not a repository".
"""
import logging
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Seconds per git call; the status line is redrawn often
GIT_TIMEOUT = 0.5


@dataclass(frozen=True)
class RepositoryStatus:
    is_repository: bool = False
    branch: str = ""


@dataclass(frozen=True)
class DiffStat:
    added: int = 0
    removed: int = 0


NOT_A_REPOSITORY = RepositoryStatus()


def _run_git(args, directory, timeout):
    """Run a git subcommand, returning the CompletedProcess or None on failure"""
    try:
        return subprocess.run(
            ['git', *args],
            cwd=directory,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout
        )
    except (OSError, subprocess.SubprocessError):
        logger.debug("git %s failed in %s", " ".join(args), directory or ".", exc_info=True)
        return None


def query_repository_status(directory=None, timeout=GIT_TIMEOUT):
    """Report whether directory is inside a work tree and its current branch.

    The branch is empty on a detached HEAD.
    """
    result = _run_git(['rev-parse', '--git-dir'], directory, timeout)
    if result is None or result.returncode != 0:
        return NOT_A_REPOSITORY

    branch_result = _run_git(['branch', '--show-current'], directory, timeout)
    branch = ""
    if branch_result is not None and branch_result.returncode == 0:
        branch = branch_result.stdout.strip()
    return RepositoryStatus(is_repository=True, branch=branch)


def parse_numstat(output):
    """Sum the added/removed columns of `git diff --numstat` output.

    Binary files report "-" for both columns and count as zero.
    """
    added = removed = 0
    for line in output.splitlines():
        parts = line.split('\t')
        if len(parts) < 2:
            continue
        if parts[0].isdigit():
            added += int(parts[0])
        if parts[1].isdigit():
            removed += int(parts[1])
    return DiffStat(added, removed)


def query_diff_stat(directory=None, timeout=GIT_TIMEOUT):
    """Unstaged line changes in the work tree"""
    result = _run_git(['diff', '--numstat'], directory, timeout)
    if result is None or result.returncode != 0:
        return DiffStat()
    return parse_numstat(result.stdout)
