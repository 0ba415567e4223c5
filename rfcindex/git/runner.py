"""Thin git wrapper for the RFC working copy."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 30


@dataclass
class GitResult:
    """Outcome of one git invocation against the working copy."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out


def _failed(stderr: str, timed_out: bool = False) -> GitResult:
    return GitResult(returncode=-1, stdout="", stderr=stderr, timed_out=timed_out)


def run_git(args: list[str], cwd: Path, timeout: int = DEFAULT_TIMEOUT) -> GitResult:
    """Run `git -C cwd <args>` and report the outcome.

    Clone and pull failures are decided by the caller from the result, so
    this never raises: a timeout or a missing git binary comes back as a
    failed GitResult with the reason in stderr.
    """
    try:
        proc = subprocess.run(
            ["git", "-C", str(cwd), *args],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return _failed(f"Command timed out after {timeout}s", timed_out=True)
    except FileNotFoundError:
        return _failed("git executable not found")
    return GitResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
