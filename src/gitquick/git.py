"""Git command operations."""

import logging
from dataclasses import dataclass
from pathlib import Path

from git.cmd import Git
from git.exc import GitCommandNotFound

logger = logging.getLogger(__name__)

ACTIVE_BRANCH_FORMAT = "%(refname:short) (last modified: %(committerdate:relative))"
DEFAULT_ACTIVE_DAYS = 7


def decode_output(data: bytes) -> str:
    """Decode git output, replacing bytes that are not valid UTF-8."""
    return data.decode("utf-8", errors="replace")


class GitError(Exception):
    """Git operation error."""


class GitExecutionError(GitError):
    """The git executable could not be launched."""


class GitCommandFailed(GitError):
    """Git ran but exited with a non-zero status."""

    def __init__(self, args: tuple[str, ...], status: int, stderr: str) -> None:
        """Initialize error.

        Args:
            args: Arguments passed to git
            status: Exit status of the git process
            stderr: Captured standard error, unmodified apart from replacing invalid UTF-8
        """
        super().__init__(f"Git command failed: {stderr}")
        self.command = args
        self.status = status
        self.stderr = stderr


@dataclass(frozen=True)
class GitResult:
    """Outcome of a single git invocation."""

    args: tuple[str, ...]
    status: int
    stdout: str
    stderr: str


class GitRunner:
    """Runs canned git commands in a working directory."""

    def __init__(self, path: Path = Path(".")) -> None:
        """Initialize runner."""
        self.path = path
        self.git = Git(str(path))

    def run(self, *args: str) -> GitResult:
        """Run ``git <args>`` and wait for it to exit.

        Raises:
            GitExecutionError: If git could not be started
            GitCommandFailed: If git exited with a non-zero status
        """
        command = [self.git.GIT_PYTHON_GIT_EXECUTABLE, *args]
        logger.debug("Running %s in %s", command, self.path)
        try:
            # execute() would strip trailing newlines, so read the pipes ourselves
            process = self.git.execute(command, as_process=True)
        except GitCommandNotFound as err:
            raise GitExecutionError(f"Failed to execute git command: {err}") from err

        stdout_bytes, stderr_bytes = process.communicate()
        status = process.proc.returncode
        stdout = decode_output(stdout_bytes)
        stderr = decode_output(stderr_bytes)

        if status != 0:
            logger.debug("git exited with status %s", status)
            raise GitCommandFailed(tuple(args), status, stderr)
        return GitResult(tuple(args), status, stdout, stderr)

    def quick_branch(self, branch_name: str) -> GitResult:
        """Create a new branch and switch to it."""
        return self.run("checkout", "-b", branch_name)

    def stage_all(self) -> GitResult:
        """Stage every change in the working tree."""
        return self.run("add", ".")

    def commit(self, message: str) -> GitResult:
        """Commit staged changes with ``message`` exactly as given."""
        return self.run("commit", "-m", message)

    def push(self) -> GitResult:
        """Push the current branch to its upstream."""
        return self.run("push")

    def smart_commit(self, message: str, push: bool = False) -> list[GitResult]:
        """Stage all changes, commit, and optionally push.

        Steps run in order and stop at the first failure. Nothing is rolled
        back, so whatever was staged or committed before the failure stays.
        """
        results = [self.stage_all(), self.commit(message)]
        if push:
            results.append(self.push())
        return results

    def list_active_branches(self, days: int = DEFAULT_ACTIVE_DAYS) -> str:
        """List local branches, most recently committed first.

        ``days`` is accepted but not applied as a filter yet; every local
        branch is listed.
        """
        logger.debug("Listing active branches (days=%s, not applied)", days)
        result = self.run(
            "for-each-ref",
            "--sort=-committerdate",
            f"--format={ACTIVE_BRANCH_FORMAT}",
            "refs/heads/",
        )
        return result.stdout
