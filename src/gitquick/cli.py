"""Command line interface for gitquick."""

import logging
import os
from pathlib import Path
from typing import Annotated

# A missing git should be reported by the command that needs it, not by GitPython's import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

import typer  # noqa: E402
from rich.console import Console  # noqa: E402
from rich.logging import RichHandler  # noqa: E402
from rich.markup import escape  # noqa: E402

from gitquick import __version__  # noqa: E402
from gitquick.git import DEFAULT_ACTIVE_DAYS, GitError, GitRunner  # noqa: E402

app = typer.Typer(help="Quick git shortcuts for branching and committing", no_args_is_help=True)
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

PathOption = Annotated[
    Path,
    typer.Option(help="Path to git repository", exists=True, file_okay=False, dir_okay=True),
]


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(err: GitError) -> typer.Exit:
    """Report an error on stderr and build the matching exit."""
    err_console.print(f"[red]Error:[/red] {escape(str(err))}")
    return typer.Exit(code=1)


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        console.print(f"gitquick {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show the version and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every git command that runs"),
) -> None:
    """Quick git shortcuts for branching and committing."""
    configure_logging(verbose)


@app.command()
def quick_branch(
    branch_name: Annotated[str, typer.Argument(help="Name of the new branch")],
    path: PathOption = Path("."),
) -> None:
    """Create a new branch and switch to it."""
    runner = GitRunner(path)
    try:
        runner.quick_branch(branch_name)
    except GitError as err:
        raise fail(err) from err
    console.print(f"Successfully created and switched to branch: {escape(branch_name)}")


@app.command()
def smart_commit(
    message: str = typer.Option(..., "--message", "-m", help="Commit message"),
    push: bool = typer.Option(False, "--push", "-p", help="Push changes after commit"),
    path: PathOption = Path("."),
) -> None:
    """Stage all changes, commit, and optionally push."""
    runner = GitRunner(path)
    try:
        runner.stage_all()
        console.print("Staged all changes")

        runner.commit(message)
        console.print(f"Successfully committed changes with message: {escape(message)}")

        if push:
            runner.push()
            console.print("Successfully pushed changes")
    except GitError as err:
        raise fail(err) from err


@app.command()
def list_active_branches(
    days: int = typer.Option(
        DEFAULT_ACTIVE_DAYS,
        "--days",
        "-d",
        help="Show branches modified within this many days (reserved, not applied yet)",
    ),
    path: PathOption = Path("."),
) -> None:
    """List recently active branches."""
    runner = GitRunner(path)
    try:
        output = runner.list_active_branches(days)
    except GitError as err:
        raise fail(err) from err
    console.print("Recently active branches:")
    console.print(output, markup=False)


if __name__ == "__main__":
    app()
