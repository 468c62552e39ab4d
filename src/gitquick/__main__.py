"""Allow running gitquick with ``python -m gitquick``."""

from gitquick.cli import app

app(prog_name="gitquick")
