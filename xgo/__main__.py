"""Entry point for ``python -m xgo``."""

from xgo.cli import app

app(prog_name="xgo")
