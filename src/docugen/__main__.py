"""Allow ``python -m docugen``."""

from docugen.cli.main import cli

cli()
