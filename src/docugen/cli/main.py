"""DocuGen CLI - docugen command."""

from pathlib import Path

import click

from docugen.cli.diff import diff_command
from docugen.cli.serve import serve_command
from docugen.config.loader import load_config
from docugen.core.errors import ConfigError
from docugen.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="docugen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file (default: ./docugen.yaml if present)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """DocuGen - function-level change detection and changelog drafting."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(serve_command, name="serve")
cli.add_command(diff_command, name="diff")


if __name__ == "__main__":
    cli()
