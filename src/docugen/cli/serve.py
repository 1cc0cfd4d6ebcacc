"""docugen serve command - run the HTTP server."""

import asyncio
from pathlib import Path

import click
from pydantic import ValidationError

from docugen.config.models import DocuGenConfig, ServerConfig
from docugen.server.lifecycle import run_server


@click.command()
@click.option("--host", default=None, help="Bind address (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port (overrides config)")
@click.option(
    "--static-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory served at / instead of the bundled website",
)
@click.pass_context
def serve_command(
    ctx: click.Context,
    host: str | None,
    port: int | None,
    static_dir: Path | None,
) -> None:
    """Start the DocuGen web server."""
    config: DocuGenConfig = ctx.obj["config"]

    overrides: dict[str, object] = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if static_dir is not None:
        overrides["static_dir"] = str(static_dir.resolve())
    if overrides:
        try:
            server = ServerConfig.model_validate({**config.server.model_dump(), **overrides})
        except ValidationError as e:
            raise click.ClickException(e.errors()[0]["msg"]) from e
        config = config.model_copy(update={"server": server})

    if not config.generation.has_usable_key:
        click.echo(
            "No usable generation API key; documentation will use the fallback template.",
            err=True,
        )

    click.echo(f"DocuGen running at http://{config.server.host}:{config.server.port}", err=True)
    asyncio.run(run_server(config))
