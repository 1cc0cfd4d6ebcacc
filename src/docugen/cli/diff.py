"""docugen diff command - compare two files from the terminal."""

import asyncio
import json
from dataclasses import replace
from pathlib import Path

import click

from docugen.analysis import AnalysisResult, compare_sources
from docugen.config.models import DocuGenConfig
from docugen.core.errors import CommentError, ParseError
from docugen.generation import DocsGenerator
from docugen.github import CommentPoster, CommentResult, build_comment_body


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"Cannot read {path}: {e}") from e


async def _document(
    result: AnalysisResult,
    config: DocuGenConfig,
    comment: bool,
) -> tuple[AnalysisResult, CommentResult | None]:
    docs = await DocsGenerator(config.generation).generate(result.summary)
    result = replace(result, docs=docs)
    if not comment:
        return result, None
    body = build_comment_body(result.summary, docs)
    return result, await CommentPoster(config.github).post(body)


@click.command()
@click.argument("old", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output the full analysis as JSON")
@click.option("--docs", "with_docs", is_flag=True, help="Generate changelog / README text")
@click.option("--comment", is_flag=True, help="Post the result on the configured pull request")
@click.pass_context
def diff_command(
    ctx: click.Context,
    old: Path,
    new: Path,
    as_json: bool,
    with_docs: bool,
    comment: bool,
) -> None:
    """Show functions added, removed, or modified between OLD and NEW.

    OLD and NEW are JavaScript source files. --comment implies --docs.
    """
    config: DocuGenConfig = ctx.obj["config"]

    try:
        result = compare_sources(_read_source(old), _read_source(new))
    except ParseError as e:
        raise click.ClickException(e.message) from e

    posted: CommentResult | None = None
    if with_docs or comment:
        try:
            result, posted = asyncio.run(_document(result, config, comment))
        except CommentError as e:
            raise click.ClickException(e.message) from e

    for warning in result.warnings:
        click.echo(f"warning: {warning}", err=True)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(result.summary)
        if result.docs is not None:
            click.echo()
            click.echo(result.docs)

    if posted is None:
        return
    if posted.posted:
        click.echo(f"Comment posted: {posted.url}", err=True)
    else:
        click.echo(
            f"Missing GitHub settings ({', '.join(posted.missing)}); comment not posted.",
            err=True,
        )
        click.echo("Comment that would be posted:", err=True)
        click.echo(build_comment_body(result.summary, result.docs or ""), err=True)
