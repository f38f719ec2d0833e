"""CLI entry point for comatrix."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from comatrix import __version__
from comatrix.config import Settings, load_settings
from comatrix.errors import CollaboratorFailure
from comatrix.model import load_model, resolve_baseline_path
from comatrix.runner import AppListResult, MatrixResult, run_applist, run_matrix
from comatrix.utils import write_text

log = logging.getLogger(__name__)

_FORMATS = click.Choice(["md", "pdf", "json"], case_sensitive=False)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


def _settings(config: str | None) -> Settings:
    return load_settings(Path(config) if config else None)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Connectivity matrix and application catalog for architecture models."""


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "-b", "--baseline",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    default=None,
    help="Baseline model file. Defaults to the model's 'baseline' property.",
)
@click.option("--no-baseline", is_flag=True, default=False, help="Ignore any baseline (single model mode).")
@click.option(
    "-f", "--format", "fmt", type=_FORMATS, default="md",
    help="Output format (default: md).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout for md/json, or comatrix.pdf next to the model for pdf.",
)
@click.option("-c", "--config", type=click.Path(exists=True, dir_okay=False), default=None,
              help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
def matrix(
    model: str,
    baseline: str | None,
    no_baseline: bool,
    fmt: str,
    output: str | None,
    config: str | None,
    verbose: bool,
) -> None:
    """Build the connectivity matrix of MODEL, compared with its baseline if any."""
    _setup_logging(verbose)
    try:
        settings = _settings(config)
        model_path = Path(model)
        current = load_model(model_path)

        base_graph = None
        if not no_baseline:
            base_path = resolve_baseline_path(
                model_path, current,
                override=Path(baseline) if baseline else None,
                baseline_property=settings.baseline_property,
            )
            if base_path is not None:
                base_graph = load_model(base_path)
                log.info("Compare mode: baseline %r", base_graph.name)

        result = run_matrix(current, base_graph, settings)
        if result.status == "empty":
            click.echo(
                f"No {settings.trigger_prefix}* triggering relationships found in "
                f"'{result.model_name}'. No report written."
            )
            return

        default_pdf = model_path.parent / "comatrix.pdf"
        _emit(result, fmt, output, default_pdf)
    except CollaboratorFailure as exc:
        raise click.ClickException(str(exc)) from exc


@main.command()
@click.argument("model", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "-f", "--format", "fmt", type=_FORMATS, default="md",
    help="Output format (default: md).",
)
@click.option(
    "-o", "--output",
    type=click.Path(resolve_path=True),
    default=None,
    help="Output file path. Defaults to stdout for md/json, or applist.pdf next to the model for pdf.",
)
@click.option("-c", "--config", type=click.Path(exists=True, dir_okay=False), default=None,
              help="YAML settings file.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
def applist(model: str, fmt: str, output: str | None, config: str | None, verbose: bool) -> None:
    """List the applications of MODEL with their domain and business area."""
    _setup_logging(verbose)
    try:
        settings = _settings(config)
        model_path = Path(model)
        result = run_applist(load_model(model_path), settings)
        if result.status == "empty":
            click.echo(
                f"No applications of type {', '.join(settings.application_tags)} "
                f"found in '{result.model_name}'. No report written."
            )
            return

        _emit(result, fmt, output, model_path.parent / "applist.pdf")
    except CollaboratorFailure as exc:
        raise click.ClickException(str(exc)) from exc


def _emit(result: MatrixResult | AppListResult, fmt: str, output: str | None, default_pdf: Path) -> None:
    if fmt == "json":
        _output_text(json.dumps(result.to_dict(), indent=2, ensure_ascii=False), output, "JSON report")
    elif fmt == "pdf":
        dest = Path(output) if output else default_pdf
        _output_pdf(result, dest)
    else:
        _output_text(_render_md(result), output, "Report")


def _render_md(result: MatrixResult | AppListResult) -> str:
    from comatrix.render.markdown import render_applist_markdown, render_matrix_markdown
    if isinstance(result, MatrixResult):
        return render_matrix_markdown(result)
    return render_applist_markdown(result)


def _output_pdf(result: MatrixResult | AppListResult, dest: Path) -> None:
    from comatrix.render.pdf import render_applist_pdf, render_matrix_pdf
    if isinstance(result, MatrixResult):
        render_matrix_pdf(result, dest)
    else:
        render_applist_pdf(result, dest)
    click.echo(f"PDF report written to {dest}")


def _output_text(text: str, output: str | None, label: str) -> None:
    if output:
        write_text(Path(output), text)
        click.echo(f"{label} written to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
