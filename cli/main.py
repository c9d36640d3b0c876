"""Site Audit CLI — run a bounded structural analysis of a web site.

Usage:
    python cli/main.py --help
    python cli/main.py analyze https://shop.example.com --max-pages 20
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from site_audit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from typing import Optional

import typer

from site_audit.config import settings
from site_audit.crawler import SiteModel, analyze, summarize

app = typer.Typer(
    name="site-audit",
    help="Identify a site's page templates and navigational categories.",
    no_args_is_help=True,
)


def _print_summary(model: SiteModel) -> None:
    counts = summarize(model)
    typer.echo(f"[analyze] Domain     : {model.domain}")
    typer.echo(f"[analyze] Analyzed at: {model.analyzed_at_iso}")
    typer.echo(f"[analyze] Templates  : {counts['templatesFound']}")
    typer.echo(f"[analyze] Categories : {counts['categoriesFound']}")
    typer.echo(f"[analyze] Pages      : {counts['pagesAnalyzed']}")
    typer.echo(f"[analyze] robots.txt : {'Available' if model.robots_txt else 'Not found'}")

    if model.templates:
        typer.echo("")
        typer.echo("Templates:")
        for template in model.templates.values():
            typer.echo(f"  - {template.type.value}  {template.url_pattern}")
            typer.echo(f"      e.g. {template.example_urls[0]}")
            if template.characteristics:
                typer.echo(f"      {', '.join(template.characteristics)}")

    if model.entities:
        typer.echo("")
        typer.echo("Categories:")
        for entity in model.entities:
            typer.echo(f"  - {entity.name!r}  {entity.url}")


@app.command("analyze")
def analyze_cmd(
    url: str = typer.Argument(..., help="Site root URL, e.g. https://example.com"),
    max_pages: Optional[int] = typer.Option(
        None, "--max-pages", min=1, help="Page fetch budget (default from DEFAULT_MAX_PAGES)."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the full model as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Crawl URL within the page budget and report templates and categories."""
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    if not as_json:
        typer.echo(f"[analyze] Crawling {url!r} …")
    model = analyze(url, max_pages=max_pages)

    if as_json:
        typer.echo(json.dumps(model.to_dict(), indent=2))
    else:
        _print_summary(model)

    if not model.templates:
        typer.echo(f"[analyze] Could not fetch {url!r}.", err=True)
        raise typer.Exit(1)


@app.callback()
def main() -> None:
    """Site Audit CLI."""


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
