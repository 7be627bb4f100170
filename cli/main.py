"""newsdigest CLI — convert saved pages into markdown.

Usage:
    python cli/main.py --help

Commands:
    convert   → any HTML page (file or stdin) to markdown
    links     → story links from a saved Hacker News front page
    issue     → a saved smol.ai issue page as JSON
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from newsdigest.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from newsdigest.config import settings
from newsdigest.logging_config import configure_logging
from newsdigest.markdown import ExtractionBudget, HtmlParseError, html_to_markdown
from newsdigest.markdown.models import MAX_DEPTH_LIMIT
from newsdigest.scraper import RawPage, parse_front_page, parse_issue
from newsdigest.scraper.hackernews import HN_FRONT_PAGE

app = typer.Typer(
    name="newsdigest",
    help="Turn untrusted HTML pages into bounded markdown.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _read_html(path: Optional[str]) -> str:
    """Read HTML from *path*, or from stdin when *path* is ``None`` or ``-``."""
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def _budget(**overrides: Optional[int]) -> ExtractionBudget:
    try:
        return settings.extraction_budget().with_overrides(**overrides)
    except ValueError as e:
        typer.echo(f"❌ Invalid extraction budget: {e}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
@app.command("convert")
def convert(
    path: Optional[str] = typer.Argument(None, help="HTML file to convert ('-' or omitted for stdin)."),
    max_depth: Optional[int] = typer.Option(
        None, help=f"Deepest node level to extract (at most {MAX_DEPTH_LIMIT})."
    ),
    max_text_node_length: Optional[int] = typer.Option(None, help="Drop longer text nodes."),
    max_code_block_length: Optional[int] = typer.Option(None, help="Drop longer code blocks."),
    max_output_line_length: Optional[int] = typer.Option(None, help="Drop longer output lines."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Convert an HTML page into markdown and print it to stdout."""
    configure_logging("DEBUG" if verbose else None)
    budget = _budget(
        max_depth=max_depth,
        max_text_node_length=max_text_node_length,
        max_code_block_length=max_code_block_length,
        max_output_line_length=max_output_line_length,
    )

    try:
        markdown = html_to_markdown(_read_html(path), budget)
    except (HtmlParseError, OSError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not markdown:
        typer.echo("❌ No usable content extracted.", err=True)
        raise typer.Exit(code=1)

    typer.echo(markdown)


@app.command("links")
def links(
    path: str = typer.Argument(..., help="Saved Hacker News listing page."),
    page_url: str = typer.Option(HN_FRONT_PAGE, help="URL the page was fetched from."),
) -> None:
    """Print the external story links of a Hacker News listing page."""
    configure_logging()
    try:
        stories = parse_front_page(_read_html(path), page_url=page_url)
    except (HtmlParseError, OSError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not stories:
        typer.echo("No story links found.")
        return
    for story in stories:
        typer.echo(f"{story.title}\t{story.url}")


@app.command("issue")
def issue(
    path: str = typer.Argument(..., help="Saved smol.ai issue page."),
    url: str = typer.Option(..., help="URL the issue was fetched from."),
) -> None:
    """Print a smol.ai issue page as JSON."""
    configure_logging()
    budget = _budget()
    try:
        parsed = parse_issue(RawPage(url=url, html=_read_html(path)), budget)
    except (HtmlParseError, OSError) as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    if parsed is None:
        typer.echo("❌ Not an issue page (missing title or invalid URL).", err=True)
        raise typer.Exit(code=1)

    typer.echo(parsed.model_dump_json(indent=2))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
