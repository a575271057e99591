"""
CLI entrypoint.

doctor: print settings and the resolved driver setup.
visit:  drive a session to a URL and print where the browser ended up.
check:  navigate to a page class ("module:Class") and report its verification.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.table import Table

from ..core.browser import drive
from ..core.config import default_setup, import_object
from ..core.errors import MissingUrlError, VerificationError
from ..core.page import Page
from ..core.settings import settings

app = typer.Typer(help="browser-pages CLI")
console = Console()


@app.callback()
def main_callback(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level"),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("doctor")
def doctor() -> None:
    """Environment check: print key settings and the active setup."""
    setup = default_setup()
    factory = setup.driver_factory
    console.print("[bold green]browser-pages[/] environment")
    console.print(f"- setup:         {settings.setup_name}")
    console.print(f"- configuration: {settings.configuration or '-'}")
    console.print(f"- driver:        {getattr(factory, '__qualname__', repr(factory))}")
    console.print(f"- auto quit:     {setup.auto_quit}")
    console.print(f"- browser:       {settings.browser_name} (headless={settings.headless})")
    console.print(f"- timeout:       {settings.default_timeout_ms}ms")


@app.command("visit")
def visit(url: str = typer.Argument(..., help="URL to open")) -> None:
    """Open a URL and print the resulting URL and title."""
    with drive(setup=default_setup()) as browser:
        current = browser.to(url)
        title = browser.title

    table = Table(title="Visit", show_header=True, header_style="bold")
    table.add_column("url")
    table.add_column("title")
    table.add_row(current, title or "-")
    console.print(table)


@app.command("check")
def check(page_path: str = typer.Argument(..., help="Page class as module:Class")) -> None:
    """
    Navigate to a page class and verify its at clause.
    Exit 1 when the page has no URL or fails verification, 2 when it cannot be imported.
    """
    try:
        page_cls = import_object(page_path)
    except (ImportError, AttributeError, ValueError) as e:
        typer.secho(f"[check] cannot import {page_path}: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    if not (isinstance(page_cls, type) and issubclass(page_cls, Page)):
        typer.secho(f"[check] {page_path} is not a Page subclass", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    try:
        with drive(setup=default_setup()) as browser:
            page = browser.to(page_cls)
            current = browser.current_url
    except (MissingUrlError, VerificationError) as e:
        typer.secho(f"[check] {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho(f"[check] at {type(page).__name__} ({current})", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
