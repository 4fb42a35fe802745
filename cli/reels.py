"""Reels command - list produced reels"""

import json
from datetime import datetime

import click
from rich.console import Console
from rich.table import Table
from rich import box

from core.config import get_settings
from core.library import ReelLibrary

console = Console()


@click.command()
@click.option("--page", default=1, show_default=True, help="Page number")
@click.option("--limit", default=6, show_default=True, help="Reels per page")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def reels_cmd(page: int, limit: int, as_json: bool):
    """List produced reels, newest first"""
    library = ReelLibrary(get_settings())
    library.initialize()
    listing = library.list_reels(page=page, limit=limit)

    if as_json:
        click.echo(json.dumps(listing, indent=2))
        return

    if not listing["reels"]:
        console.print("[yellow]No reels found[/yellow]")
        return

    table = Table(title=f"Reels (page {listing['currentPage']}/{listing['totalPages']})", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Created")
    table.add_column("Template")
    table.add_column("Voice")
    table.add_column("Music")
    table.add_column("Text")

    for reel in listing["reels"]:
        prompt = reel["prompt"]
        text = prompt.get("originalText") or ""
        table.add_row(
            reel["id"],
            datetime.fromtimestamp(reel["createdAt"] / 1000).strftime("%Y-%m-%d %H:%M"),
            prompt.get("templateId") or "-",
            prompt.get("voiceId") or "silent",
            prompt.get("musicFile") or "-",
            text[:40] + "..." if len(text) > 40 else text,
        )

    console.print(table)
