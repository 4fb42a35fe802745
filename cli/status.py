"""System status command"""

import asyncio
import json

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from core.config import get_settings
from core.renderer import FFmpegRenderer


console = Console()


def get_status_dict() -> dict:
    """Get status as dictionary for JSON output"""
    settings = get_settings()
    ffmpeg = asyncio.run(FFmpegRenderer().check_ffmpeg_installed())
    return {
        "ffmpeg": ffmpeg,
        "directories": {
            "outputs": str(settings.output_path),
            "templates": str(settings.templates_path),
            "music": str(settings.music_path),
            "credits_image": str(settings.credits_image_path),
        },
        "credits_enabled": settings.show_credits_image,
        "config": {
            "GEMINI_API_KEY": bool(settings.gemini_api_key),
            "ELEVENLABS_API_KEY": bool(settings.elevenlabs_api_key),
        },
    }


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def status_cmd(as_json: bool):
    """Show ffmpeg, directory and API key status"""
    status = get_status_dict()

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    console.print(Panel.fit(
        "[bold blue]X-Reels[/bold blue]\n"
        "Narrative text to vertical video",
        border_style="blue"
    ))

    ffmpeg = status["ffmpeg"]
    if ffmpeg["installed"]:
        console.print(f"[green]✓ ffmpeg[/green] {ffmpeg['version']}")
    else:
        console.print(f"[red]✗ ffmpeg[/red] {ffmpeg.get('error', '')}")
    probe_style = "green" if ffmpeg.get("ffprobe") else "yellow"
    console.print(f"[{probe_style}]ffprobe:[/{probe_style}] {ffmpeg.get('ffprobe') or 'not found'}")

    dir_table = Table(title="Directories", box=box.ROUNDED)
    dir_table.add_column("Name", style="cyan")
    dir_table.add_column("Path")
    for name, path in status["directories"].items():
        dir_table.add_row(name, path)
    console.print(dir_table)

    config_table = Table(title="Configuration", box=box.ROUNDED)
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Status")
    for key, present in status["config"].items():
        config_table.add_row(key, "[green]✓ Set[/green]" if present else "[red]✗ Missing[/red]")
    console.print(config_table)
