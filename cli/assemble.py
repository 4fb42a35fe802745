"""Assemble command - build a reel from local images and audio"""

import asyncio
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from core.assembler import ReelAssembler
from core.errors import CompositionError
from core.models.render import CompositionPlan, CompositionRequest
from core.renderer import FFmpegRenderer

console = Console()


def show_plan(plan: CompositionPlan) -> None:
    """Print timing, input slots and the filter program"""
    timing = plan.timing
    timing_table = Table(title="Timing", box=box.ROUNDED)
    timing_table.add_column("Field", style="cyan")
    timing_table.add_column("Seconds", justify="right")
    timing_table.add_row("Narration", f"{timing.narration_duration:.3f}")
    timing_table.add_row("Per scene", f"{timing.segment_duration:.3f}")
    timing_table.add_row("Credits", f"{timing.credits_duration:.3f}")
    timing_table.add_row("Total", f"{timing.total_duration:.3f}")
    console.print(timing_table)

    slot_table = Table(title="Inputs", box=box.ROUNDED)
    slot_table.add_column("Slot", style="cyan", justify="right")
    slot_table.add_column("Role")
    slot_table.add_column("Path")
    for entry in plan.slots:
        slot_table.add_row(str(entry.index), f"{entry.role.value} #{entry.ordinal}", entry.path)
    console.print(slot_table)

    if plan.crossfade_offsets:
        offsets = ", ".join(f"{o:.3f}s" for o in plan.crossfade_offsets)
        console.print(f"[bold]Crossfades at:[/bold] {offsets}")

    console.print(Panel(plan.program.replace("; ", ";\n"), title="filter_complex", border_style="blue"))


@click.command()
@click.argument("images", nargs=-1, required=True, type=click.Path())
@click.option("--output", "-o", default="reel.mp4", show_default=True, type=click.Path(), help="Output video file")
@click.option("--narration", "-n", type=click.Path(), help="Narration audio file")
@click.option("--music", "-m", type=click.Path(), help="Background music file")
@click.option("--silent", is_flag=True, help="Ignore narration and use 4s per scene")
@click.option("--credits", "credits_image", type=click.Path(), help="Credits image appended at the end")
@click.option("--dry-run", is_flag=True, help="Print the plan without running ffmpeg")
@click.option("--ffmpeg", "ffmpeg_path", type=click.Path(), help="Path to the ffmpeg executable")
def assemble_cmd(
    images: Tuple[str, ...],
    output: str,
    narration: Optional[str],
    music: Optional[str],
    silent: bool,
    credits_image: Optional[str],
    dry_run: bool,
    ffmpeg_path: Optional[str],
):
    """
    Assemble scene IMAGES (in order) into a vertical reel.

    Examples:

        # Narrated reel with music
        xreels assemble s0.png s1.png s2.png -n audio.mp3 -m bgm.mp3 -o reel.mp4

        # Silent reel, just print the ffmpeg plan
        xreels assemble s0.png --silent --dry-run
    """
    request = CompositionRequest.from_paths(
        image_paths=list(images),
        output_path=output,
        narration_path=narration,
        music_path=music,
        silent=silent,
        credits_image=credits_image,
        credits_enabled=credits_image is not None,
    )
    assembler = ReelAssembler(renderer=FFmpegRenderer(ffmpeg_path=ffmpeg_path))

    if dry_run:
        try:
            plan = asyncio.run(assembler.plan(request))
        except CompositionError as e:
            console.print(f"[red]{e.kind}: {e.message}[/red]")
            sys.exit(1)
        show_plan(plan)
        return

    with console.status(f"Assembling {len(images)} scene(s) into {output}..."):
        result = asyncio.run(assembler.assemble(request))

    if not result.success:
        console.print(f"[red]Assembly failed ({result.error_kind})[/red]")
        console.print(result.error_message)
        sys.exit(1)

    size = Path(result.output_path).stat().st_size if Path(result.output_path).exists() else 0
    console.print(
        f"[green]Reel written to {result.output_path}[/green] "
        f"({result.duration:.2f}s, {size / 1024 / 1024:.1f} MB, {result.render_time:.1f}s to render)"
    )
