"""X-Reels CLI"""

import logging

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .assemble import assemble_cmd
from .reels import reels_cmd
from .serve import serve_cmd
from .status import status_cmd

# Load .env file at CLI startup
load_dotenv()


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """X-Reels - Narrative text to vertical video

    \b
    Quick Start:
      xreels assemble img0.png img1.png -n narration.mp3 -o reel.mp4
      xreels serve --port 3000

    \b
    Commands:
      assemble   Assemble images and audio into a reel
      reels      List produced reels
      status     Show ffmpeg and directory status
      serve      Run the HTTP server
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )


main.add_command(assemble_cmd, name="assemble")
main.add_command(reels_cmd, name="reels")
main.add_command(status_cmd, name="status")
main.add_command(serve_cmd, name="serve")


if __name__ == "__main__":
    main()
