"""Serve command - run the HTTP server"""

import click

from core.config import get_settings


@click.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", default=None, type=int, help="Port (default from settings, 3000)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve_cmd(host: str, port: int, reload: bool):
    """Run the X-Reels HTTP server"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "server.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
