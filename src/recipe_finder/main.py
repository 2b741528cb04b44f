"""ASGI entry point.

Run with ``uvicorn recipe_finder.main:app`` or the ``recipe-finder`` script.
"""

from __future__ import annotations

import uvicorn

from recipe_finder.core.config import get_settings
from recipe_finder.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "recipe_finder.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_config=None,
    )


if __name__ == "__main__":
    run()
