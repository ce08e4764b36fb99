"""
Entry point for the clipview application.

Running this script with ``python run.py`` starts the FastAPI server
that exposes the clipping API.  The application defined in
``backend/clipview/main.py`` is imported after adjusting the Python
path to include the backend directory.

The bind address defaults to ``0.0.0.0:8000`` and can be changed with
the ``CLIPVIEW_HOST`` and ``CLIPVIEW_PORT`` environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import logging
import uvicorn

logging.basicConfig(
    level=logging.DEBUG if os.getenv("CLIP_DEBUG") else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def main() -> None:
    """Run the Uvicorn server hosting the clipview application."""
    backend_dir = Path(__file__).resolve().parent / "backend"
    if str(backend_dir) not in sys.path:
        sys.path.append(str(backend_dir))

    # Import inside main() to avoid modifying sys.path at module import time.
    from clipview.main import app  # type: ignore

    host = os.getenv("CLIPVIEW_HOST", "0.0.0.0")
    port = int(os.getenv("CLIPVIEW_PORT", "8000"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
