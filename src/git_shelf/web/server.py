"""Launch the JSON API under uvicorn."""
from __future__ import annotations


def launch(
    root_dir: str | None = None,
    suffix: str = "",
    timeout: float | None = None,
    host: str = "127.0.0.1",
    port: int = 5000,
) -> None:
    """Serve the API in the foreground until interrupted."""
    import uvicorn

    from git_shelf.web.api import app

    app.state.root_dir = root_dir
    app.state.suffix = suffix
    app.state.timeout = timeout

    print(f"API server:  http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
