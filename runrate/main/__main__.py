"""
Main module entry point.

Runs the API server: python -m runrate.main
"""

import uvicorn

from runrate.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "runrate.main.app:app",
        host=settings.app.host,
        port=settings.app.port,
        reload=settings.app.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
