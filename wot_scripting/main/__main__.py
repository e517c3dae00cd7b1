"""
Main module entry point.

This allows running the API server as: python -m wot_scripting.main
"""

import uvicorn

from wot_scripting.main.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "wot_scripting.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
