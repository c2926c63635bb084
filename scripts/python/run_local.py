"""Script to run the API locally against the development configuration."""

import os

import uvicorn


def main() -> None:
    """Run the server with auto-reload using config/environments/development."""
    os.environ.setdefault("APP_ENV", "development")

    from recipe_share.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "recipe_share.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=True,
    )


if __name__ == "__main__":
    main()
