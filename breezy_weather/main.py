"""Main FastAPI application entry point."""

from pathlib import Path

from dotenv import load_dotenv

from breezy_weather.config import get_settings
from breezy_weather.core.app_factory import create_app
from breezy_weather.logging_config import setup_logging

# Load environment variables from .env file
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()
setup_logging(settings.log_level)

app = create_app(settings)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Breezy Weather API", "docs": "/docs"}


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "breezy_weather.main:app",
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
