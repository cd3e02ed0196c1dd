import uvicorn

from links_app.app_factory import create_app
from links_app.config import settings
from links_app.logging_config import setup_logging

setup_logging(
    level=settings.log_level,
    log_file=settings.log_file,
    json_format=settings.log_json,
    access_log=settings.access_log,
)

# Create FastAPI app
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
