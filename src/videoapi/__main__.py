"""Run the Videos API with uvicorn."""

import uvicorn

from videoapi.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "videoapi.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
