"""Run the HTTP service: ``python -m shamir_service``."""

import uvicorn

from shamir_service.config import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "shamir_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
