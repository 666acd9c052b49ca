"""Run the API with uvicorn: `python -m roster_api`."""

import uvicorn

from roster_api.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "roster_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
