"""Run the service with uvicorn: ``python -m shortlink``."""

import uvicorn

from shortlink.core.setting import settings


def main() -> None:
    uvicorn.run(
        "shortlink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
