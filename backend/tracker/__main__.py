"""Run the API server: ``python -m tracker``."""

import uvicorn

from tracker.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
