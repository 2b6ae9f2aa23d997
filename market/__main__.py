# market/__main__.py
import uvicorn

from market.core.config import settings


def main():
    uvicorn.run(
        "market.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
