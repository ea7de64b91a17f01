import uvicorn

from apparel_studio.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "apparel_studio.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
