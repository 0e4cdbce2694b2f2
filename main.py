import uvicorn

from datasource.config import load_settings


def run() -> None:
    settings = load_settings()
    uvicorn.run(
        "datasource.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
