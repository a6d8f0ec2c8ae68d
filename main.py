import uvicorn

from planner_proxy.config import Settings


def main():
    settings = Settings()
    uvicorn.run(
        "planner_proxy.main:app",
        host="0.0.0.0",
        port=8000,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
