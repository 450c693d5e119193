import uvicorn

from skyfreight.config import settings


def main() -> None:
    """Serve the API with uvicorn."""
    uvicorn.run("skyfreight.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
