"""Run the API with uvicorn: `python -m user_service` or `user-service`."""

import uvicorn

from user_service.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "user_service.main:app", host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    main()
