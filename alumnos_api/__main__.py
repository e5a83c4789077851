"""Run the API with uvicorn on HOST:PORT (`python -m alumnos_api` or `alumnos-api`)."""

import uvicorn

from alumnos_api.config import settings


def main() -> None:
    uvicorn.run(
        "alumnos_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
