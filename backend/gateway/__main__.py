"""Run the gateway with uvicorn: `python -m gateway`."""

import uvicorn

from gateway.config import settings


def main() -> None:
    uvicorn.run(
        "gateway.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
