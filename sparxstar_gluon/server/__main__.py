"""Run the server with uvicorn: ``python -m sparxstar_gluon.server``."""

import uvicorn

from .core.config import settings


def main() -> None:
    uvicorn.run(
        "sparxstar_gluon.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
