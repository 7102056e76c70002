"""Run the API server: ``python -m jobs2go_admin``."""

import uvicorn

from jobs2go_admin.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "jobs2go_admin.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
