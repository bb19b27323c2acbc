"""Command-line runner serving the REST API and, when enabled, gRPC."""

import uvicorn

from pvz_store.api.app import create_app
from pvz_store.containers import build_container


def main() -> None:
    container = build_container()
    settings = container.settings
    uvicorn.run(
        create_app(container),
        host=settings.http_host,
        port=settings.http_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
