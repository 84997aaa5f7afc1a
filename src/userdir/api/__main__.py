"""
userdir.api.__main__

Entrypoint for running the service via `python -m userdir.api`.
"""

from __future__ import annotations

import uvicorn

from userdir.api.app import create_app
from userdir.settings import get_settings


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
        # Runs behind the identity-verifying edge; trust its forwarded client address.
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )


if __name__ == "__main__":
    main()
