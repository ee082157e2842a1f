"""Start script that serves the API with uvicorn, honouring the PORT environment variable."""

from __future__ import annotations

import os
import sys

import uvicorn

from .config import settings


def _port_from_env(default: int = 8000) -> int:
    port = os.environ.get("PORT", str(default))
    try:
        return int(port)
    except ValueError:
        print(f"Warning: Invalid PORT value '{port}', using default {default}", file=sys.stderr)
        return default


def main() -> None:
    port = _port_from_env()
    print(f"Starting server on port {port}...", file=sys.stderr)
    uvicorn.run(
        "campusnav.main:app",
        host="0.0.0.0",
        port=port,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
