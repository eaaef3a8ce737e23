"""Production startup script for the readiness analyzer API.

Starts uvicorn with the configured host and port. PORT and API_WORKERS
environment variables override the settings, as set by most hosting
platforms.
"""

import os
import signal
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from api.config import Settings, get_settings  # noqa: E402

APP_PATH = "api.main:app"


def build_command(settings: Settings, environ: dict[str, str] | None = None) -> list[str]:
    """uvicorn argv for the given settings."""
    environ = dict(os.environ) if environ is None else environ
    port = environ.get("PORT", str(settings.api_port))
    workers = environ.get("API_WORKERS", "1")

    return [
        "uvicorn",
        APP_PATH,
        "--host",
        settings.api_host,
        "--port",
        port,
        "--workers",
        workers,
        "--proxy-headers",
        "--forwarded-allow-ips",
        "*",
        "--log-level",
        settings.log_level.lower(),
    ]


def signal_handler(signum: int, _frame: object) -> None:
    """Handle shutdown signals gracefully."""
    print(f"Received signal {signum}, shutting down...")
    sys.exit(0)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)

    command = build_command(get_settings())
    print(f"Starting API server: {' '.join(command)}")

    # Replace the current process
    os.execvp(command[0], command)


if __name__ == "__main__":
    main()
