"""CogniWeave server entry point: ``python -m cogniweave.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from cogniweave.core.config.settings import get_settings
from cogniweave.core.server.app import create_app

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def _is_loopback_host(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the CogniWeave MCP server with Streamable HTTP transport."""
    settings = get_settings()
    _configure_logging(settings.cw_log_level)

    logger = logging.getLogger(__name__)
    if not settings.cw_allow_insecure_bind and not _is_loopback_host(settings.cw_host):
        raise RuntimeError(
            "Refusing to bind CogniWeave server to a non-loopback host without an auth layer. "
            "Set CW_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting CogniWeave server on %s:%d (llm_provider=%s)",
        settings.cw_host,
        settings.cw_port,
        settings.llm_provider,
    )

    mcp = create_app()
    mcp.run(
        transport="streamable-http",
        host=settings.cw_host,
        port=settings.cw_port,
    )


if __name__ == "__main__":
    run()
