"""Main entry point for the fingerprinting server."""

import asyncio
import logging
import sys

from pydantic import ValidationError

from request_fingerprint.adapters.config import AppConfig
from request_fingerprint.adapters.web import StarletteAttributeExtractor, StarletteWebAdapter
from request_fingerprint.application.services import FingerprintService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "info") -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(config.log_level)
    if config.trust_proxy_headers:
        logger.info("Client address resolution trusts X-Forwarded-For and X-Real-IP headers")

    web_adapter = StarletteWebAdapter(
        FingerprintService(),
        StarletteAttributeExtractor(trust_proxy_headers=config.trust_proxy_headers),
        config,
    )

    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await web_adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
