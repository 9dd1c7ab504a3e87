"""Starlette application serving the fingerprint endpoint."""

from __future__ import annotations

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from request_fingerprint.adapters.config import AppConfig
from request_fingerprint.domain.ports import AttributeExtractor, FingerprintService

logger = logging.getLogger(__name__)

FINGERPRINT_PATH = "/fingerprint"


def create_app(service: FingerprintService, extractor: AttributeExtractor) -> Starlette:
    """Create the ASGI application with its single fingerprint route."""

    async def fingerprint_endpoint(request: Request) -> JSONResponse:
        attributes = extractor.extract(request)
        result = service.fingerprint(attributes)
        return JSONResponse(
            {"fingerprint": result.fingerprint, "timestamp": result.rfc3339_timestamp}
        )

    return Starlette(routes=[Route(FINGERPRINT_PATH, fingerprint_endpoint, methods=["GET"])])


class StarletteWebAdapter:
    """Serves the fingerprint application with uvicorn."""

    def __init__(
        self,
        service: FingerprintService,
        extractor: AttributeExtractor,
        config: AppConfig,
    ) -> None:
        """Initialize the web adapter.

        Args:
            service: Service that fingerprints extracted attributes.
            extractor: Turns incoming requests into request attributes.
            config: Application configuration.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        # Protocols can't be checked with isinstance, verify required methods exist
        if not callable(getattr(service, "fingerprint", None)):
            raise TypeError("service must implement FingerprintService protocol")
        if not callable(getattr(extractor, "extract", None)):
            raise TypeError("extractor must implement AttributeExtractor protocol")

        self.service = service
        self.extractor = extractor
        self.config = config
        self.app = create_app(service, extractor)
        self._server: Any | None = None

    async def start(self) -> None:
        """Start the web server and serve until it is asked to exit."""
        import uvicorn

        logger.info(f"Browser fingerprinting server starting on port {self.config.port}")
        display_host = "localhost" if self.config.host == "0.0.0.0" else self.config.host
        logger.info(f"Send requests to http://{display_host}:{self.config.port}{FINGERPRINT_PATH}")

        server_config = uvicorn.Config(
            self.app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level,
        )
        self._server = uvicorn.Server(server_config)

        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
