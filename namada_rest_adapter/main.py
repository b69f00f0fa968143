"""Main entrypoint for the REST adapter."""

import logging
import sys

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from .api import ServiceConfig, create_app
from .config import Settings
from .rpc import NamadaRpcClient
from .validators import ValidatorProcessor

logger = logging.getLogger(__name__)


def build_app(settings: Settings) -> FastAPI:
    """Construct the chain client and processor, and wrap them in an application."""
    chain = NamadaRpcClient(str(settings.rpc), timeout=settings.upstream_timeout)
    processor = ValidatorProcessor(
        chain,
        address_hrp=settings.address_hrp,
        height_consistent=settings.height_consistent,
    )
    return create_app(
        processor,
        ServiceConfig(
            description="Cosmos staking REST endpoints served from a Namada node.",
            cors_origins=list(settings.cors_origins),
            cors_allow_credentials=settings.cors_allow_credentials,
            log_level=settings.log_level,
        ),
    )


def main():
    """Run the REST adapter."""
    try:
        settings = Settings()
    except ValidationError as exc:
        logging.basicConfig(level=logging.ERROR)
        logger.error("Invalid configuration: %s", exc)
        sys.exit(1)

    app = build_app(settings)

    logger.info("Starting server on %s:%d, upstream %s", settings.host, settings.port, settings.rpc)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
