"""Error handlers for the REST API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from framecut.application.config import ConfigError
from framecut.domain import InvalidPieceError, InvalidStockError, OversizedPieceError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(OversizedPieceError)
    async def oversized_piece_handler(
        request: Request, exc: OversizedPieceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": str(exc),
                "error_type": "oversized",
                "details": [
                    {"id": piece.id, "label": piece.label} for piece in exc.pieces
                ],
            },
        )

    @app.exception_handler(InvalidStockError)
    async def invalid_stock_handler(
        request: Request, exc: InvalidStockError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "error_type": "invalid_stock", "details": None},
        )

    @app.exception_handler(InvalidPieceError)
    async def invalid_piece_handler(
        request: Request, exc: InvalidPieceError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "error_type": "invalid_piece", "details": None},
        )

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        logger.debug("Rejected job configuration: %s", exc.message)
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )
