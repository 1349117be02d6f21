import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from whatcard.api.routes.health import router as health_router
from whatcard.api.routes.recommend import router as recommend_router
from whatcard.api.routes.state import router as state_router
from whatcard.api.routes.transactions import router as transactions_router
from whatcard.api.routes.wallet import router as wallet_router
from whatcard.config import settings
from whatcard.domain.errors import InputValidationError, NotFoundError
from whatcard.logging_setup import setup_logging

logger = logging.getLogger(__name__)

app = FastAPI(title="WhatCard API", version="0.1.0")
app.include_router(health_router)
app.include_router(state_router)
app.include_router(recommend_router)
app.include_router(transactions_router)
app.include_router(wallet_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InputValidationError)
async def invalid_input_handler(request: Request, exc: InputValidationError) -> JSONResponse:
    logger.warning("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def run() -> None:
    setup_logging(settings.log_level)
    uvicorn.run("whatcard.api.app:app", host=settings.app_host, port=settings.app_port, reload=False)
