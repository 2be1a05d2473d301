"""Restoran POS API service entrypoint."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from services.api.app.db.init_db import init_db
from services.api.app.domain.errors import ValidationError
from services.api.app.routers.audit import router as audit_router
from services.api.app.routers.draft import router as draft_router
from services.api.app.routers.menu import router as menu_router
from services.api.app.routers.order import router as order_router

logging.basicConfig(
    level=os.getenv("POS_LOG_LEVEL", "INFO").strip().upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Restoran POS API")

app.include_router(menu_router)
app.include_router(draft_router)
app.include_router(order_router)
app.include_router(audit_router)


@app.exception_handler(ValidationError)
async def _validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    del request
    return JSONResponse(status_code=422, content={"detail": str(exc), "kind": exc.kind.value})


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
