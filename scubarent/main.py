from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from contextlib import asynccontextmanager
import os

from scubarent.database import engine, Base
import scubarent.models  # noqa: F401 (registrace modelů)
from scubarent.config import settings
from scubarent.routers import (
    health, customers, equipment, equipment_items, service_history, baskets, booking_equipment, export,
)
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Bez alembicu (vývoj) se tabulky založí při startu
    os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)
    logger.info("%s: výpůjčky vybavení spuštěny (%s)", settings.CENTER_NAME, settings.APP_ENV)
    yield


app = FastAPI(
    title="ScubaRent",
    description="Půjčovna potápěčského vybavení",
    version="1.0.0",
    lifespan=lifespan,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if settings.APP_ENV == "production":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


app.add_middleware(SecurityHeadersMiddleware)

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(equipment.router)
app.include_router(service_history.router)
app.include_router(equipment_items.router)
app.include_router(baskets.router)
app.include_router(booking_equipment.router)
app.include_router(export.router)
