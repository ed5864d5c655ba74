"""
Point d'entree FastAPI / FastAPI entry point.
Vehicle Log - carnet d'entretien des vehicules / vehicle maintenance log.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from vehicle_log.api import api_router
from vehicle_log.config import LogFormat, LogSettings, settings
from vehicle_log.database import init_db
from vehicle_log.errors import (
    ApiError,
    api_error_handler,
    database_error_handler,
    validation_error_handler,
)
from vehicle_log.rate_limit import limiter

logger = logging.getLogger("vehicle_log")


class JSONFormatter(logging.Formatter):
    """Une ligne JSON par message / One JSON object per line."""

    def format(self, record):
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(log_settings: LogSettings) -> None:
    """Configurer le logging racine / Configure root logging from settings."""
    handler = logging.StreamHandler()
    if log_settings.format == LogFormat.JSON:
        handler.setFormatter(JSONFormatter())
    elif log_settings.format == LogFormat.COMPACT:
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))
    logging.root.handlers = [handler]
    logging.root.setLevel(log_settings.level.to_logging())


configure_logging(settings.log)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    # Creer les tables au demarrage / Create tables on startup
    await init_db()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield


# Swagger uniquement en debug / Swagger only in debug
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Carnet d'entretien des vehicules / Vehicle maintenance log",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Erreurs typees / Typed errors
app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Ajoute un X-Request-ID et journalise la requete / Add X-Request-ID and log the request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        started = time.perf_counter()
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "%s %s -> %s (%.1f ms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request_id,
        )
        return response


app.add_middleware(RequestIDMiddleware)


# Routes API
app.include_router(api_router)


# Sante de l'API / API health check
@app.get("/")
async def root():
    """Health check."""
    return {"app": settings.app_name, "version": settings.app_version, "status": "running"}


def run():
    """Lancer le serveur / Run the server on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "vehicle_log.main:app",
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
