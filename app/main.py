"""
Aplicación principal del servicio de búsqueda inteligente
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.endpoints import SERVICE_VERSION
from app.api.endpoints import router as api_router
from app.dependencies import recent_search_repository
from config.configuracion import configuracion
from core.exceptions import InvalidQueryError
from infrastructure.logging import CorrelationIdMiddleware, configure_logging

configure_logging(
    level=configuracion.log_level,
    json_output=configuracion.log_format.lower() == "json",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manejar ciclo de vida de la aplicación"""
    logger.info("🚀 Iniciando servicio de búsqueda inteligente...")

    await recent_search_repository.connect()
    logger.info(
        f"🎯 Servicio listo en http://{configuracion.search_api_host}:{configuracion.search_api_port}"
    )

    try:
        yield
    finally:
        logger.info("🛑 Deteniendo servicio de búsqueda inteligente...")
        await recent_search_repository.disconnect()
        logger.info("🔌 Servicio detenido")


app = FastAPI(
    title="Búsqueda Inteligente",
    description="Resuelve búsquedas en texto libre a categorías de profesionales",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(api_router, prefix=configuracion.search_api_prefix)


@app.get("/")
async def root():
    return {
        "service": "Búsqueda Inteligente",
        "version": SERVICE_VERSION,
        "status": "running",
        "timestamp": datetime.now().isoformat(),
    }


@app.get("/health/simple")
async def health_simple():
    """Health check simple para load balancers"""
    return {"status": "ok"}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_query",
            "message": str(exc),
            "request_id": _request_id(request),
            "timestamp": datetime.now().isoformat(),
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Manejador global de excepciones no manejadas"""
    request_id = _request_id(request)
    logger.error(
        f"Unhandled exception | Exception: {exc} | "
        f"Path: {request.url.path} | Method: {request.method} | "
        f"Request ID: {request_id}"
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "Error interno del servidor",
            "request_id": request_id,
            "timestamp": datetime.now().isoformat(),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=configuracion.search_api_host,
        port=configuracion.search_api_port,
        reload=False,
        log_level=configuracion.log_level.lower(),
    )
