from fastapi import FastAPI, status
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from energia_livre.core.config import settings
from energia_livre.core.logging import configure_logging
from energia_livre.core.errors import register_exception_handlers
from energia_livre.core.cache import get_client
from energia_livre.api.v1.routes import router as api_v1_router
from energia_livre.db.base import init_db
from energia_livre.db.session import SessionLocal
from energia_livre.services import storage
from datetime import datetime, timezone
import logging

import redis

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Marketplace de energia livre: consumidores, comercializadoras e propostas",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

register_exception_handlers(app)


@app.on_event("startup")
async def startup_event():
    logger.info(f"Iniciando Energia Livre ({settings.ENVIRONMENT})")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Falha ao inicializar o banco: {e}")
        raise
    if not storage.is_storage_configured():
        logger.warning("Storage S3 não configurado: upload de faturas vai responder 500")


# Content-Disposition exposto para o download de faturas
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition", "Content-Type"],
    max_age=3600,
)

# Listagens do admin (tracking, export) passam fácil de 1 KB
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(api_v1_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    return {
        "message": "Energia Livre Backend API",
        "version": "1.0.0",
        "docs": "/docs",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
def health_check():
    """
    Status do banco (obrigatório), do Redis e do storage de faturas (opcionais).
    Só o banco derruba o status para 503.
    """
    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "unknown",
        "redis": "not_configured",
        "storage": "configured" if storage.is_storage_configured() else "not_configured",
    }

    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        health_status["database"] = "connected"
    except Exception as e:
        logger.error(f"Health check do banco falhou: {e}")
        health_status["database"] = "disconnected"
        health_status["status"] = "unhealthy"
    finally:
        db.close()

    redis_client = get_client()
    if redis_client is not None:
        try:
            redis_client.ping()
            health_status["redis"] = "connected"
        except redis.exceptions.AuthenticationError:
            logger.warning("Redis health check: Autenticação necessária (verifique REDIS_URL)")
            health_status["redis"] = "auth_required"
        except redis.exceptions.RedisError as e:
            logger.warning(f"Redis health check falhou: {e}")
            health_status["redis"] = "disconnected"

    status_code = status.HTTP_200_OK if health_status["status"] == "healthy" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=health_status, status_code=status_code)
