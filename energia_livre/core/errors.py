import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from energia_livre.core.exceptions import InvalidAffiliateCode, ResponseAlreadyReceived

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Dados inválidos em {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Dados inválidos", "errors": jsonable_errors(exc)},
        )

    @app.exception_handler(ResponseAlreadyReceived)
    async def response_already_received_handler(request: Request, exc: ResponseAlreadyReceived):
        logger.warning(f"Tentativa de reverter status de resposta bloqueada: {exc}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Resposta já recebida; o status não pode ser revertido"},
        )

    @app.exception_handler(InvalidAffiliateCode)
    async def invalid_affiliate_code_handler(request: Request, exc: InvalidAffiliateCode):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Código de afiliado inválido"},
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Conflito de integridade na rota {request.url}: {exc.orig}")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Registro em conflito com dados existentes"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Erro não tratado na rota {request.url}: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Erro interno do servidor"},
        )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Reduz os erros do pydantic a loc/msg (ctx pode conter objetos não serializáveis)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
