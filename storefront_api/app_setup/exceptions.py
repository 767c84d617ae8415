"""
Gestionnaires d'exceptions de l'API.
- Les erreurs sont rendues dans l'enveloppe attendue par le client: {"success": false, "message": ...}.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

def _first_error(exc: RequestValidationError) -> str:
    errors = exc.errors() or []
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers HTTPException et RequestValidationError.
    - HTTPException: code conservé, detail -> message.
    - Validation: 422 avec le premier message d'erreur lisible.
    """
    @app.exception_handler(HTTPException)
    async def envelope_http_errors(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def envelope_validation_errors(request: Request, exc: RequestValidationError):
        message = _first_error(exc)
        logger.info("validation error path=%s: %s", request.url.path, message)
        return JSONResponse(status_code=422, content={"success": False, "message": message})
