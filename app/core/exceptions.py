"""
Excepciones de la capa de servicios y sus handlers para FastAPI.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Error base de la capa de servicios."""
    pass


class EventNotFoundException(ServiceException):
    """El evento no existe."""
    pass


class SeasonNotFoundException(ServiceException):
    """La temporada no existe."""
    pass


class JobNotFoundException(ServiceException):
    """El job de recálculo no existe."""
    pass


class InvalidScoringRulesError(ServiceException):
    """Las reglas de puntuación no cumplen exact >= one_off / two_off."""
    pass


async def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    logger.error(f"Service error in {request.url.path}: {exc}")

    status_code = 500
    if isinstance(exc, (EventNotFoundException, SeasonNotFoundException, JobNotFoundException)):
        status_code = 404
    elif isinstance(exc, InvalidScoringRulesError):
        status_code = 400

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__,
        },
    )
