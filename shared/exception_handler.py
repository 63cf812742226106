import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import PropertyManagerError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(PropertyManagerError)
    async def property_manager_exception_handler(request: Request, exc: PropertyManagerError):
        logger.info("%s %s rejected (%s): %s", request.method,
                    request.url.path, exc.kind.value, exc.message)
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=exc.status_code,
            message=exc.message
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=400)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already packs a JsonOutResult into the detail
        if isinstance(exc.detail, dict) and "message" in exc.detail:
            wrapped = exc.detail
        else:
            wrapped = JsonOutResult(
                data=None,
                status="Failure",
                status_code=str(exc.status_code or AppStatusCode.OPERATION_FAILED),
                message=str(exc.detail)
            ).model_dump()
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400,
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.INVALID_INPUT,
            message=str(exc)
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=400)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)

        wrapped = JsonOutResult(
            data=None,
            status="Failure",
            status_code=AppStatusCode.OPERATION_FAILED,
            message="An unexpected error occurred"
        ).model_dump()
        return JSONResponse(content=wrapped, status_code=500)
