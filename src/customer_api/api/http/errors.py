"""Exception handlers rendering every error as an ``ApiError`` body."""

from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError as FastApiValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.customer_api.core.errors import CustomerApiError


class ApiError(BaseModel):
    """Error body returned for every non-2xx response."""

    model_config = ConfigDict(populate_by_name=True)

    path: str
    message: str
    status_code: int = Field(serialization_alias="statusCode")
    timestamp: datetime


def error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    body = ApiError(
        path=request.url.path,
        message=message,
        status_code=status_code,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
    )


async def handle_customer_api_error(
    request: Request, exc: CustomerApiError
) -> JSONResponse:
    logger.bind(status_code=exc.status_code, error_type=type(exc).__name__).info(
        "request.rejected: {}", exc.message
    )
    return error_response(request, exc.status_code, exc.message)


async def handle_validation_error(
    request: Request, exc: FastApiValidationError
) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return error_response(request, status.HTTP_400_BAD_REQUEST, message or "invalid request")


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(request, exc.status_code, str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CustomerApiError, handle_customer_api_error)
    app.add_exception_handler(FastApiValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
