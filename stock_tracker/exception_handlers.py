from fastapi import Request
from fastapi.responses import JSONResponse

from stock_tracker.exceptions import ERROR_CATEGORY, AppError
from stock_tracker.market.schemas import APIErrorResponse


def error_response(message: str, status_code: int) -> JSONResponse:
    envelope = APIErrorResponse(error=ERROR_CATEGORY, message=message, code=status_code)
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.message, exc.status_code)


def register_exception_handlers(app):
    app.add_exception_handler(AppError, app_error_handler)
