"""
异常处理器

把 HTTPError 和路由层抛出的 HTTPException 渲染为 {"errors": [...]} 文档。
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_api.infrastructure.exceptions import ContractViolation, HTTPError
from resource_api.infrastructure.response import JSONAPI_MEDIA_TYPE, error_document, single_error_document

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: HTTPError) -> JSONResponse:
    if isinstance(exc, ContractViolation):
        logger.error(f"资源提供者违反约定: {request.method} {request.url.path}: {exc.msg}")
    elif exc.status >= 500:
        logger.error(f"请求处理失败: {request.method} {request.url.path}: {exc}")
    else:
        logger.info(f"请求被拒绝: {request.method} {request.url.path}: {exc.status} {exc.msg}")

    return JSONResponse(
        content=error_document(exc.errors),
        status_code=exc.status,
        media_type=JSONAPI_MEDIA_TYPE,
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        content=single_error_document(exc.status_code, str(exc.detail)),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
        media_type=JSONAPI_MEDIA_TYPE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """在应用上注册资源框架的异常处理器"""
    app.add_exception_handler(HTTPError, http_error_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)
