"""
Custom exceptions for the resource layer.

Providers raise ``HTTPError`` (or one of the helpers below) to control the
status code and the JSON:API ``errors`` array of a failed request.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResourceAPIError(Exception):
    """Base class for exceptions raised by the resource framework."""
    pass


class ErrorObject(BaseModel):
    """单个 JSON:API 错误对象"""
    id: Optional[str] = Field(default=None, description="本次错误的唯一标识")
    links: Optional[Dict[str, str]] = Field(default=None, description="错误相关链接")
    status: Optional[str] = Field(default=None, description="HTTP状态码（字符串）")
    code: Optional[str] = Field(default=None, description="应用内错误码")
    title: Optional[str] = Field(default=None, description="错误摘要")
    detail: Optional[str] = Field(default=None, description="错误详情")
    source: Optional[Dict[str, str]] = Field(default=None, description="pointer 或 parameter")
    meta: Optional[Dict[str, Any]] = Field(default=None, description="附加信息")


class HTTPError(ResourceAPIError):
    """
    携带HTTP状态码的结构化错误

    参数:
        msg: 错误消息，同时作为默认错误对象的 title
        status: HTTP状态码
        errors: 可选的错误对象列表，为空时根据 msg 生成一个
        cause: 原始异常
    """

    def __init__(
        self,
        msg: str,
        status: int = 500,
        errors: Optional[List[ErrorObject]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(msg)
        self.msg = msg
        self.status = status
        self.cause = cause
        if not errors:
            errors = [ErrorObject(status=str(status), title=msg)]
        self.errors = errors

    def __str__(self) -> str:
        if self.cause is not None:
            return f"http error ({self.status}) {self.msg} and {len(self.errors)} more errors, {self.cause}"
        return f"http error ({self.status}) {self.msg} and {len(self.errors)} more errors"


class ContractViolation(HTTPError):
    """资源提供者返回了当前操作不允许的状态码或载荷"""

    def __init__(self, msg: str):
        super().__init__(msg, status=500)


def not_found_error(entity: str, resource_id: str) -> HTTPError:
    return HTTPError(
        f"{entity} {resource_id} not found",
        status=404,
        errors=[ErrorObject(status="404", title="Not Found", detail=f"{entity} {resource_id} does not exist")],
    )


def bad_request_error(detail: str, parameter: Optional[str] = None) -> HTTPError:
    source = {"parameter": parameter} if parameter else None
    return HTTPError(
        detail,
        status=400,
        errors=[ErrorObject(status="400", title="Bad Request", detail=detail, source=source)],
    )


def conflict_error(detail: str, pointer: Optional[str] = None) -> HTTPError:
    source = {"pointer": pointer} if pointer else None
    return HTTPError(
        detail,
        status=409,
        errors=[ErrorObject(status="409", title="Conflict", detail=detail, source=source)],
    )
