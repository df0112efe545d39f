"""
base URL 解析器实现
"""
from typing import Optional

from starlette.requests import Request as StarletteRequest

from .base import IRequestAwareURLResolver, IURLResolver


class StaticURLResolver(IURLResolver):
    """所有请求共用同一个 base URL"""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def get_base_url(self) -> str:
        return self.base_url


class HostURLResolver(IRequestAwareURLResolver):
    """
    根据最近一次请求的 scheme 和 Host 生成 base URL

    优先使用反向代理设置的 X-Forwarded-Proto / X-Forwarded-Host。
    返回值不含路径前缀，前缀由框架追加。
    """

    def __init__(self):
        self._request: Optional[StarletteRequest] = None

    def set_request(self, request: StarletteRequest) -> None:
        self._request = request

    def get_base_url(self) -> str:
        if self._request is None:
            raise RuntimeError("set_request must be called before get_base_url")

        headers = self._request.headers
        # 代理可能传入逗号分隔的多个值，取第一个
        scheme = headers.get("x-forwarded-proto", self._request.url.scheme).split(",")[0].strip()
        host = headers.get("x-forwarded-host") or headers.get("host") or self._request.url.netloc
        host = host.split(",")[0].strip()
        return f"{scheme}://{host}"
