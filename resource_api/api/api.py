"""
资源API入口

API 持有资源注册表和 base URL 解析器，负责生成挂载到 FastAPI 应用上的路由。
"""
import logging
import threading
from typing import Optional, Type

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel
from starlette.requests import Request as StarletteRequest

from resource_api.api.endpoints.resources import build_resource_router
from resource_api.api.errors import register_exception_handlers
from resource_api.infrastructure.resource import (
    ICRUD,
    HostURLResolver,
    IRequestAwareURLResolver,
    IURLResolver,
    Request,
    ResourceRegistration,
    ResourceRegistry,
)

logger = logging.getLogger(__name__)


class API:
    """
    资源框架实例

    参数:
        prefix: 路由前缀，例如 /api
        resolver: base URL 解析器，默认根据请求的 Host 生成
        default_page_size: 只实现分页接口的资源在没有分页参数时使用的页大小
        max_page_size: page[size] / page[limit] 的上限
    """

    def __init__(
        self,
        prefix: str = "",
        resolver: Optional[IURLResolver] = None,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        if default_page_size < 1 or max_page_size < default_page_size:
            raise ValueError("分页配置不合法: 需要 1 <= default_page_size <= max_page_size")

        self.prefix = prefix.rstrip("/")
        self.resolver = resolver or HostURLResolver()
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.registry = ResourceRegistry()
        # set_request 与 get_base_url 必须成对执行
        self._resolver_lock = threading.Lock()

    def add_resource(self, name: str, model: Type[BaseModel], provider: ICRUD) -> ResourceRegistration:
        """注册资源，需在生成路由之前调用"""
        return self.registry.register(name, model, provider)

    def base_url(self, request: StarletteRequest) -> str:
        """
        获取本次请求的 base URL

        请求感知的解析器先 set_request 再 get_base_url，两步在锁内完成。
        """
        if isinstance(self.resolver, IRequestAwareURLResolver):
            with self._resolver_lock:
                self.resolver.set_request(request)
                return self.resolver.get_base_url().rstrip("/")
        return self.resolver.get_base_url().rstrip("/")

    def collection_url(self, request: StarletteRequest, name: str) -> str:
        return f"{self.base_url(request)}{self.prefix}/{name}"

    def request_context(self, request: StarletteRequest, paginate: bool = False) -> Request:
        """构造请求上下文，只有集合查询需要解析分页参数"""
        return Request.from_starlette(request, self.max_page_size, paginate=paginate)

    @property
    def router(self) -> APIRouter:
        """生成包含全部已注册资源的路由器，路径不含前缀"""
        router = APIRouter()
        for registration in self.registry:
            router.include_router(build_resource_router(self, registration), tags=[registration.name])
        return router

    def install(self, app: FastAPI) -> None:
        """把路由和异常处理器挂载到应用上"""
        app.include_router(self.router, prefix=self.prefix)
        register_exception_handlers(app)
        logger.info(f"资源API已挂载: {self.prefix or '/'} ({', '.join(self.registry.names())})")
