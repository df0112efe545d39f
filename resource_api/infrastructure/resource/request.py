"""
传递给资源提供者的请求上下文
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from starlette.requests import Request as StarletteRequest

from .pagination import Pagination, extract_page_params, parse_pagination


@dataclass
class Request:
    """
    请求上下文

    Attributes:
        plain_request: 原始的 Starlette 请求
        query_params: 全部查询参数，同名参数保留所有值
        pagination_params: 原始分页参数，键为 number/size/offset/limit
        pagination: 解析后的分页窗口，没有分页参数时为 None
        headers: 请求头（键为小写）
        context: 本次请求内共享的任意数据
    """
    plain_request: Optional[StarletteRequest] = None
    query_params: Dict[str, List[str]] = field(default_factory=dict)
    pagination_params: Dict[str, str] = field(default_factory=dict)
    pagination: Optional[Pagination] = None
    headers: Dict[str, str] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_starlette(cls, request: StarletteRequest, max_page_size: int, paginate: bool = True) -> "Request":
        """
        从 Starlette 请求构造上下文

        paginate 为 False 时只保留原始分页参数，不做校验，pagination 为 None。

        异常:
            HTTPError: 分页参数非法
        """
        query_params: Dict[str, List[str]] = {}
        for key, value in request.query_params.multi_items():
            query_params.setdefault(key, []).append(value)

        if paginate:
            pagination_params, pagination = parse_pagination(query_params, max_page_size)
        else:
            pagination_params, pagination = extract_page_params(query_params), None
        return cls(
            plain_request=request,
            query_params=query_params,
            pagination_params=pagination_params,
            pagination=pagination,
            headers={key.lower(): value for key, value in request.headers.items()},
        )

    def query(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """返回查询参数的第一个值"""
        values = self.query_params.get(key)
        return values[0] if values else default
