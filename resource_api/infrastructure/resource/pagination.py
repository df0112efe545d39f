"""
分页参数解析与分页链接生成

支持两组互斥的查询参数：
- page[number] + page[size]
- page[offset] + page[limit]
"""
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urlencode

from ..exceptions import bad_request_error

PAGE_NUMBER = "page[number]"
PAGE_SIZE = "page[size]"
PAGE_OFFSET = "page[offset]"
PAGE_LIMIT = "page[limit]"

NUMBER_SCHEME = (PAGE_NUMBER, PAGE_SIZE)
OFFSET_SCHEME = (PAGE_OFFSET, PAGE_LIMIT)
PAGE_PARAMETERS = NUMBER_SCHEME + OFFSET_SCHEME

# 偏移量需能放入有符号64位整数
MAX_OFFSET = (1 << 63) - 1


@dataclass(frozen=True)
class PagePagination:
    """页码分页，number 从1开始"""
    number: int
    size: int

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size


@dataclass(frozen=True)
class OffsetPagination:
    """偏移量分页"""
    offset: int
    limit: int


Pagination = Union[PagePagination, OffsetPagination]


def _parse_int(params: Dict[str, str], key: str, minimum: int, maximum: Optional[int] = None) -> int:
    raw = params[key]
    try:
        value = int(raw)
    except ValueError:
        raise bad_request_error(f"{key} must be an integer, got {raw!r}", parameter=key)
    if value < minimum:
        raise bad_request_error(f"{key} must be >= {minimum}", parameter=key)
    if maximum is not None and value > maximum:
        raise bad_request_error(f"{key} must be <= {maximum}", parameter=key)
    return value


def extract_page_params(query_params: Dict[str, List[str]]) -> Dict[str, str]:
    """
    提取原始分页参数

    返回以 number/size/offset/limit 为键的字典，同名参数取最后一个值
    """
    params = {}
    for key in PAGE_PARAMETERS:
        values = query_params.get(key)
        if values:
            params[key[len("page["):-1]] = values[-1]
    return params


def parse_pagination(
    query_params: Dict[str, List[str]],
    max_page_size: int,
) -> Tuple[Dict[str, str], Optional[Pagination]]:
    """
    解析分页查询参数

    参数:
        query_params: 请求的全部查询参数
        max_page_size: page[size] / page[limit] 的上限

    返回:
        Tuple: (原始分页参数, 解析后的分页对象；没有分页参数时为 None)

    异常:
        HTTPError: 参数混用两种方案、缺少必需参数或取值非法时返回400
    """
    raw = extract_page_params(query_params)
    if not raw:
        return raw, None

    params = {f"page[{key}]": value for key, value in raw.items()}
    uses_number = any(key in params for key in NUMBER_SCHEME)
    uses_offset = any(key in params for key in OFFSET_SCHEME)

    if uses_number and uses_offset:
        raise bad_request_error(
            "page[number]/page[size] and page[offset]/page[limit] cannot be combined",
            parameter=PAGE_OFFSET if PAGE_OFFSET in params else PAGE_LIMIT,
        )

    if uses_number:
        if PAGE_SIZE not in params:
            raise bad_request_error(f"{PAGE_NUMBER} requires {PAGE_SIZE}", parameter=PAGE_SIZE)
        size = _parse_int(params, PAGE_SIZE, 1, max_page_size)
        number = _parse_int(params, PAGE_NUMBER, 1, MAX_OFFSET // size + 1) if PAGE_NUMBER in params else 1
        return raw, PagePagination(number=number, size=size)

    if PAGE_LIMIT not in params:
        raise bad_request_error(f"{PAGE_OFFSET} requires {PAGE_LIMIT}", parameter=PAGE_LIMIT)
    limit = _parse_int(params, PAGE_LIMIT, 1, max_page_size)
    offset = _parse_int(params, PAGE_OFFSET, 0, MAX_OFFSET) if PAGE_OFFSET in params else 0
    return raw, OffsetPagination(offset=offset, limit=limit)


def _link(url: str, base_query: List[Tuple[str, str]], page_query: List[Tuple[str, int]]) -> str:
    query = urlencode(base_query + [(key, str(value)) for key, value in page_query], safe="[]")
    return f"{url}?{query}"


def build_pagination_links(
    url: str,
    query_params: Dict[str, List[str]],
    pagination: Pagination,
    total: int,
) -> Dict[str, str]:
    """
    根据总数生成 first/prev/next/last 链接

    参数:
        url: 不带查询串的集合地址
        query_params: 原请求的查询参数，分页以外的参数会被保留
        pagination: 当前窗口
        total: 集合中的记录总数

    返回:
        Dict[str, str]: 分页链接，不存在的 prev/next 会被省略
    """
    base_query = [
        (key, value)
        for key, values in query_params.items()
        if key not in PAGE_PARAMETERS
        for value in values
    ]
    links = {}

    if isinstance(pagination, PagePagination):
        size = pagination.size
        last_page = max(1, math.ceil(total / size))
        links["first"] = _link(url, base_query, [(PAGE_NUMBER, 1), (PAGE_SIZE, size)])
        if pagination.number > 1:
            prev_page = min(pagination.number - 1, last_page)
            links["prev"] = _link(url, base_query, [(PAGE_NUMBER, prev_page), (PAGE_SIZE, size)])
        if pagination.number < last_page:
            links["next"] = _link(url, base_query, [(PAGE_NUMBER, pagination.number + 1), (PAGE_SIZE, size)])
        links["last"] = _link(url, base_query, [(PAGE_NUMBER, last_page), (PAGE_SIZE, size)])
        return links

    limit = pagination.limit
    links["first"] = _link(url, base_query, [(PAGE_OFFSET, 0), (PAGE_LIMIT, limit)])
    if pagination.offset > 0:
        links["prev"] = _link(url, base_query, [(PAGE_OFFSET, max(0, pagination.offset - limit)), (PAGE_LIMIT, limit)])
    if pagination.offset + limit < total:
        links["next"] = _link(url, base_query, [(PAGE_OFFSET, pagination.offset + limit), (PAGE_LIMIT, limit)])
    links["last"] = _link(url, base_query, [(PAGE_OFFSET, max(0, total - limit)), (PAGE_LIMIT, limit)])
    return links
