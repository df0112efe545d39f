"""
资源路由模块

为每个注册的资源生成集合与单条记录的路由，把请求分派给资源提供者，
校验提供者返回的状态码，并生成 self / 分页链接。
"""
import logging
import traceback
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

# FastAPI核心组件
from fastapi import APIRouter
from fastapi import Request as FastAPIRequest
from fastapi.responses import JSONResponse
from fastapi.responses import Response as FastAPIResponse
from pydantic import BaseModel, ValidationError

from resource_api.infrastructure.exceptions import (
    ContractViolation,
    ErrorObject,
    HTTPError,
    bad_request_error,
    conflict_error,
)
from resource_api.infrastructure.resource import (
    Capability,
    PagePagination,
    ResourceRegistration,
    build_pagination_links,
)
from resource_api.infrastructure.response import (
    JSONAPI_MEDIA_TYPE,
    IResponder,
    data_document,
    ensure_outcome,
    meta_document,
)

if TYPE_CHECKING:
    from resource_api.api.api import API

# 配置日志记录器
logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = (JSONAPI_MEDIA_TYPE, "application/json")


def resource_id_of(obj: Any) -> Optional[str]:
    """读取记录的 id，支持字典和带 id 属性的对象"""
    if isinstance(obj, dict):
        value = obj.get("id")
    else:
        value = getattr(obj, "id", None)
    return None if value is None else str(value)


async def call_provider(operation: str, method: Callable, *args: Any) -> Any:
    """
    调用资源提供者

    HTTPError 原样抛出；其他异常记录堆栈后转换为500。
    """
    try:
        return await method(*args)
    except HTTPError:
        raise
    except Exception as e:
        logger.error(f"{operation} 执行失败: {str(e)}")
        logger.error(traceback.format_exc())
        raise HTTPError("Internal Server Error", status=500, cause=e)


async def read_resource_data(request: FastAPIRequest) -> Dict[str, Any]:
    """
    读取请求体中的 data 对象

    返回:
        Dict[str, Any]: 去掉 type 键之后的 data

    异常:
        HTTPError: 媒体类型不支持 (415)，或请求体不是合法的文档 (400)
    """
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if media_type not in ACCEPTED_CONTENT_TYPES:
        raise HTTPError(
            f"unsupported media type {media_type or '(none)'}",
            status=415,
            errors=[ErrorObject(
                status="415",
                title="Unsupported Media Type",
                detail=f"Content-Type must be one of {', '.join(ACCEPTED_CONTENT_TYPES)}",
            )],
        )

    try:
        payload = await request.json()
    except ValueError:
        raise bad_request_error("request body is not valid JSON")

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise HTTPError(
            "request body must contain a data object",
            status=400,
            errors=[ErrorObject(
                status="400",
                title="Bad Request",
                detail="request body must contain a data object",
                source={"pointer": "/data"},
            )],
        )
    return {key: value for key, value in data.items() if key != "type"}


def validate_model(registration: ResourceRegistration, data: Dict[str, Any]) -> BaseModel:
    try:
        return registration.model.model_validate(data)
    except ValidationError as e:
        errors = [
            ErrorObject(
                status="422",
                title="Invalid Attribute",
                detail=err["msg"],
                source={"pointer": "/data/" + "/".join(str(part) for part in err["loc"])},
            )
            for err in e.errors()
        ]
        raise HTTPError(f"{registration.name} data failed validation", status=422, errors=errors)


def render(
    responder: IResponder,
    links: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> FastAPIResponse:
    """根据响应容器的状态码生成HTTP响应"""
    status = responder.status_code()
    meta = responder.metadata()

    if status == 204 or (status == 202 and not meta):
        return FastAPIResponse(status_code=status, headers=headers)

    if status == 202:
        content = meta_document(meta)
    else:
        content = data_document(responder.result(), meta=meta, links=links)
    return JSONResponse(content=content, status_code=status, headers=headers, media_type=JSONAPI_MEDIA_TYPE)


def build_resource_router(api: "API", registration: ResourceRegistration) -> APIRouter:
    """
    为一个资源生成路由

    Args:
        api: 所属的 API 实例，提供 base URL 和分页配置
        registration: 资源注册信息

    Returns:
        APIRouter: 包含该资源全部路由的路由器，路径不含 API 前缀
    """
    router = APIRouter()
    name = registration.name
    provider = registration.provider

    # 获取资源列表接口
    async def list_resources(request: FastAPIRequest):
        """
        获取资源列表

        带分页参数且提供者实现了分页接口时分页查询；
        只实现分页接口时使用默认页大小。
        """
        context = api.request_context(request, paginate=True)
        collection_url = api.collection_url(request, name)
        self_link = f"{collection_url}?{request.url.query}" if request.url.query else collection_url

        if context.pagination is None and not registration.supports(Capability.FIND_ALL):
            context.pagination = PagePagination(number=1, size=api.default_page_size)
            context.pagination_params = {"number": "1", "size": str(api.default_page_size)}

        if context.pagination is None:
            responder = await call_provider("find_all", provider.find_all, context)
            return render(ensure_outcome("find_all", responder), links={"self": self_link})

        if not registration.supports(Capability.PAGINATED_FIND_ALL):
            raise bad_request_error(f"{name} does not support pagination", parameter="page")

        result = await call_provider("paginated_find_all", provider.paginated_find_all, context)
        if not isinstance(result, tuple) or len(result) != 2:
            raise ContractViolation("paginated_find_all must return (total_count, responder)")
        total, responder = result
        ensure_outcome("paginated_find_all", responder)
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            raise ContractViolation(f"paginated_find_all returned invalid total count {total!r}")

        links = {"self": self_link}
        links.update(build_pagination_links(collection_url, context.query_params, context.pagination, total))
        return render(responder, links=links)

    # 获取资源详情接口
    async def get_resource(resource_id: str, request: FastAPIRequest):
        """根据ID获取一条记录"""
        context = api.request_context(request)
        resource_url = f"{api.collection_url(request, name)}/{resource_id}"
        responder = await call_provider("find_one", provider.find_one, resource_id, context)
        return render(ensure_outcome("find_one", responder), links={"self": resource_url})

    # 创建资源接口
    async def create_resource(request: FastAPIRequest):
        """
        创建资源

        201 时返回新资源并设置 Location；204 要求客户端在 data.id 中提供了ID。
        """
        context = api.request_context(request)
        data = await read_resource_data(request)
        # 空字符串不能作为资源ID
        client_id = data.get("id") or None
        obj = validate_model(registration, data)

        responder = ensure_outcome("create", await call_provider("create", provider.create, obj, context))
        collection_url = api.collection_url(request, name)
        status = responder.status_code()

        if status == 201:
            new_id = resource_id_of(responder.result())
            if new_id is None:
                raise ContractViolation("create returned 201 without a resource id")
            location = f"{collection_url}/{new_id}"
            return render(responder, links={"self": location}, headers={"Location": location})

        if status == 204:
            if client_id is None:
                raise ContractViolation("create returned 204 but the client did not supply an id")
            return render(responder, headers={"Location": f"{collection_url}/{client_id}"})

        return render(responder)

    # 更新资源接口
    async def update_resource(resource_id: str, request: FastAPIRequest):
        """更新资源，请求体中的ID必须与路径一致"""
        context = api.request_context(request)
        data = await read_resource_data(request)
        body_id = data.get("id")
        if body_id is not None and str(body_id) != resource_id:
            raise conflict_error(
                f"id {body_id} in request body does not match {resource_id} in path",
                pointer="/data/id",
            )
        data["id"] = resource_id
        obj = validate_model(registration, data)

        responder = await call_provider("update", provider.update, obj, context)
        resource_url = f"{api.collection_url(request, name)}/{resource_id}"
        return render(ensure_outcome("update", responder), links={"self": resource_url})

    # 删除资源接口
    async def delete_resource(resource_id: str, request: FastAPIRequest):
        """删除资源"""
        context = api.request_context(request)
        responder = await call_provider("delete", provider.delete, resource_id, context)
        return render(ensure_outcome("delete", responder))

    if registration.lists:
        router.add_api_route(f"/{name}", list_resources, methods=["GET"], name=f"{name}:list")
    router.add_api_route(f"/{name}", create_resource, methods=["POST"], name=f"{name}:create", status_code=201)
    router.add_api_route(f"/{name}/{{resource_id}}", get_resource, methods=["GET"], name=f"{name}:get")
    router.add_api_route(f"/{name}/{{resource_id}}", update_resource, methods=["PATCH"], name=f"{name}:update")
    router.add_api_route(f"/{name}/{{resource_id}}", delete_resource, methods=["DELETE"], name=f"{name}:delete")

    return router
