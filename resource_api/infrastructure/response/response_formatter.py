from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder

from ..exceptions import ErrorObject

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


def data_document(
    data: Any = None,
    meta: Optional[Dict[str, Any]] = None,
    links: Optional[Dict[str, Optional[str]]] = None,
) -> Dict[str, Any]:
    """
    创建标准的数据文档

    参数:
        data: 响应数据，单条记录或记录列表
        meta: 附加元数据，为空时省略
        links: 链接集合，为空时省略

    返回:
        Dict[str, Any]: 可直接序列化为JSON的文档
    """
    document: Dict[str, Any] = {"data": jsonable_encoder(data)}
    if meta:
        document["meta"] = jsonable_encoder(meta)
    if links:
        document["links"] = links
    return document


def error_document(errors: List[ErrorObject]) -> Dict[str, Any]:
    """
    创建错误文档

    参数:
        errors: 错误对象列表

    返回:
        Dict[str, Any]: {"errors": [...]} 格式的文档，省略空字段
    """
    return {"errors": [error.model_dump(exclude_none=True) for error in errors]}


def single_error_document(status: int, title: str, detail: Optional[str] = None) -> Dict[str, Any]:
    """创建只包含一个错误对象的文档"""
    return error_document([ErrorObject(status=str(status), title=title, detail=detail)])


def meta_document(meta: Dict[str, Any]) -> Dict[str, Any]:
    """创建只包含 meta 的文档，用于没有数据的响应"""
    return {"meta": jsonable_encoder(meta)}
