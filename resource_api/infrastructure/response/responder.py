"""
资源操作的响应容器

每个资源操作都返回一个 IResponder，框架据此决定HTTP状态码、data 和 meta。
各操作可选的结果被建模为封闭的变体集合（Created / Updated / Found /
Accepted / NoContent），提供者无法构造操作不允许的状态。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, Optional, Union

from ..exceptions import ContractViolation


class IResponder(ABC):
    """响应容器接口"""

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """附加元数据，对应文档中的 meta"""
        pass

    @abstractmethod
    def result(self) -> Any:
        """实际载荷，FindOne 只放一条记录"""
        pass

    @abstractmethod
    def status_code(self) -> int:
        """HTTP状态码"""
        pass


class Response(IResponder):
    """通用响应容器，状态码由调用方指定"""

    def __init__(self, result: Any = None, status: int = 200, meta: Optional[Dict[str, Any]] = None):
        self._result = result
        self._status = status
        self._meta = dict(meta or {})

    def metadata(self) -> Dict[str, Any]:
        return self._meta

    def result(self) -> Any:
        return self._result

    def status_code(self) -> int:
        return self._status

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self._status}, result={self._result!r}, meta={self._meta!r})"


class Found(Response):
    """200 OK：查询成功"""

    def __init__(self, result: Any, meta: Optional[Dict[str, Any]] = None):
        super().__init__(result=result, status=200, meta=meta)


class Created(Response):
    """201 Created：资源已创建，返回新资源"""

    def __init__(self, result: Any, meta: Optional[Dict[str, Any]] = None):
        super().__init__(result=result, status=201, meta=meta)


class Updated(Response):
    """200 OK：更新成功，但服务端修改了额外字段，返回更新后的资源"""

    def __init__(self, result: Any, meta: Optional[Dict[str, Any]] = None):
        super().__init__(result=result, status=200, meta=meta)


class Accepted(Response):
    """202 Accepted：处理被延后，不返回资源"""

    def __init__(self, meta: Optional[Dict[str, Any]] = None):
        super().__init__(result=None, status=202, meta=meta)


class NoContent(Response):
    """204 No Content：操作成功，没有需要返回的内容"""

    def __init__(self):
        super().__init__(result=None, status=204)


CreateOutcome = Union[Created, Accepted, NoContent]
UpdateOutcome = Union[Updated, Accepted, NoContent]
DeleteOutcome = Union[Accepted, NoContent]

# 各操作允许的状态码；delete 的 200 不在其中
ALLOWED_STATUS: Dict[str, FrozenSet[int]] = {
    "find_one": frozenset({200}),
    "find_all": frozenset({200}),
    "paginated_find_all": frozenset({200}),
    "create": frozenset({201, 202, 204}),
    "update": frozenset({200, 202, 204}),
    "delete": frozenset({202, 204}),
}

EMPTY_BODY_STATUS = frozenset({202, 204})


def ensure_outcome(operation: str, responder: Any) -> IResponder:
    """
    校验提供者返回的响应是否符合操作约定

    参数:
        operation: 操作名称，ALLOWED_STATUS 的键
        responder: 提供者返回的对象

    返回:
        IResponder: 原样返回通过校验的响应

    异常:
        ContractViolation: 类型不对、状态码不被允许，或 202/204 携带了载荷
    """
    if not isinstance(responder, IResponder):
        raise ContractViolation(
            f"{operation} must return an IResponder, got {type(responder).__name__}"
        )

    status = responder.status_code()
    allowed = ALLOWED_STATUS[operation]
    if status not in allowed:
        raise ContractViolation(
            f"{operation} returned status {status}, allowed: {sorted(allowed)}"
        )

    if status in EMPTY_BODY_STATUS and responder.result() is not None:
        raise ContractViolation(f"{operation} returned status {status} with a payload")

    return responder
