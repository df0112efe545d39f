"""
资源提供者抽象接口
"""
from abc import ABC, abstractmethod
from typing import Any, Tuple

from starlette.requests import Request as StarletteRequest

from ..response.responder import CreateOutcome, DeleteOutcome, IResponder, UpdateOutcome
from .request import Request


class ICRUD(ABC):
    """
    资源提供者必须实现的增删改查接口

    成功时返回 IResponder 的某个变体；失败时抛出异常，
    推荐使用 HTTPError 指定状态码。
    """

    @abstractmethod
    async def find_one(self, resource_id: str, request: Request) -> IResponder:
        """
        根据ID获取一条记录

        成功状态码: 200
        """
        pass

    @abstractmethod
    async def create(self, obj: Any, request: Request) -> CreateOutcome:
        """
        创建新记录

        可选结果:
        - Created (201): 资源已创建，返回新资源
        - Accepted (202): 处理被延后，不返回内容
        - NoContent (204): 使用客户端提供的ID创建，服务端未修改任何字段
        """
        pass

    @abstractmethod
    async def delete(self, resource_id: str, request: Request) -> DeleteOutcome:
        """
        删除记录

        可选结果:
        - Accepted (202): 处理被延后，不返回内容
        - NoContent (204): 删除成功，不返回内容
        """
        pass

    @abstractmethod
    async def update(self, obj: Any, request: Request) -> UpdateOutcome:
        """
        更新记录

        可选结果:
        - Updated (200): 更新成功，但服务端修改了额外字段，返回更新后的资源
        - Accepted (202): 处理被延后，不返回内容
        - NoContent (204): 更新成功，服务端没有修改其他字段，不返回内容
        """
        pass


class IFindAll(ABC):
    """可选接口：一次返回全部记录"""

    @abstractmethod
    async def find_all(self, request: Request) -> IResponder:
        pass


class IPaginatedFindAll(ABC):
    """
    可选接口：按分页参数返回部分记录

    提供者需要根据 request.pagination 截取结果，并返回集合的真实总数，
    总数与所请求的窗口无关，框架依此生成分页链接。
    """

    @abstractmethod
    async def paginated_find_all(self, request: Request) -> Tuple[int, IResponder]:
        pass


class IURLResolver(ABC):
    """为一个 API 实例的所有请求返回固定的 base URL"""

    @abstractmethod
    def get_base_url(self) -> str:
        pass


class IRequestAwareURLResolver(IURLResolver):
    """
    根据请求动态生成 base URL，例如同一个 API 服务多个子域名

    框架对每个请求都会先调用 set_request，再调用 get_base_url；
    两次调用之间实例状态会被修改，共享实例时由框架加锁串行化。
    """

    @abstractmethod
    def set_request(self, request: StarletteRequest) -> None:
        pass
