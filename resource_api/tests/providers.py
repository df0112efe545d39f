"""
测试用的内存资源提供者
"""
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from resource_api.infrastructure.exceptions import not_found_error
from resource_api.infrastructure.resource import ICRUD, IFindAll, IPaginatedFindAll, Request
from resource_api.infrastructure.response import Created, Found, IResponder, NoContent


class Item(BaseModel):
    id: Optional[str] = None
    title: str = ""


class MemoryCRUD(ICRUD):
    """
    内存中的增删改查

    create_outcome / update_outcome / delete_outcome 不为 None 时直接返回，
    用来模拟提供者选择的各种结果。
    """

    def __init__(self, count: int = 0):
        self.items: Dict[str, Item] = {}
        self.requests: List[Request] = []
        self.create_outcome: Optional[IResponder] = None
        self.update_outcome: Optional[IResponder] = None
        self.delete_outcome: Optional[IResponder] = None
        for i in range(1, count + 1):
            self.items[str(i)] = Item(id=str(i), title=f"item {i}")
        self._next_id = count + 1

    async def find_one(self, resource_id: str, request: Request) -> IResponder:
        self.requests.append(request)
        if resource_id not in self.items:
            raise not_found_error("item", resource_id)
        return Found(self.items[resource_id])

    async def create(self, obj: Item, request: Request):
        self.requests.append(request)
        if obj.id is None:
            obj = obj.model_copy(update={"id": str(self._next_id)})
            self._next_id += 1
        self.items[obj.id] = obj
        if self.create_outcome is not None:
            return self.create_outcome
        return Created(obj)

    async def update(self, obj: Item, request: Request):
        self.requests.append(request)
        if obj.id not in self.items:
            raise not_found_error("item", obj.id)
        self.items[obj.id] = obj
        if self.update_outcome is not None:
            return self.update_outcome
        return NoContent()

    async def delete(self, resource_id: str, request: Request):
        self.requests.append(request)
        if resource_id not in self.items:
            raise not_found_error("item", resource_id)
        del self.items[resource_id]
        if self.delete_outcome is not None:
            return self.delete_outcome
        return NoContent()


class FindAllMixin(IFindAll):
    async def find_all(self, request: Request) -> IResponder:
        self.requests.append(request)
        return Found(list(self.items.values()))


class PaginatedMixin(IPaginatedFindAll):
    async def paginated_find_all(self, request: Request) -> Tuple[int, IResponder]:
        self.requests.append(request)
        items = list(self.items.values())
        window = request.pagination
        return len(items), Found(items[window.offset:window.offset + window.limit])


class MemoryResource(MemoryCRUD, FindAllMixin, PaginatedMixin):
    pass


class FindAllOnlyResource(MemoryCRUD, FindAllMixin):
    pass


class PaginatedOnlyResource(MemoryCRUD, PaginatedMixin):
    pass


class CrudOnlyResource(MemoryCRUD):
    pass


class BrokenResource(MemoryResource):
    """返回不合法结果的提供者"""

    def __init__(self, count: int = 0, total=None, error: Optional[Exception] = None):
        super().__init__(count)
        self.total = total
        self.error = error

    async def find_one(self, resource_id: str, request: Request):
        if self.error is not None:
            raise self.error
        return {"id": resource_id}

    async def paginated_find_all(self, request: Request):
        return self.total, Found([])


def make_client(api) -> TestClient:
    """把 API 挂载到一个新的 FastAPI 应用上并返回测试客户端"""
    app = FastAPI()
    api.install(app)
    return TestClient(app)
