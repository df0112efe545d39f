"""
资源注册表

注册时一次性判断提供者实现了哪些可选接口，请求处理时只查表。
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Type

from pydantic import BaseModel

from .base import ICRUD, IFindAll, IPaginatedFindAll

logger = logging.getLogger(__name__)

RESOURCE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class Capability(str, Enum):
    CRUD = "crud"
    FIND_ALL = "find_all"
    PAGINATED_FIND_ALL = "paginated_find_all"


def resolve_capabilities(provider: object) -> FrozenSet[Capability]:
    """
    判断提供者具备的能力

    异常:
        TypeError: 提供者没有实现 ICRUD
    """
    if not isinstance(provider, ICRUD):
        raise TypeError(f"{type(provider).__name__} must implement ICRUD")

    capabilities = {Capability.CRUD}
    if isinstance(provider, IFindAll):
        capabilities.add(Capability.FIND_ALL)
    if isinstance(provider, IPaginatedFindAll):
        capabilities.add(Capability.PAGINATED_FIND_ALL)
    return frozenset(capabilities)


@dataclass(frozen=True)
class ResourceRegistration:
    """一个已注册的资源类型"""
    name: str
    model: Type[BaseModel]
    provider: ICRUD
    capabilities: FrozenSet[Capability]

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def lists(self) -> bool:
        """是否提供集合查询"""
        return self.supports(Capability.FIND_ALL) or self.supports(Capability.PAGINATED_FIND_ALL)


class ResourceRegistry:
    """资源注册表，按名称保存注册信息"""

    def __init__(self):
        self._resources: Dict[str, ResourceRegistration] = {}

    def register(self, name: str, model: Type[BaseModel], provider: ICRUD) -> ResourceRegistration:
        """
        注册资源

        参数:
            name: 资源名称，同时作为URL路径段
            model: 请求体 data 对应的 pydantic 模型
            provider: 资源提供者

        返回:
            ResourceRegistration: 注册信息

        异常:
            ValueError: 名称非法或重复
            TypeError: 提供者没有实现 ICRUD
        """
        if not RESOURCE_NAME_PATTERN.match(name):
            raise ValueError(f"资源名称不合法: {name!r}")
        if name in self._resources:
            raise ValueError(f"资源已注册: {name}")

        registration = ResourceRegistration(
            name=name,
            model=model,
            provider=provider,
            capabilities=resolve_capabilities(provider),
        )
        self._resources[name] = registration
        logger.info(
            f"注册资源: {name} -> {type(provider).__name__} "
            f"({', '.join(sorted(c.value for c in registration.capabilities))})"
        )
        return registration

    def get(self, name: str) -> ResourceRegistration:
        return self._resources[name]

    def __contains__(self, name: str) -> bool:
        return name in self._resources

    def __iter__(self):
        return iter(self._resources.values())

    def names(self) -> List[str]:
        return list(self._resources.keys())
