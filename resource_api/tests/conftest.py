import os

# 测试使用内存数据库，需在导入配置之前设置
os.environ["DATABASE_URI"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from resource_api.api import API
from resource_api.db.base import Base, build_engine
from resource_api.models import user  # noqa: F401
from resource_api.tests.providers import Item, MemoryResource, make_client


@pytest.fixture
def memory_resource() -> MemoryResource:
    return MemoryResource(count=3)


@pytest.fixture
def api(memory_resource: MemoryResource) -> API:
    api = API(prefix="/api", default_page_size=2, max_page_size=20)
    api.add_resource("items", Item, memory_resource)
    return api


@pytest.fixture
def client(api: API) -> TestClient:
    return make_client(api)


@pytest.fixture
def session_factory():
    """每个测试独立的内存数据库"""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()
