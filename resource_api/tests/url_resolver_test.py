import threading
import time

import pytest
from starlette.requests import Request as StarletteRequest

from resource_api.api import API
from resource_api.infrastructure.resource import HostURLResolver, IRequestAwareURLResolver, StaticURLResolver
from resource_api.tests.providers import Item, MemoryResource, make_client


def make_request(headers=None, scheme="http", server=("example.com", 80)) -> StarletteRequest:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/",
        "query_string": b"",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
        "scheme": scheme,
        "server": server,
    }
    return StarletteRequest(scope)


class RecordingResolver(IRequestAwareURLResolver):
    """记录调用顺序，并按最近一次请求的 Host 返回地址"""

    def __init__(self):
        self.events = []
        self.host = None

    def set_request(self, request):
        self.events.append("set")
        self.host = request.headers.get("host")

    def get_base_url(self):
        self.events.append("get")
        return f"https://{self.host}"


def test_static_resolver_strips_trailing_slash():
    assert StaticURLResolver("https://api.example.com/").get_base_url() == "https://api.example.com"


def test_host_resolver_requires_request():
    with pytest.raises(RuntimeError):
        HostURLResolver().get_base_url()


def test_host_resolver_uses_host_header():
    resolver = HostURLResolver()
    resolver.set_request(make_request({"Host": "customer1.example.com"}))
    assert resolver.get_base_url() == "http://customer1.example.com"


def test_host_resolver_prefers_forwarded_headers():
    resolver = HostURLResolver()
    resolver.set_request(make_request({
        "Host": "internal:8000",
        "X-Forwarded-Proto": "https, http",
        "X-Forwarded-Host": "customer2.example.com",
    }))
    assert resolver.get_base_url() == "https://customer2.example.com"


def test_static_resolver_in_links():
    api = API(prefix="/api", resolver=StaticURLResolver("https://static.example.com"))
    api.add_resource("items", Item, MemoryResource(count=1))
    response = make_client(api).get("/api/items/1")
    assert response.json()["links"]["self"] == "https://static.example.com/api/items/1"


def test_set_request_runs_before_every_get_base_url():
    resolver = RecordingResolver()
    api = API(prefix="/api", resolver=resolver)
    api.add_resource("items", Item, MemoryResource(count=2))
    client = make_client(api)

    first = client.get("/api/items/1", headers={"Host": "customer1.example.com"})
    second = client.get("/api/items/2", headers={"Host": "customer2.example.com"})

    assert first.json()["links"]["self"] == "https://customer1.example.com/api/items/1"
    assert second.json()["links"]["self"] == "https://customer2.example.com/api/items/2"
    assert resolver.events
    assert resolver.events == ["set", "get"] * (len(resolver.events) // 2)


def test_shared_resolver_pairs_do_not_interleave():
    class SlowResolver(RecordingResolver):
        def set_request(self, request):
            super().set_request(request)
            time.sleep(0.001)

    api = API(resolver=SlowResolver())
    mismatches = []

    def worker(index: int):
        host = f"tenant{index}.example.com"
        for _ in range(20):
            if api.base_url(make_request({"Host": host})) != f"https://{host}":
                mismatches.append(host)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(6)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert mismatches == []
